"""
Constraint Extractor - translates constraint tags into OpenAPI keywords.

| Tag | Effect |
|---|---|
| NotEmpty | required |
| IsUuid | format: uuid |
| Length | minLength / maxLength |
| Range | minimum / maximum |
| IsEmail | format: email |
| IsUrl | format: uri |
| Pattern | pattern |
"""

from typing import Any, Dict, Iterable, Tuple

from dto_openapi.constraints import (
    IsEmail,
    IsUrl,
    IsUuid,
    Length,
    NotEmpty,
    Pattern,
    Range,
)


class ConstraintExtractor:
    """Applies constraint tags to a schema fragment"""

    def apply_constraints(
        self,
        tags: Iterable[Any],
        schema: Dict[str, Any],
        required: bool = False,
    ) -> Tuple[Dict[str, Any], bool]:
        """
        Merge constraint tags into a schema fragment

        Unknown tags are ignored. Absent bounds are omitted.

        Args:
            tags: Constraint tags attached to the field
            schema: Fragment to extend (left untouched, a copy is returned)
            required: Current required flag

        Returns:
            Tuple of (updated fragment, updated required flag)
        """
        schema = dict(schema)

        for tag in tags:
            if isinstance(tag, NotEmpty):
                required = True
            elif isinstance(tag, IsUuid):
                schema["format"] = "uuid"
            elif isinstance(tag, Length):
                if tag.min is not None:
                    schema["minLength"] = tag.min
                if tag.max is not None:
                    schema["maxLength"] = tag.max
            elif isinstance(tag, Range):
                if tag.min is not None:
                    schema["minimum"] = tag.min
                if tag.max is not None:
                    schema["maximum"] = tag.max
            elif isinstance(tag, IsEmail):
                schema["format"] = "email"
            elif isinstance(tag, IsUrl):
                schema["format"] = "uri"
            elif isinstance(tag, Pattern):
                schema["pattern"] = tag.regex

        return schema, required

    @staticmethod
    def has_uuid_constraint(tags: Iterable[Any]) -> bool:
        return any(isinstance(tag, IsUuid) for tag in tags)
