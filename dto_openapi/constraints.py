"""
Constraint tags - declarative validation markers attached to DTO fields.

Tags are never executed. They are translated into OpenAPI schema keywords by
the ConstraintExtractor. Attach them with typing.Annotated:

```python
@dataclass
class CreateItemRequest:
    name: Annotated[str, NotEmpty(), Length(min=3, max=100)]
    email: Annotated[str, IsEmail()]
```

or through dataclass field metadata:

```python
    age: int = field(metadata={"constraints": [Range(min=18, max=120)]})
```
"""

from dataclasses import dataclass
from typing import Optional, Union

Number = Union[int, float]


class ConstraintTag:
    """Base class for all constraint tags"""


@dataclass(frozen=True)
class NotEmpty(ConstraintTag):
    """Field must be present and non-blank (marks the property as required)"""


@dataclass(frozen=True)
class IsUuid(ConstraintTag):
    """Field holds a UUID string"""


@dataclass(frozen=True)
class Length(ConstraintTag):
    """String length bounds"""
    min: Optional[int] = None
    max: Optional[int] = None


@dataclass(frozen=True)
class Range(ConstraintTag):
    """Numeric value bounds"""
    min: Optional[Number] = None
    max: Optional[Number] = None


@dataclass(frozen=True)
class IsEmail(ConstraintTag):
    """Field holds an e-mail address"""


@dataclass(frozen=True)
class IsUrl(ConstraintTag):
    """Field holds a URL"""


@dataclass(frozen=True)
class Pattern(ConstraintTag):
    """Field must match a regular expression"""
    regex: str = ""


__all__ = [
    "ConstraintTag",
    "NotEmpty",
    "IsUuid",
    "Length",
    "Range",
    "IsEmail",
    "IsUrl",
    "Pattern",
]
