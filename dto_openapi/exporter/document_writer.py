"""Write the OpenAPI document to YAML (and optionally JSON)."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

logger = logging.getLogger(__name__)


class DocumentWriter:
    """Serializes an OpenAPI document to disk."""

    def write(
        self,
        document: Dict[str, Any],
        output_path: Union[str, Path],
        generate_json: bool = False,
    ) -> List[Path]:
        """
        Write the document

        Args:
            document: OpenAPI document
            output_path: YAML output file (parent directories are created)
            generate_json: Also write a `.json` file next to it

        Returns:
            Paths of the written files
        """
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, "w", encoding="utf-8") as f:
            f.write(self.to_yaml(document))
        logger.info(f"Wrote {output_file}")

        written = [output_file]

        if generate_json:
            json_file = self.json_path(output_file)
            with open(json_file, "w", encoding="utf-8") as f:
                f.write(self.to_json(document))
            logger.info(f"Wrote {json_file}")
            written.append(json_file)

        return written

    @staticmethod
    def json_path(output_file: Path) -> Path:
        if output_file.suffix in (".yaml", ".yml"):
            return output_file.with_suffix(".json")
        return output_file.with_name(output_file.name + ".json")

    @staticmethod
    def to_yaml(document: Dict[str, Any]) -> str:
        return yaml.safe_dump(document, sort_keys=False, default_flow_style=False, allow_unicode=True)

    @staticmethod
    def to_json(document: Dict[str, Any]) -> str:
        return json.dumps(document, indent=2, ensure_ascii=False, default=str)
