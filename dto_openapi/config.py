"""Generator configuration."""
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_OUTPUT_PATH = "docs/openapi.yaml"
DEFAULT_TAG_SKIP_SEGMENTS = ["Application", "Handler", "Command"]


def _typed(config: Dict[str, Any], key: str, expected: type, default: Any) -> Any:
    """Value of `key` if it has the expected type, else the default"""
    value = config.get(key)
    return value if isinstance(value, expected) else default


@dataclass
class OpenApiConfig:
    """
    OpenAPI document configuration

    Holds the static parts of the document (info, servers, security, tags)
    and output settings. Loaded from a dict or a YAML file.
    """

    info: Dict[str, Any] = field(default_factory=dict)
    servers: List[Dict[str, Any]] = field(default_factory=list)
    security_schemes: Dict[str, Any] = field(default_factory=dict)
    tags: List[Dict[str, Any]] = field(default_factory=list)
    security: List[Dict[str, Any]] = field(default_factory=list)
    output_path: str = DEFAULT_OUTPUT_PATH
    generate_json: bool = True
    tag_skip_segments: List[str] = field(default_factory=lambda: list(DEFAULT_TAG_SKIP_SEGMENTS))
    ambient_types: List[str] = field(default_factory=list)  # module:attr of framework request types

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "OpenApiConfig":
        """Create from a dict (wrong-typed values fall back to defaults)"""
        return cls(
            info=_typed(config, "info", dict, {}),
            servers=_typed(config, "servers", list, []),
            security_schemes=_typed(config, "securitySchemes", dict, {}),
            tags=_typed(config, "tags", list, []),
            security=_typed(config, "security", list, []),
            output_path=_typed(config, "outputPath", str, DEFAULT_OUTPUT_PATH),
            generate_json=_typed(config, "generateJson", bool, True),
            tag_skip_segments=_typed(config, "tagSkipSegments", list, list(DEFAULT_TAG_SKIP_SEGMENTS)),
            ambient_types=_typed(config, "ambientTypes", list, []),
        )

    @classmethod
    def from_yaml_file(cls, path: str) -> "OpenApiConfig":
        """
        Create from a YAML file

        Raises:
            FileNotFoundError: If the file does not exist
            RuntimeError: If the file cannot be read or is not a YAML mapping
        """
        config_file = Path(path)
        if not config_file.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise RuntimeError(f"Failed to read config file {path}: {e}") from e

        if not isinstance(config, dict):
            raise RuntimeError(f"Invalid config file format: {path}")

        return cls.from_dict(config)

    @classmethod
    def default(cls) -> "OpenApiConfig":
        """Default configuration"""
        return cls(
            info={
                "title": "API Documentation",
                "version": "1.0.0",
                "description": "Generated API documentation",
            },
            servers=[
                {"url": "http://localhost:8080", "description": "Local development"},
            ],
        )

    def with_overrides(
        self,
        title: Optional[str] = None,
        version: Optional[str] = None,
        output_path: Optional[str] = None,
        generate_json: Optional[bool] = None,
    ) -> "OpenApiConfig":
        """Copy with command-line overrides applied"""
        info = dict(self.info)
        if title is not None:
            info["title"] = title
        if version is not None:
            info["version"] = version

        return replace(
            self,
            info=info,
            output_path=output_path if output_path is not None else self.output_path,
            generate_json=self.generate_json or bool(generate_json),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "info": self.info,
            "servers": self.servers,
            "securitySchemes": self.security_schemes,
            "tags": self.tags,
            "security": self.security,
            "outputPath": self.output_path,
            "generateJson": self.generate_json,
            "tagSkipSegments": self.tag_skip_segments,
            "ambientTypes": self.ambient_types,
        }


@dataclass
class AppConfig:
    """Application settings."""

    routes: str = ""  # module:attribute of the routing table
    dto_packages: List[str] = field(default_factory=list)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load from environment variables."""
        packages = os.getenv("OPENAPI_DTO_PACKAGES", "")
        return cls(
            routes=os.getenv("OPENAPI_ROUTES", ""),
            dto_packages=[p.strip() for p in packages.split(",") if p.strip()],
            log_level=os.getenv("OPENAPI_LOG_LEVEL", "WARNING").upper(),
        )


# Global instance
app_config = AppConfig.from_env()
