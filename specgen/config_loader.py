"""Load generator configuration from config/special_types.yaml."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from specgen.parse.models import GeneratorConfig, SpecialType

# Project root: assume this file is in specgen/
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_CONFIG_PATH = _PROJECT_ROOT / "config" / "special_types.yaml"

# Used when no configuration file is present
DEFAULT_SPECIAL_TYPES: List[Dict[str, str]] = [
    {"name": "Definitions", "type": "dict[str, Schema]"},
    {"name": "Example", "type": "dict[str, Any]"},
    {"name": "Paths", "type": "dict[str, PathItem]"},
    {"name": "ParametersDefinitions", "type": "dict[str, Parameter]"},
    {"name": "Responses", "type": "dict[str, Response]"},
    {"name": "ResponsesDefinitions", "type": "dict[str, Response]"},
    {"name": "Scopes", "type": "dict[str, str]"},
    {"name": "SecurityDefinitions", "type": "dict[str, SecurityScheme]"},
    {"name": "SecurityRequirement", "type": "dict[str, list[str]]"},
    {"name": "Headers", "type": "dict[str, Header]"},
]


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return data


def load_generator_config(path: Optional[Path] = None) -> GeneratorConfig:
    """Load settings from config/special_types.yaml (or the given path).

    An explicit path must exist. When the default file is missing the
    built-in special types are used.
    """
    if path is not None and not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    p = path or _CONFIG_PATH
    data: Dict[str, Any] = _read_yaml(p) if p.exists() else {}
    if "special_types" not in data:
        data["special_types"] = DEFAULT_SPECIAL_TYPES
    return GeneratorConfig(**data)


def special_type_names(special_types: List[SpecialType]) -> List[str]:
    return [t.name for t in special_types]
