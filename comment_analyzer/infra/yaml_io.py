# comment_analyzer/infra/yaml_io.py
from pathlib import Path
from typing import Any
import yaml

from comment_analyzer.exceptions import LexiconLoadError


def load_yaml(path: Path) -> Any:
    """Load a YAML file and return the Python object."""
    if not path.exists():
        raise LexiconLoadError(f"YAML file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LexiconLoadError(f"YAML file could not be parsed: {path}: {e}") from e


def save_yaml(path: Path, data: Any) -> None:
    """Dump a Python object to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)
