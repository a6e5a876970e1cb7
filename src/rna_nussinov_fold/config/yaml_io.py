from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import yaml


def read_yaml(path: str | Path) -> Dict[str, Any]:
    """
    Read and parse a YAML file.

    Raises
    ------
    ValueError
        If the file is not `.yml`/`.yaml`, is not valid YAML, or its top
        level is not a mapping.
    """
    path_obj = Path(path)
    if path_obj.suffix.lower() not in {".yml", ".yaml"}:
        raise ValueError("Only YAML files are supported.")

    try:
        data = yaml.safe_load(path_obj.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Malformed YAML in {path_obj}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Top level of {path_obj} must be a mapping.")
    return data
