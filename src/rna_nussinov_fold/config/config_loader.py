from __future__ import annotations
from importlib.resources import files as importlib_files
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import logging

from rna_nussinov_fold.config.yaml_io import read_yaml
from rna_nussinov_fold.folding.nussinov_recurrences import NussinovFoldingConfig

logger = logging.getLogger(__name__)

_FOLDING_TYPES: Dict[str, type] = {
    "min_loop_length": int,
    "fill_order": str,
    "verbose": bool,
}
_FOLDING_KEYS = frozenset(_FOLDING_TYPES)


def default_config_path() -> Path:
    """Path of the folding parameters bundled with the package."""
    return Path(str(importlib_files("rna_nussinov_fold") / "data" / "nussinov_default.yaml"))


class NussinovConfigLoader:
    """
    Loads folding settings from a YAML file into a `NussinovFoldingConfig`.

    The file is expected to hold a `folding` mapping. Any key left out keeps
    the dataclass default; unknown keys are rejected so typos surface early.
    """
    def load(self, yaml_path: str | Path | None = None, **overrides: Any) -> NussinovFoldingConfig:
        """
        Builds a folding configuration.

        Parameters
        ----------
        yaml_path : str | Path | None
            The YAML file to read. `None` selects the bundled default.
        **overrides
            Values that replace the ones read from the file. `None` values
            are ignored so CLI flags can be passed straight through.

        Returns
        -------
        NussinovFoldingConfig
            The validated configuration.

        Raises
        ------
        ValueError
            If the file is not YAML, the `folding` node is not a mapping, a
            key is unknown, or a value is out of range.
        """
        if yaml_path is None:
            yaml_path = default_config_path()

        logger.info(f"Loading folding configuration from: {yaml_path}")
        data = read_yaml(yaml_path)
        settings = self._parse_folding_block(data)

        for key, value in overrides.items():
            if value is None:
                continue
            if key not in _FOLDING_KEYS:
                raise ValueError(f"Unknown folding override {key!r}.")
            settings[key] = value

        logger.debug(f"Folding settings: {settings}")
        return NussinovFoldingConfig(**settings)

    @staticmethod
    def _parse_folding_block(data: Mapping[str, Any]) -> Dict[str, Any]:
        node: Optional[Any] = data.get("folding")
        if node is None:
            return {}
        if not isinstance(node, dict):
            raise ValueError("YAML 'folding' entry must be a mapping.")

        unknown = set(node) - _FOLDING_KEYS
        if unknown:
            raise ValueError(f"Unknown folding keys: {sorted(map(str, unknown))}")

        settings: Dict[str, Any] = {}
        for key, value in node.items():
            expected = _FOLDING_TYPES[key]
            # Bools are not accepted as ints.
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                raise ValueError(
                    f"Folding key {key!r} must be of type {expected.__name__}, "
                    f"got {type(value).__name__} ({value!r})."
                )
            settings[key] = value
        return settings
