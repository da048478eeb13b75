from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.json"


@dataclass(frozen=True)
class GameConfig:
    """Session configuration, immutable once a game is built.

    ``colored_board`` is only a hint for renderers: the engine always keeps
    per-cell colour and a renderer may flatten it.
    """

    colored_board: bool = True
    modern_piece_rng: bool = True
    bag_amount: int = 5
    first_piece_no_overhang: bool = True
    holding_enabled: bool = True
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.bag_amount < 1:
            object.__setattr__(self, "bag_amount", 1)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "GameConfig":
        """Build a config from parsed JSON, ignoring unknown keys."""
        values = {}
        for f in fields(cls):
            if f.name not in raw:
                continue
            value = raw[f.name]
            if f.name in ("bag_amount", "random_seed"):
                if value is None and f.name == "random_seed":
                    values[f.name] = None
                    continue
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError(f"{f.name} must be an integer, got {value!r}")
            elif not isinstance(value, bool):
                raise ValueError(f"{f.name} must be a boolean, got {value!r}")
            values[f.name] = value
        return cls(**values)

    def with_seed(self, seed: Optional[int]) -> "GameConfig":
        return replace(self, random_seed=seed)


def load_config(config_path: Optional[Union[str, Path]] = None) -> GameConfig:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the JSON file. Defaults to ``config.json`` in the
            working directory.

    Returns:
        GameConfig with defaults for every missing field. A missing file
        yields the default configuration.

    Raises:
        ValueError: If the file is not a JSON object or a field has the
            wrong type.
    """
    path = Path(config_path if config_path is not None else DEFAULT_CONFIG_PATH)
    if not path.exists():
        logger.info("No config file at %s, using default settings", path)
        return GameConfig()

    with open(path, "r") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Config root must be an object, got {type(raw).__name__}")
    return GameConfig.from_dict(raw)
