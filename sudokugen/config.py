"""Configuration management for sudokugen runs."""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .data.base import require_square_sudoku

SUPPORTED_SIZES = (4, 9, 16)

# Counting cost explodes on 16x16 boards; cap the number of blanks.
DEFAULT_MAX_EMPTY_16 = 130


def default_max_empty(size: int) -> int:
    """Removal ceiling used when none is configured."""
    if size >= 16:
        return DEFAULT_MAX_EMPTY_16
    return size * size


@dataclass
class BoardConfig:
    """Board geometry."""

    size: int = 9

    def __post_init__(self) -> None:
        require_square_sudoku(self.size)
        if self.size not in SUPPORTED_SIZES:
            raise ValueError(f"size must be one of {SUPPORTED_SIZES}; got {self.size}")

    @property
    def box(self) -> int:
        return require_square_sudoku(self.size)


@dataclass
class GeneratorConfig:
    """Puzzle generation configuration."""

    max_empty: int | None = None  # None = default for the board size
    early_exit: bool = True  # stop counting at 2 solutions during removal checks

    def __post_init__(self) -> None:
        if self.max_empty is not None and self.max_empty < 0:
            raise ValueError(f"max_empty must be non-negative; got {self.max_empty}")


@dataclass
class SolverConfig:
    """Search limits."""

    max_steps: int | None = None  # None = unbounded

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps <= 0:
            raise ValueError(f"max_steps must be positive; got {self.max_steps}")


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    log_file: str | None = None

    def __post_init__(self) -> None:
        self.level = str(self.level).upper()
        if not isinstance(logging.getLevelName(self.level), int):
            raise ValueError(f"Unknown log level: {self.level}")


CONFIG_SECTIONS = {
    "board": BoardConfig,
    "generator": GeneratorConfig,
    "solver": SolverConfig,
    "logging": LoggingConfig,
}


@dataclass
class Config:
    """Complete run configuration."""

    board: BoardConfig = field(default_factory=BoardConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    seed: int | None = None

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            raw = yaml.safe_load(f) or {}

        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Build a config from nested dicts; missing sections keep their defaults."""
        config = cls()
        for key, section_cls in CONFIG_SECTIONS.items():
            if key in data:
                setattr(config, key, section_cls(**(data[key] or {})))
        if "seed" in data:
            config.seed = data["seed"]
        return config

    def to_dict(self) -> dict[str, Any]:
        """Nested plain-dict form, as written by `save`."""
        data: dict[str, Any] = {key: asdict(getattr(self, key)) for key in CONFIG_SECTIONS}
        data["seed"] = self.seed
        return data

    def save(self, path: str | Path) -> None:
        """Write the config as YAML, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def load_config(path: str | Path | None = None) -> Config:
    """
    Load configuration from file or return defaults.

    Args:
        path: Path to YAML config file. If None, returns default config.

    Returns:
        Configuration object.
    """
    if path is None:
        return Config()
    return Config.from_yaml(path)


def merge_configs(base: Config, overrides: dict[str, Any]) -> Config:
    """
    Merge override values into a base configuration.

    Args:
        base: Base configuration.
        overrides: Dictionary of override values.

    Returns:
        New configuration with overrides applied.
    """
    base_dict = base.to_dict()

    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base_dict.get(key), dict):
            base_dict[key].update(value)
        else:
            base_dict[key] = value

    return Config.from_dict(base_dict)
