"""
FILE: taskboard/config.py
PURPOSE: Runtime configuration and logging setup
EXPORTS:
  - BoardConfig (dataclass)
  - load_config(path) -> BoardConfig
  - setup_logging(verbose, console) -> None
DEPENDENCIES:
  - pyyaml (config file)
  - rich (log handler)
  - taskboard.core (constants, models, layout)
NOTES:
  - Config file: ~/.taskboard/config.yaml (missing file = defaults)
  - Unknown keys are ignored; missing keys keep their defaults
  - wip_limits keys may be any status synonym ("done", "in progress", ...)
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Optional

import yaml
from rich.console import Console
from rich.logging import RichHandler

from .core.constants import DEFAULT_ACTIVATION_DISTANCE, DEFAULT_PERSIST_TIMEOUT
from .core.exceptions import InvalidInputError
from .core.layout import BoardLayout
from .core.models import Column
from .core.status import to_column, is_known_status

CONFIG_PATH = Path.home() / ".taskboard" / "config.yaml"


@dataclass
class BoardConfig:
    """Runtime configuration for the board."""

    # None keeps the repository default (~/.taskboard/taskboard.db)
    db_path: Optional[str] = None

    # Gestures
    activation_distance: float = DEFAULT_ACTIVATION_DISTANCE

    # Seconds to wait for a status update before reconciling
    persist_timeout: Optional[float] = DEFAULT_PERSIST_TIMEOUT

    # Column name -> max tasks
    wip_limits: Dict[str, int] = field(default_factory=dict)

    layout: BoardLayout = field(default_factory=BoardLayout)

    def column_limits(self) -> Dict[Column, int]:
        """wip_limits keyed by Column."""
        if not isinstance(self.wip_limits, dict):
            raise InvalidInputError("wip_limits must map column names to limits")
        limits = {}
        for name, limit in self.wip_limits.items():
            if not is_known_status(name):
                raise InvalidInputError(f"Unknown column '{name}' in wip_limits")
            # YAML loads yes/true as bool
            if isinstance(limit, bool):
                raise InvalidInputError(f"WIP limit for '{name}' must be an integer")
            try:
                value = int(limit)
            except (TypeError, ValueError):
                raise InvalidInputError(f"WIP limit for '{name}' must be an integer")
            if value < 1:
                raise InvalidInputError(f"WIP limit for '{name}' must be at least 1")
            limits[to_column(name)] = value
        return limits

    @property
    def database(self) -> Optional[Path]:
        return Path(self.db_path).expanduser() if self.db_path else None


def load_config(path: Optional[Path] = None) -> BoardConfig:
    """
    Load configuration from YAML.

    Args:
        path: Config file; defaults to ~/.taskboard/config.yaml

    Returns:
        BoardConfig with file values applied over the defaults
    """
    path = Path(path) if path else CONFIG_PATH
    if not path.exists():
        return BoardConfig()

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise InvalidInputError(f"Could not parse {path}: {e}")
    if not isinstance(data, dict):
        raise InvalidInputError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(BoardConfig)}
    values = {k: v for k, v in data.items() if k in known and k != "layout"}

    for key in ("wip_limits", "layout"):
        if data.get(key) is not None and not isinstance(data[key], dict):
            raise InvalidInputError(f"'{key}' in {path} must be a mapping")
    if values.get("wip_limits") is None:
        values.pop("wip_limits", None)
    for key in ("activation_distance", "persist_timeout"):
        if key not in values:
            continue
        value = values[key]
        # null persist_timeout disables the timeout
        if value is None and key == "persist_timeout":
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(f"'{key}' in {path} must be a number")

    layout_data = data.get("layout") or {}
    layout_values = {}
    for f in fields(BoardLayout):
        if f.name not in layout_data:
            continue
        value = layout_data[f.name]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(f"layout.{f.name} in {path} must be a number")
        layout_values[f.name] = value
    values["layout"] = BoardLayout(**layout_values)

    return BoardConfig(**values)


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration.

    Args:
        verbose: Enable debug logging
        console: Console to log to (defaults to stderr)
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console or Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )
