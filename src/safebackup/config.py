"""Settings for the safebackup front ends.

Precedence, lowest first: defaults, a YAML config file, command-line flags.
The YAML file is ``safebackup.yaml`` in the sandbox root when present, or
whatever ``--config`` names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .actionlog import LOG_FILE_NAME
from .errors import ConfigError, PathError
from .paths import MAX_NAME_LENGTH, PathSanitizer

__all__ = [
    "CONFIG_FILE_NAME",
    "REPORTERS",
    "Settings",
    "load_settings",
]

CONFIG_FILE_NAME = "safebackup.yaml"
REPORTERS = ("plain", "rich", "json", "silent")

# key -> accepted type
_FILE_KEYS = {
    "log_file": str,
    "max_name_length": int,
    "reporter": str,
}


@dataclass(slots=True)
class Settings:
    root: Path = field(default_factory=Path.cwd)
    log_file: str = LOG_FILE_NAME
    max_name_length: int = MAX_NAME_LENGTH
    reporter: str = "plain"
    # Config file that contributed values, if any
    source: Optional[Path] = None

    def resolve_log_path(self) -> Path:
        """The action log path; it must satisfy the same sandbox rules."""
        try:
            return PathSanitizer(self.root).sanitize(self.log_file)
        except PathError as exc:
            raise ConfigError(
                f"log_file {self.log_file!r} rejected: {exc}", self.source
            ) from exc


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config: {exc}", path) from exc
    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML: {exc}", path) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("root of config must be a mapping", path)
    return data


def _apply(settings: Settings, values: Mapping[str, Any], source: Optional[Path]):
    for key, value in values.items():
        expected = _FILE_KEYS.get(key)
        if expected is None:
            raise ConfigError(f"unknown setting '{key}'", source)
        # bool is an int subclass; reject it explicitly
        if not isinstance(value, expected) or isinstance(value, bool):
            raise ConfigError(
                f"setting '{key}' must be {expected.__name__}", source
            )
        setattr(settings, key, value)


def _validate(settings: Settings) -> None:
    if settings.reporter not in REPORTERS:
        raise ConfigError(
            f"reporter must be one of {', '.join(REPORTERS)}", settings.source
        )
    if not 0 < settings.max_name_length <= MAX_NAME_LENGTH:
        raise ConfigError(
            f"max_name_length must be between 1 and {MAX_NAME_LENGTH}",
            settings.source,
        )


def load_settings(
    root: Optional[Path] = None,
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Settings:
    """Build :class:`Settings` from defaults, config file and overrides.

    ``None`` values in ``overrides`` are ignored so argparse namespaces can
    be passed through directly.
    """
    root_dir = Path(root) if root is not None else Path.cwd()
    if not root_dir.is_dir():
        raise ConfigError(f"root is not a directory: {root_dir}")
    settings = Settings(root=root_dir.resolve())

    if config_path is not None:
        source: Optional[Path] = Path(config_path)
        if not source.is_file():
            raise ConfigError("config file not found", source)
    else:
        default = settings.root / CONFIG_FILE_NAME
        source = default if default.is_file() else None

    if source is not None:
        settings.source = source
        _apply(settings, _read_config_file(source), source)

    if overrides:
        _apply(
            settings,
            {k: v for k, v in overrides.items() if v is not None},
            None,
        )
    _validate(settings)
    return settings
