"""Configuration helpers for time-grid interaction settings."""
from __future__ import annotations

from configparser import ConfigParser, Error
from dataclasses import dataclass, field
import logging
from pathlib import Path
import re

log = logging.getLogger(__name__)

CONFIG_FILENAME = "timegrid.ini"
DEFAULT_PREFIX = "tui-full-calendar-"
DEFAULT_VIEW_ID_PATTERN = r"^{prefix}time-date\stui-view-(\d+)"
SCHEDULE_BLOCK_WRAP = "time-date-schedule-block-wrap"

_CLASSNAMES_SECTION = "classnames"
_TIMING_SECTION = "timing"
_GRID_SECTION = "grid"
_CREATION_SECTION = "creation"


@dataclass(frozen=True)
class ClassNameConfig:
    """Naming scheme used to recognise time-grid column elements."""

    prefix: str = DEFAULT_PREFIX
    view_id_pattern: str = DEFAULT_VIEW_ID_PATTERN
    _view_id_regexp: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        pattern = self.view_id_pattern.replace("{prefix}", re.escape(self.prefix))
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            raise ValueError(f"Invalid view id pattern {self.view_id_pattern!r}: {exc}") from exc
        if compiled.groups < 1:
            raise ValueError(f"View id pattern {self.view_id_pattern!r} has no id group")
        object.__setattr__(self, "_view_id_regexp", compiled)

    def classname(self, name: str) -> str:
        return f"{self.prefix}{name}"

    @property
    def view_id_regexp(self) -> re.Pattern[str]:
        return self._view_id_regexp


@dataclass(frozen=True)
class InteractionSettings:
    class_names: ClassNameConfig = field(default_factory=ClassNameConfig)
    click_delay_ms: int = 0
    slot_minutes: int = 30
    dblclick_create: bool = False

    def __post_init__(self) -> None:
        if self.click_delay_ms < 0:
            raise ValueError("click_delay_ms must not be negative")
        if self.slot_minutes <= 0 or 60 % self.slot_minutes:
            raise ValueError("slot_minutes must evenly divide an hour")


def config_path(directory: Path) -> Path:
    return directory / CONFIG_FILENAME


def _read_int(parser: ConfigParser, section: str, key: str, fallback: int) -> int:
    try:
        return parser.getint(section, key, fallback=fallback)
    except ValueError:
        log.warning("Ignoring invalid %s.%s in interaction settings", section, key)
        return fallback


def _read_bool(parser: ConfigParser, section: str, key: str, fallback: bool) -> bool:
    try:
        return parser.getboolean(section, key, fallback=fallback)
    except ValueError:
        log.warning("Ignoring invalid %s.%s in interaction settings", section, key)
        return fallback


def load_interaction_settings(ini_path: Path) -> InteractionSettings:
    defaults = InteractionSettings()
    if not ini_path.exists():
        return defaults
    parser = ConfigParser(interpolation=None)
    try:
        with ini_path.open("r", encoding="utf-8") as handle:
            parser.read_file(handle)
    except (OSError, Error):
        log.warning("Failed to read interaction settings from %s", ini_path)
        return defaults

    try:
        class_names = ClassNameConfig(
            prefix=parser.get(
                _CLASSNAMES_SECTION, "prefix", fallback=defaults.class_names.prefix
            ),
            view_id_pattern=parser.get(
                _CLASSNAMES_SECTION,
                "view_id_pattern",
                fallback=defaults.class_names.view_id_pattern,
            ),
        )
    except ValueError as exc:
        log.warning("Ignoring invalid class names in interaction settings: %s", exc)
        class_names = defaults.class_names
    click_delay_ms = _read_int(
        parser, _TIMING_SECTION, "click_delay_ms", defaults.click_delay_ms
    )
    slot_minutes = _read_int(parser, _GRID_SECTION, "slot_minutes", defaults.slot_minutes)
    dblclick_create = _read_bool(
        parser, _CREATION_SECTION, "dblclick", defaults.dblclick_create
    )
    try:
        return InteractionSettings(
            class_names=class_names,
            click_delay_ms=click_delay_ms,
            slot_minutes=slot_minutes,
            dblclick_create=dblclick_create,
        )
    except ValueError as exc:
        log.warning("Falling back to default interaction settings: %s", exc)
        return InteractionSettings(class_names=class_names)


def save_interaction_settings(ini_path: Path, settings: InteractionSettings) -> None:
    parser = ConfigParser(interpolation=None)
    if ini_path.exists():
        try:
            with ini_path.open("r", encoding="utf-8") as handle:
                parser.read_file(handle)
        except (OSError, Error):
            parser = ConfigParser(interpolation=None)
    for section in (_CLASSNAMES_SECTION, _TIMING_SECTION, _GRID_SECTION, _CREATION_SECTION):
        if not parser.has_section(section):
            parser.add_section(section)
    parser.set(_CLASSNAMES_SECTION, "prefix", settings.class_names.prefix)
    parser.set(_CLASSNAMES_SECTION, "view_id_pattern", settings.class_names.view_id_pattern)
    parser.set(_TIMING_SECTION, "click_delay_ms", str(settings.click_delay_ms))
    parser.set(_GRID_SECTION, "slot_minutes", str(settings.slot_minutes))
    parser.set(_CREATION_SECTION, "dblclick", "true" if settings.dblclick_create else "false")
    ini_path.parent.mkdir(parents=True, exist_ok=True)
    with ini_path.open("w", encoding="utf-8") as handle:
        parser.write(handle)
