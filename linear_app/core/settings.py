"""Dashboard settings loaded from YAML with explicit defaults."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path

import yaml

from .config import REFRESH_INTERVALS

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.yaml"


@dataclass(slots=True, frozen=True)
class DashboardSettings:
    default_team_id: str | None = None
    # Milliseconds; 0 disables automatic refresh
    refresh_interval: int = REFRESH_INTERVALS["auto"]


DEFAULT_SETTINGS = DashboardSettings()


class SettingsStore:
    """Persist DashboardSettings as a YAML mapping.

    Stored values are merged over DEFAULT_SETTINGS on load, so a file written
    by an older version (or edited by hand) only needs the keys it overrides.
    """

    def __init__(self, path: str | Path | None = None, defaults: DashboardSettings = DEFAULT_SETTINGS):
        self.path = Path(path or Path.cwd() / SETTINGS_FILENAME)
        self.defaults = defaults

    def load(self) -> DashboardSettings:
        if not self.path.exists():
            return self.defaults
        try:
            data = yaml.safe_load(self.path.read_text()) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Failed to read settings %s: %s", self.path, exc)
            return self.defaults
        if not isinstance(data, dict):
            logger.warning("Ignoring settings %s: expected a mapping", self.path)
            return self.defaults
        known = {f.name for f in fields(DashboardSettings)}
        overrides = {k: v for k, v in data.items() if k in known}
        if "refresh_interval" in overrides:
            try:
                overrides["refresh_interval"] = max(int(overrides["refresh_interval"]), 0)
            except (TypeError, ValueError):
                logger.warning("Invalid refresh_interval %r, using default", overrides["refresh_interval"])
                del overrides["refresh_interval"]
        return replace(self.defaults, **overrides)

    def save(self, settings: DashboardSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(yaml.safe_dump(asdict(settings), sort_keys=True))

    def update(self, **changes) -> DashboardSettings:
        """Apply partial changes on top of the stored settings and persist them."""
        settings = replace(self.load(), **changes)
        self.save(settings)
        return settings
