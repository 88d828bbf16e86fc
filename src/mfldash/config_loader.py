"""Persist and load CLI valuation settings profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from mfldash.models import ValuationSettings


@dataclass
class SettingsProfile:
    """Named valuation settings stored side by side in one JSON file."""

    profiles: Dict[str, ValuationSettings] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "SettingsProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        raw_profiles = data.get("profiles", {})
        return cls(
            profiles={name: ValuationSettings.model_validate(raw) for name, raw in raw_profiles.items()},
        )

    def save(self, path: Path) -> None:
        payload = {
            "profiles": {name: settings.model_dump(mode="json") for name, settings in self.profiles.items()},
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def get(self, name: str) -> ValuationSettings:
        try:
            return self.profiles[name]
        except KeyError:
            raise KeyError(f"Unknown settings profile '{name}'") from None

    def put(self, name: str, settings: ValuationSettings) -> None:
        self.profiles[name] = settings


def load_settings(
    path: Optional[Path],
    *,
    profile: str = "default",
    overrides: Optional[Dict[str, Any]] = None,
) -> ValuationSettings:
    """Resolve settings from an optional profile file plus explicit overrides."""

    base = SettingsProfile.load(path).get(profile) if path is not None else ValuationSettings()
    overrides = {key: value for key, value in (overrides or {}).items() if value is not None}
    if not overrides:
        return base
    return ValuationSettings.model_validate({**base.model_dump(), **overrides})
