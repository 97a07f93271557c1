"""
Geometry settings: defaults used when a primitive is built without
explicit parameters.

Settings can be stored in a JSON file and loaded at startup.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional

from shapegeo import log


@dataclass
class SphereDefaults:
    """
    Default sphere tessellation parameters.

    - radius: Sphere radius
    - horizontal_segments: Longitude divisions
    - vertical_segments: Latitude divisions
    - alpha_start, alpha_range: Longitude sweep in radians
    - theta_start, theta_range: Latitude sweep in radians
    """

    radius: float = 1.0
    horizontal_segments: int = 8
    vertical_segments: int = 6
    alpha_start: float = 0.0
    alpha_range: float = math.pi * 2
    theta_start: float = 0.0
    theta_range: float = math.pi

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return asdict(self)

    @staticmethod
    def from_dict(data: dict) -> "SphereDefaults":
        """Deserialize from dictionary. Raises ValueError/TypeError on wrongly typed values."""
        return SphereDefaults(
            radius=float(data.get("radius", 1.0)),
            horizontal_segments=int(data.get("horizontal_segments", 8)),
            vertical_segments=int(data.get("vertical_segments", 6)),
            alpha_start=float(data.get("alpha_start", 0.0)),
            alpha_range=float(data.get("alpha_range", math.pi * 2)),
            theta_start=float(data.get("theta_start", 0.0)),
            theta_range=float(data.get("theta_range", math.pi)),
        )


@dataclass
class GeometrySettings:
    """Global geometry generation settings."""

    sphere: SphereDefaults = field(default_factory=SphereDefaults)
    # coordinates below this magnitude are written as exact zero
    snap_epsilon: float = 1e-6

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "sphere": self.sphere.to_dict(),
            "snap_epsilon": self.snap_epsilon,
        }

    @staticmethod
    def from_dict(data: dict) -> "GeometrySettings":
        """Deserialize from dictionary."""
        return GeometrySettings(
            sphere=SphereDefaults.from_dict(data.get("sphere", {})),
            snap_epsilon=float(data.get("snap_epsilon", 1e-6)),
        )


class GeometrySettingsManager:
    """
    Singleton manager for geometry settings.

    Handles loading/saving settings from a JSON file.
    """

    _instance: Optional["GeometrySettingsManager"] = None
    _settings: GeometrySettings

    def __init__(self) -> None:
        self._settings = GeometrySettings()

    @classmethod
    def instance(cls) -> "GeometrySettingsManager":
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = GeometrySettingsManager()
        return cls._instance

    @property
    def settings(self) -> GeometrySettings:
        """Get current geometry settings."""
        return self._settings

    def reset(self) -> None:
        """Restore built-in defaults."""
        self._settings = GeometrySettings()

    def load(self, path: Path) -> GeometrySettings:
        """Load settings from file. Falls back to defaults on any failure."""
        path = Path(path)
        if not path.exists():
            log.warn(f"[GeometrySettings] No settings file at {path}, using defaults")
            self._settings = GeometrySettings()
            return self._settings

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._settings = GeometrySettings.from_dict(data)
            log.info(f"[GeometrySettings] Loaded from {path}")
        except (OSError, ValueError, TypeError, AttributeError, OverflowError) as e:
            log.error(f"[GeometrySettings] Failed to load settings: {e}")
            self._settings = GeometrySettings()
        return self._settings

    def save(self, path: Path) -> bool:
        """Save settings to file."""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self._settings.to_dict(), f, indent=2)
            log.info(f"[GeometrySettings] Saved to {path}")
            return True
        except OSError as e:
            log.error(f"[GeometrySettings] Failed to save settings: {e}")
            return False


def current_settings() -> GeometrySettings:
    """Shortcut for GeometrySettingsManager.instance().settings."""
    return GeometrySettingsManager.instance().settings
