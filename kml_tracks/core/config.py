"""Viewer configuration loaded from environment variables.

All values have defaults matching the stock viewer. ``from_env()``
raises ``ConfigValidationError`` if any value is out of its valid range,
so bad configuration is caught before the first load.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from kml_tracks.core.constants import DEFAULT_ICON_BASE_SIZE
from kml_tracks.core.exceptions import ValidationError

MIN_ICON_SCALE = 0.5
MAX_ICON_SCALE = 3.0


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class TracksConfig:
    """Immutable loader and display configuration.

    Attributes:
        default_kml_url: KML location loaded by ``KmlLoader.load_default()``.
        http_timeout_s: Timeout for network fetches, in seconds.
        icon_base_size: Unscaled icon size in pixels (KML ``scale`` multiplies it).
        icon_scale: User icon scale multiplier applied by the renderer.
        track_color: Line colour for tracks.
        track_weight: Line thickness in pixels.
        track_opacity: Line opacity percentage.
    """

    default_kml_url: str = ""
    http_timeout_s: float = 30.0
    icon_base_size: float = DEFAULT_ICON_BASE_SIZE
    icon_scale: float = 2.0
    track_color: str = "#e20074"
    track_weight: float = 10.0
    track_opacity: float = 100.0

    @property
    def default_icon_size(self) -> tuple[float, float]:
        """Icon size a renderer uses when the KML gives no ``scale``."""
        return (self.icon_base_size, self.icon_base_size)

    @property
    def default_icon_anchor(self) -> tuple[float, float]:
        return (self.icon_base_size / 2, self.icon_base_size / 2)

    @classmethod
    def from_env(cls) -> TracksConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``ICON_SCALE=abc``).
        """
        config = cls(
            default_kml_url=os.getenv("KML_DEFAULT_URL", ""),
            http_timeout_s=float(os.getenv("KML_HTTP_TIMEOUT_S", "30")),
            icon_base_size=float(os.getenv("ICON_BASE_SIZE", str(DEFAULT_ICON_BASE_SIZE))),
            icon_scale=float(os.getenv("ICON_SCALE", "2.0")),
            track_color=os.getenv("TRACK_COLOR", "#e20074"),
            track_weight=float(os.getenv("TRACK_WEIGHT", "10")),
            track_opacity=float(os.getenv("TRACK_OPACITY", "100")),
        )
        _validate(config)
        return config


def _validate(config: TracksConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.http_timeout_s <= 0:
        raise ConfigValidationError(
            "KML_HTTP_TIMEOUT_S",
            config.http_timeout_s,
            "must be > 0 (seconds)",
        )

    if config.icon_base_size <= 0:
        raise ConfigValidationError(
            "ICON_BASE_SIZE",
            config.icon_base_size,
            "must be > 0 (pixels)",
        )

    if not MIN_ICON_SCALE <= config.icon_scale <= MAX_ICON_SCALE:
        raise ConfigValidationError(
            "ICON_SCALE",
            config.icon_scale,
            f"must be between {MIN_ICON_SCALE} and {MAX_ICON_SCALE}",
        )

    if not config.track_color:
        raise ConfigValidationError(
            "TRACK_COLOR",
            config.track_color,
            "must not be empty",
        )

    if config.track_weight <= 0:
        raise ConfigValidationError(
            "TRACK_WEIGHT",
            config.track_weight,
            "must be > 0 (pixels)",
        )

    if not 0.0 <= config.track_opacity <= 100.0:
        raise ConfigValidationError(
            "TRACK_OPACITY",
            config.track_opacity,
            "must be between 0 and 100 (percentage)",
        )
