"""Global settings for the tide curve view."""

from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
import yaml

from .constants import (
    HOUR,
    MINUTE,
    MAX_SCRUB_OFFSET_SECONDS,
    PAST_HORIZON_SECONDS,
    FUTURE_HORIZON_SECONDS,
    SAMPLE_STEP_SECONDS,
    CACHE_TTL_SECONDS,
    HALF_CYCLE_HOURS,
    LEVEL_PADDING_FALLBACK,
    LEVEL_PADDING_FRACTION,
    SNAPBACK_DURATION,
    SNAPBACK_IDLE_DELAY,
    THEME_BUCKET_SIZE,
    WHEEL_FACTOR,
)

@dataclass
class DisplaySettings:
    """Display and window settings."""
    window_width: int = 1280
    window_height: int = 720
    dpr: float = 1.0
    fps_target: int = 30
    poll_rate: int = 60  # Event loop wakeups per second
    title: str = "TideCurve"

@dataclass
class CurveSettings:
    """Curve geometry and sampling."""
    past_hours: float = PAST_HORIZON_SECONDS / HOUR
    future_hours: float = FUTURE_HORIZON_SECONDS / HOUR
    height_fraction: float = 0.15  # Bottom slice of the surface
    padding_x: float = 60.0
    bottom_margin: float = 20.0
    sample_step_minutes: float = SAMPLE_STEP_SECONDS / MINUTE
    half_cycle_hours: float = HALF_CYCLE_HOURS
    level_padding_fraction: float = LEVEL_PADDING_FRACTION
    level_padding_fallback: float = LEVEL_PADDING_FALLBACK
    label_margin: float = 20.0
    min_label_spacing: float = 60.0
    font_size: int = 14

    @property
    def past_seconds(self) -> float:
        return self.past_hours * HOUR

    @property
    def future_seconds(self) -> float:
        return self.future_hours * HOUR

    @property
    def sample_step_seconds(self) -> float:
        return self.sample_step_minutes * MINUTE

    @property
    def half_cycle_seconds(self) -> float:
        return self.half_cycle_hours * HOUR

@dataclass
class CacheSettings:
    """Static layer cache invalidation."""
    ttl_seconds: float = CACHE_TTL_SECONDS
    theme_bucket_size: float = THEME_BUCKET_SIZE

@dataclass
class ScrubSettings:
    """Time scrubbing behaviour."""
    max_offset_hours: float = MAX_SCRUB_OFFSET_SECONDS / HOUR
    idle_delay: float = SNAPBACK_IDLE_DELAY
    snapback_duration: float = SNAPBACK_DURATION
    wheel_factor: float = WHEEL_FACTOR
    wheel_pixels_per_tick: float = 40.0

    @property
    def max_offset_seconds(self) -> float:
        return self.max_offset_hours * HOUR

@dataclass
class ThemeSettings:
    """Dark/light theme blending."""
    initial: str = "dark"
    transition_seconds: float = 0.8

@dataclass
class Settings:
    """Main settings container."""
    display: DisplaySettings = field(default_factory=DisplaySettings)
    curve: CurveSettings = field(default_factory=CurveSettings)
    cache: CacheSettings = field(default_factory=CacheSettings)
    scrub: ScrubSettings = field(default_factory=ScrubSettings)
    theme: ThemeSettings = field(default_factory=ThemeSettings)

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Settings":
        """Load settings from YAML file, falling back to defaults."""
        settings = cls()

        if config_path and config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}

            for section in fields(settings):
                section_data = data.get(section.name)
                if not isinstance(section_data, dict):
                    continue
                current = getattr(settings, section.name)
                known = {f.name for f in fields(current)}
                for key, value in section_data.items():
                    # Derived properties are read-only; only fields load
                    if key in known:
                        setattr(current, key, value)

        return settings

    def save(self, config_path: Path) -> None:
        """Save current settings to YAML file."""
        data = asdict(self)

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

_settings: Settings | None = None

def get_settings() -> Settings:
    """Get global settings instance."""
    global _settings
    if _settings is None:
        config_path = Path(__file__).parent / "tidecurve.yaml"
        _settings = Settings.load(config_path)
    return _settings
