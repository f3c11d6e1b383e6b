"""Load, validate, and hot-reload the symptom tracker configuration.

The config lives in ``tracker_config.yaml`` alongside this module.  It is
loaded once on first use and cached.  ``reload_tracker_config()`` re-reads it
from disk without a restart.

Usage::

    from src.symptoms.config_loader import get_tracker_config

    config = get_tracker_config()
    config.windows.symptom_chart                # 30
    config.dashboard.highlight_symptoms         # ['stress', 'bloating']
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.symptoms.entry import SYMPTOM_KEYS, UnknownSymptomError, wire_symptom_key

logger = logging.getLogger("pcos_tracker.symptoms.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "tracker_config.yaml"

DEFAULT_SYMPTOM_CHART_WINDOW = 30
DEFAULT_OVERVIEW_CHART_WINDOW = 14
DEFAULT_DASHBOARD_RECENT = 7
DEFAULT_HIGHLIGHT_SYMPTOMS = ("stress", "bloating")


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class WindowConfig:
    """Trailing window sizes, in number of most-recent entries."""

    symptom_chart: int = DEFAULT_SYMPTOM_CHART_WINDOW
    overview_chart: int = DEFAULT_OVERVIEW_CHART_WINDOW
    dashboard_recent: int = DEFAULT_DASHBOARD_RECENT


@dataclass
class DashboardConfig:
    """Dashboard summary settings."""

    highlight_symptoms: list[str] = field(
        default_factory=lambda: list(DEFAULT_HIGHLIGHT_SYMPTOMS)
    )


@dataclass
class TrackerConfig:
    """Complete, validated tracker configuration.

    Attributes:
        version:    Config schema version string.
        windows:    Trailing window sizes for charts and the dashboard.
        dashboard:  Dashboard summary settings.
    """

    version: str = "1.0"
    windows: WindowConfig = field(default_factory=WindowConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    _raw: dict = field(default_factory=dict, repr=False)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when tracker_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Tracker config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _validate_and_build(raw: dict) -> TrackerConfig:
    """Validate the raw YAML dict and construct a TrackerConfig.

    Every problem is collected before raising, so one error message lists
    them all.

    Raises:
        ConfigValidationError: If any value is missing its expected shape.
    """
    errors: list[str] = []

    version = str(raw.get("version", "1.0"))

    # ── Windows ──
    windows_raw = raw.get("windows") or {}
    if not isinstance(windows_raw, dict):
        errors.append("'windows' must be a mapping")
        windows_raw = {}

    def _window(key: str, default: int) -> int:
        value: Any = windows_raw.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"windows.{key} must be an integer, got {value!r}")
            return default
        if value < 1:
            errors.append(f"windows.{key} = {value} must be at least 1")
            return default
        return value

    windows = WindowConfig(
        symptom_chart=_window("symptom_chart", DEFAULT_SYMPTOM_CHART_WINDOW),
        overview_chart=_window("overview_chart", DEFAULT_OVERVIEW_CHART_WINDOW),
        dashboard_recent=_window("dashboard_recent", DEFAULT_DASHBOARD_RECENT),
    )

    if windows.overview_chart > windows.symptom_chart:
        logger.warning(
            "Overview window (%d) is wider than the symptom chart window (%d)",
            windows.overview_chart,
            windows.symptom_chart,
        )

    # ── Dashboard ──
    dash_raw = raw.get("dashboard") or {}
    if not isinstance(dash_raw, dict):
        errors.append("'dashboard' must be a mapping")
        dash_raw = {}

    highlights_raw = dash_raw.get("highlight_symptoms", list(DEFAULT_HIGHLIGHT_SYMPTOMS))
    highlights: list[str] = []
    if not isinstance(highlights_raw, list):
        errors.append("dashboard.highlight_symptoms must be a list")
    else:
        for name in highlights_raw:
            try:
                highlights.append(wire_symptom_key(str(name)))
            except UnknownSymptomError:
                errors.append(
                    f"dashboard.highlight_symptoms: unknown symptom {name!r} "
                    f"(expected one of {', '.join(SYMPTOM_KEYS)})"
                )

    if errors:
        raise ConfigValidationError(
            f"tracker_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return TrackerConfig(
        version=version,
        windows=windows,
        dashboard=DashboardConfig(highlight_symptoms=highlights),
        _raw=raw,
    )


def load_tracker_config(path: Path | None = None) -> TrackerConfig:
    """Load and validate the tracker config from disk.

    Args:
        path: Override path to YAML. Uses the bundled tracker_config.yaml by default.

    Returns:
        Validated TrackerConfig instance.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded tracker config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: TrackerConfig | None = None
_config_lock = threading.Lock()


def get_tracker_config() -> TrackerConfig:
    """Return the global TrackerConfig singleton, loading it on first call.

    Thread-safe.  Use ``reload_tracker_config()`` to refresh after YAML changes.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_tracker_config()
    return _config


def reload_tracker_config(path: Path | None = None) -> TrackerConfig:
    """Reload the tracker config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_tracker_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded tracker config: %s → %s", old_version, new_config.version)
    return new_config
