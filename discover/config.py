"""Runtime configuration: JSON defaults next to this module, CLI overrides on top."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional, Union

from discover.i18n import Locale

logger = logging.getLogger(__name__)

DEFAULTS_PATH = Path(__file__).with_name("config_defaults.json")

SENSOR_KINDS = ("simulated", "zmq", "none")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class AppConfig:
    width: int = 480
    height: int = 800
    fps: int = 60
    default_locale: str = "en"
    sensor: str = "simulated"
    sensor_endpoint: str = "ipc:///tmp/discover_tilt.sock"
    assets_dir: str = "assets"
    font_path: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        Locale(self.default_locale)
        if self.sensor not in SENSOR_KINDS:
            raise ValueError(f"sensor must be one of {SENSOR_KINDS}, got {self.sensor!r}")
        if self.width <= 0 or self.height <= 0 or self.fps <= 0:
            raise ValueError("width, height and fps must be positive")

    @property
    def locale(self) -> Locale:
        return Locale(self.default_locale)

    def with_overrides(self, **overrides) -> "AppConfig":
        """Copy with every non-None override applied (argparse leaves unset flags as None)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    handlers: list = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT,
                        handlers=handlers, force=True)


def _read_json(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is %s, not an object", path, type(data).__name__)
        return {}
    return data


def load_config(path: Union[str, Path, None] = None) -> AppConfig:
    """Defaults file first, then ``path`` (if given) layered over it."""
    raw = _read_json(DEFAULTS_PATH)
    if path is not None:
        raw.update(_read_json(Path(path)))

    known = {f.name for f in fields(AppConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        logger.warning("unknown config keys ignored: %s", ", ".join(unknown))
    return AppConfig(**{k: v for k, v in raw.items() if k in known})
