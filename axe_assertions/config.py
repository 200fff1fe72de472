from __future__ import annotations

import dataclasses
import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# =========================
# Defaults / env overrides
# =========================
AXE_CORE_VERSION = os.getenv("AXE_CORE_VERSION", "4.9.1")
AXE_CDN = f"https://cdnjs.cloudflare.com/ajax/libs/axe-core/{AXE_CORE_VERSION}/axe.min.js"
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_REPORTS_DIR = "axe-reports"


def resolve_assets_dir() -> Path:
    env_dir = os.getenv("AXE_ASSETS_DIR")
    if env_dir:
        return Path(env_dir)
    return Path(tempfile.gettempdir()) / "axe-assertions" / "assets"


def _env_color() -> bool:
    if "NO_COLOR" in os.environ:
        return False
    flag = os.getenv("AXE_COLOR", "").strip().lower()
    if flag in ("1", "true", "yes", "on"):
        return True
    if flag in ("0", "false", "no", "off"):
        return False
    return sys.stdout.isatty()


@dataclass(frozen=True)
class Settings:
    axe_url: str
    axe_path: Optional[Path]
    assets_dir: Path
    reports_dir: Path
    timeout_ms: int
    color: bool

    @classmethod
    def from_env(cls) -> "Settings":
        axe_path = os.getenv("AXE_CORE_PATH")
        return cls(
            axe_url=os.getenv("AXE_CORE_URL", AXE_CDN),
            axe_path=Path(axe_path) if axe_path else None,
            assets_dir=resolve_assets_dir(),
            reports_dir=Path(os.getenv("AXE_REPORTS_DIR", DEFAULT_REPORTS_DIR)),
            timeout_ms=int(os.getenv("AXE_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))),
            color=_env_color(),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def override_settings(**changes) -> Settings:
    """Replace individual settings fields for the rest of the process."""
    global _settings
    if "reports_dir" in changes and changes["reports_dir"] is not None:
        changes["reports_dir"] = Path(changes["reports_dir"])
    _settings = dataclasses.replace(get_settings(), **changes)
    return _settings


def reset_settings() -> Settings:
    global _settings
    _settings = Settings.from_env()
    return _settings
