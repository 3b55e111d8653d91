"""
Application configuration settings
Do not modify these values once your application has been distributed to users.
This file centralises brand, paths, formats, and runtime defaults.
"""

from __future__ import annotations
import os
import platform
from pathlib import Path

DEV_MODE = True
# Optional startup stack (top layer first). Empty → placeholder layers are generated.
DEV_LAYER_IMAGES: list[str] = []

# ───────────────────────────────────────────────────────────────────────────────
# Core identity
# ───────────────────────────────────────────────────────────────────────────────
APP_NAME = "Scratchr"

# Application version in format x.y.z
APP_VERSION = "0.1.0"

COMPANY_NAME = "Digi Monsters"


# Reverse-DNS App ID (used in About/QSettings/diagnostics)
APP_ID = "uk.digimonsters.scratchr"

# Organization identifiers (for QSettings, folders, About box)
ORG_NAME = "Digi Monsters"       # human readable
ORG_DIRNAME = "DigiMonsters"     # filesystem safe (no spaces)
ORG_DOMAIN = "digimonsters.uk"

PACKAGE_NAME = "scratchr"        # Python import package
DIST_NAME = "dm-scratchr"

TAGLINE = "Scratch away the layers."

BUILD_COMMIT = os.getenv("SCRATCHR_BUILD_COMMIT", "")[:7]
BUILD_CHANNEL = os.getenv("SCRATCHR_BUILD_CHANNEL", "dev")  # dev/beta/stable


def version_string() -> str:
    """Human-friendly version string for About dialogs and logs."""
    meta = f"+{BUILD_COMMIT}" if BUILD_COMMIT else ""
    chan = f" ({BUILD_CHANNEL})" if BUILD_CHANNEL and BUILD_CHANNEL != "stable" else ""
    return f"{APP_VERSION}{meta}{chan}"


# ───────────────────────────────────────────────────────────────────────────────
# Supported formats
# ───────────────────────────────────────────────────────────────────────────────
IMAGE_EXTS = {
    ".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".webp"
}


# ───────────────────────────────────────────────────────────────────────────────
# User data locations (settings, logs)
# ───────────────────────────────────────────────────────────────────────────────
def _appdata_base() -> Path:
    system = platform.system()
    if system == "Windows":
        base = os.getenv("APPDATA") or (Path.home() / "AppData" / "Roaming")
    elif system == "Darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
    return Path(base) / ORG_DIRNAME / APP_NAME


APPDATA_DIR = _appdata_base()
LOG_DIR = APPDATA_DIR / "logs"


def ensure_app_dirs() -> None:
    """Create required folders if they don't exist."""
    for p in (APPDATA_DIR, LOG_DIR):
        p.mkdir(parents=True, exist_ok=True)


# ───────────────────────────────────────────────────────────────────────────────
# QSettings bootstrap (call once during startup)
# ───────────────────────────────────────────────────────────────────────────────
def apply_qsettings_org() -> None:
    """
    Apply org/app metadata for QSettings. Call early in startup,
    before constructing your first QSettings instance.
    """
    try:
        from PySide6.QtCore import QCoreApplication
    except ImportError:
        # Safe to import this module in non-Qt contexts (e.g., CLI tools)
        return
    QCoreApplication.setOrganizationName(ORG_NAME)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_NAME)


# ───────────────────────────────────────────────────────────────────────────────
# Defaults / UI hints (read by settings wrapper; safe to change before shipping)
# ───────────────────────────────────────────────────────────────────────────────
DEFAULTS = {
    "brush": {
        "min_radius": 1,
        "max_radius": 100,
        "default_radius": 20,
    },
    "clearance": {
        # "incremental" keeps a running transparent-pixel count; "scan" rescans the buffer
        "mode": "incremental",
    },
    "layers": {
        "placeholder_colors": ["#8ab4f8", "#f28b82", "#80cbc4"],
    },
    "hotkeys": {
        "reset": "R",
        "increase_brush": "]",
        "decrease_brush": "[",
    },
}


def banner() -> str:
    return (
        f"{APP_NAME} {version_string()}  •  {APP_ID}\n"
        f"Vendor: {COMPANY_NAME}\n"
        f"Data: {APPDATA_DIR}"
    )


if __name__ == "__main__":
    ensure_app_dirs()
    print(banner())
