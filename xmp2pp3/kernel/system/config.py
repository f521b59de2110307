import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


# Raw formats LibRaw can open; sensor size is taken from rawpy for these.
SUPPORTED_RAW_EXTENSIONS = frozenset(
    {
        ".3fr", ".arw", ".cr2", ".cr3", ".crw", ".dcr", ".dng", ".erf",
        ".iiq", ".k25", ".kdc", ".mef", ".mos", ".mrw", ".nef", ".nrw",
        ".orf", ".pef", ".raf", ".raw", ".rw2", ".rwl", ".sr2", ".srf",
        ".srw", ".x3f",
    }
)

# Everything a directory walk will try to convert.
SUPPORTED_IMAGE_EXTENSIONS = SUPPORTED_RAW_EXTENSIONS | frozenset(
    {".jpg", ".jpeg", ".tif", ".tiff", ".png"}
)


@dataclass(frozen=True)
class AppConfig:
    config_dir: str
    log_level: int = logging.INFO
    sidecar_suffix: str = ".xmp"
    profile_suffix: str = ".pp3"
    # Substrings of Xmp.xmp.CreatorTool identifying Lightroom / Camera Raw edits
    creator_tool_markers: Tuple[str, ...] = ("lightroom", "camera raw")
    default_cli: Dict[str, Any] = field(
        default_factory=lambda: {"force": False, "verbose": False}
    )

    @property
    def config_file(self) -> str:
        return os.path.join(self.config_dir, "config.json")


def _resolve_log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


APP_CONFIG = AppConfig(
    config_dir=os.path.abspath(
        os.path.expanduser(os.getenv("XMP2PP3_CONFIG_DIR", "~/.xmp2pp3"))
    ),
    log_level=_resolve_log_level(os.getenv("XMP2PP3_LOG_LEVEL", "INFO")),
)


def load_user_config(config: AppConfig = APP_CONFIG) -> Dict[str, Any]:
    """Loads <config dir>/config.json if it exists. Returns {"cli": {...}}."""
    if not os.path.isfile(config.config_file):
        return {"cli": {}}
    with open(config.config_file, "r") as f:
        data = json.load(f)
    return {"cli": data.get("cli", {})}


def generate_default_config(config: AppConfig = APP_CONFIG) -> bool:
    """
    Creates <config dir>/config.json with the documented defaults.
    Returns False without touching anything if the file already exists.
    """
    if os.path.isfile(config.config_file):
        return False
    os.makedirs(config.config_dir, exist_ok=True)
    with open(config.config_file, "w") as f:
        json.dump({"cli": dict(config.default_cli)}, f, indent=4)
    return True
