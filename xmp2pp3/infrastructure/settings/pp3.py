import os
import re
from typing import Dict, Optional, Sequence

from xmp2pp3.core.types import SettingValue
from xmp2pp3.kernel.system.config import APP_CONFIG
from xmp2pp3.kernel.system.logging import get_logger

logger = get_logger(__name__)

CATEGORY_RE = re.compile(r"^\[(.*)\]$")
VALUE_RE = re.compile(r"^([^=]*)=(.*)$")


def pp3_path(image_path: str) -> str:
    """
    RawTherapee looks for the profile next to the image with the full file
    name kept: IMG_0001.CR2 -> IMG_0001.CR2.pp3
    """
    return image_path + APP_CONFIG.profile_suffix


def to_setting_string(value: SettingValue) -> str:
    if isinstance(value, str):
        return value
    # bool before int, bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # six significant digits, as C++ streams print them
        return f"{value:g}"
    if isinstance(value, Sequence):
        return ";".join(to_setting_string(item) for item in value)
    raise TypeError(f"Cannot serialize {type(value).__name__} as a setting")


class Settings:
    """
    In-memory RawTherapee processing profile (category -> key -> text).
    """

    def __init__(self) -> None:
        self._settings: Dict[str, Dict[str, str]] = {}

    def set(self, category: str, key: str, value: SettingValue) -> None:
        self._settings.setdefault(category, {})[key] = to_setting_string(value)

    def get(self, category: str, key: str) -> Optional[str]:
        return self._settings.get(category, {}).get(key)

    def category(self, category: str) -> Dict[str, str]:
        return dict(self._settings.get(category, {}))

    def is_empty(self) -> bool:
        return not self._settings

    def loads(self, text: str) -> None:
        """
        Merges profile text into the current settings. Lines before the
        first [Category] land in the "" category; anything that is neither a
        header nor key=value is ignored.
        """
        category = ""
        for line in text.splitlines():
            match = CATEGORY_RE.match(line)
            if match:
                category = match.group(1)
                continue
            match = VALUE_RE.match(line)
            if match:
                self._settings.setdefault(category, {})[match.group(1)] = match.group(2)

    def load(self, image_path: str) -> bool:
        """
        Merges the image's existing profile, if it has one.
        """
        path = pp3_path(image_path)
        if not os.path.isfile(path):
            return False
        with open(path, "r", encoding="utf-8") as f:
            self.loads(f.read())
        logger.debug(f"Loaded existing profile {path}")
        return True

    def dumps(self) -> str:
        parts = []
        for category in sorted(self._settings):
            parts.append(f"[{category}]\n")
            for key in sorted(self._settings[category]):
                parts.append(f"{key}={self._settings[category][key]}\n")
            parts.append("\n")
        return "".join(parts)

    def commit(self, image_path: str) -> str:
        """
        Writes the profile next to the image and returns its path.
        """
        path = pp3_path(image_path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.dumps())
        logger.info(f"Wrote {path}")
        return path
