import os
from typing import Any, Dict, Optional, Tuple

import pyexiv2
import rawpy

from xmp2pp3.core.errors import MetadataLoadError
from xmp2pp3.infrastructure.metadata.snapshot import MetadataSnapshot
from xmp2pp3.kernel.system.config import APP_CONFIG, SUPPORTED_RAW_EXTENSIONS
from xmp2pp3.kernel.system.logging import get_logger

logger = get_logger(__name__)


def sidecar_path(image_path: str) -> str:
    """
    IMG_0001.CR2 -> IMG_0001.xmp
    """
    return os.path.splitext(image_path)[0] + APP_CONFIG.sidecar_suffix


def is_sidecar(path: str) -> bool:
    return os.path.splitext(path)[1].lower() == APP_CONFIG.sidecar_suffix


def read_raw_size(image_path: str) -> Optional[Tuple[int, int]]:
    """
    Sensor (width, height) as LibRaw reports it, before any flip is applied.
    """
    try:
        with rawpy.imread(image_path) as raw:
            return int(raw.sizes.width), int(raw.sizes.height)
    except (rawpy.LibRawError, OSError) as e:
        logger.debug(f"LibRaw could not size {image_path}: {e}")
        return None


def _read_sidecar(path: str) -> Optional[Dict[str, Any]]:
    if not os.path.isfile(path):
        return None
    try:
        with pyexiv2.Image(path, encoding="utf-8") as sidecar:
            data = sidecar.read_xmp() or {}
    except (RuntimeError, OSError, UnicodeError) as e:
        logger.warning(f"Ignoring unreadable sidecar {path}: {e}")
        return None
    logger.info(f"Read metadata from sidecar {path}")
    return data


def load_metadata(image_path: str) -> MetadataSnapshot:
    """
    Reads EXIF and XMP from the image plus the XMP of its sidecar, if any.
    Raises MetadataLoadError if the image itself cannot be read.
    """
    try:
        with pyexiv2.Image(image_path, encoding="utf-8") as img:
            exif = img.read_exif() or {}
            xmp = img.read_xmp() or {}
            size = (img.get_pixel_width(), img.get_pixel_height())
    except (RuntimeError, OSError, UnicodeError) as e:
        raise MetadataLoadError(f"Cannot read metadata from {image_path}: {e}") from e
    logger.info(f"Read metadata from {image_path}")

    if os.path.splitext(image_path)[1].lower() in SUPPORTED_RAW_EXTENSIONS:
        size = read_raw_size(image_path) or size

    return MetadataSnapshot(
        exif=exif,
        xmp=xmp,
        sidecar_xmp=_read_sidecar(sidecar_path(image_path)),
        width=size[0],
        height=size[1],
        source=image_path,
    )
