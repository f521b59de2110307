import math
from typing import Optional, Tuple

import numpy as np

from xmp2pp3.core.errors import CropGeometryError
from xmp2pp3.core.numeric import round_half_away
from xmp2pp3.core.types import IMetadataSource, ISettingsSink
from xmp2pp3.features.geometry.models import (
    CropRect,
    CropTransform,
    OrientationOperator,
)
from xmp2pp3.kernel.system.logging import get_logger

logger = get_logger(__name__)


def validate_crop_rect(rect: CropRect) -> None:
    for name in ("top", "left", "bottom", "right"):
        value = getattr(rect, name)
        if not 0.0 <= value <= 1.0:
            raise CropGeometryError(f"Crop{name.capitalize()}={value} is outside [0, 1]")
    if not -45.0 <= rect.angle <= 45.0:
        raise CropGeometryError(f"CropAngle={rect.angle} is outside [-45, 45]")


def unorient_crop_rect(
    rect: CropRect, orientation: OrientationOperator
) -> Tuple[CropRect, int]:
    """
    Maps a rectangle given in display orientation back to sensor orientation.

    Returns the remapped rectangle and the parity of the number of mirror /
    quarter-turn steps taken. An odd parity means the top-left corner of the
    crop now sits on the top-right of the sensor, so the caller must pick the
    other diagonal.
    """
    top, left, bottom, right = rect.top, rect.left, rect.bottom, rect.right
    corner_swaps = 0

    if orientation.horizontal_flip:
        left, right = 1.0 - right, 1.0 - left
        corner_swaps += 1

    for _ in range(orientation.rotate // 90):
        top, left, bottom, right = left, 1.0 - bottom, right, 1.0 - top
        corner_swaps += 1

    if left > right or top > bottom:
        raise CropGeometryError(
            f"Crop rectangle is inverted (top={top}, left={left}, bottom={bottom}, right={right})"
        )

    return CropRect(top, left, bottom, right, rect.angle), corner_swaps % 2


def rotate_points(points: np.ndarray, angle_rad: float) -> np.ndarray:
    """
    Rotates (N, 2) points about the origin: (x cos r + y sin r, -x sin r + y cos r).
    """
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    rotation = np.array([[c, s], [-s, c]], dtype=np.float64)
    return points @ rotation.T


def compute_crop_transform(
    final_orientation: OrientationOperator,
    capture_orientation: OrientationOperator,
    sensor_size: Tuple[int, int],
    rect: CropRect,
    image_size: Optional[Tuple[int, int]] = None,
) -> CropTransform:
    """
    Converts a normalized crop recorded against the displayed image into a
    pixel crop plus the coarse rotate/flip the user applied.

    The source crop is relative to what the user saw (`final_orientation`),
    while the target applies its coarse transform separately. The display
    rotation is therefore undone on the rectangle, and only the part of it
    the user added on top of the capture orientation
    (`-capture + final`) is handed back as the coarse transform.

    Sizes are (width, height); `image_size` defaults to `sensor_size`.
    """
    # capture + user = final  =>  user = -capture + final
    user_orientation = -capture_orientation + final_orientation

    sensor_w, sensor_h = sensor_size
    image_w, image_h = image_size if image_size is not None else sensor_size
    if final_orientation.is_portrait():
        sensor_w, sensor_h = sensor_h, sensor_w
        image_w, image_h = image_h, image_w

    validate_crop_rect(rect)
    sensor_rect, corner_swaps = unorient_crop_rect(rect, final_orientation)

    top = (sensor_rect.top - 0.5) * sensor_h
    left = (sensor_rect.left - 0.5) * sensor_w
    bottom = (sensor_rect.bottom - 0.5) * sensor_h
    right = (sensor_rect.right - 0.5) * sensor_w

    if corner_swaps == 0:
        corners = np.array([[left, top], [right, bottom]], dtype=np.float64)
    else:
        corners = np.array([[right, top], [left, bottom]], dtype=np.float64)

    rotated = rotate_points(corners, math.radians(rect.angle))
    x_min, y_min = rotated.min(axis=0)
    x_max, y_max = rotated.max(axis=0)

    left_px = float(x_min) + 0.5 * image_w
    right_px = float(x_max) + 0.5 * image_w
    top_px = float(y_min) + 0.5 * image_h
    bottom_px = float(y_max) + 0.5 * image_h

    return CropTransform(
        orientation=user_orientation,
        x=round_half_away(left_px),
        y=round_half_away(top_px),
        width=round_half_away(right_px - left_px),
        height=round_half_away(bottom_px - top_px),
        angle=rect.angle,
    )


def read_crop_transform(metadata: IMetadataSource) -> Optional[CropTransform]:
    """
    Returns None when the source records no crop.
    """
    if not metadata.get("Xmp.crs.HasCrop", bool):
        return None

    final_orientation = OrientationOperator.from_tag(
        metadata.get("Xmp.tiff.Orientation", int) or 1
    )
    capture_orientation = OrientationOperator.from_tag(
        metadata.get("Exif.Image.Orientation", int) or 1
    )

    sensor_size = (metadata.width, metadata.height)
    image_w = metadata.get("Xmp.tiff.ImageWidth", int)
    image_h = metadata.get("Xmp.tiff.ImageLength", int)
    image_size = (
        image_w if image_w is not None else metadata.width,
        image_h if image_h is not None else metadata.height,
    )

    def edge(key: str, default: float) -> float:
        value = metadata.get(key, float)
        return default if value is None else value

    rect = CropRect(
        top=edge("Xmp.crs.CropTop", 0.0),
        left=edge("Xmp.crs.CropLeft", 0.0),
        bottom=edge("Xmp.crs.CropBottom", 1.0),
        right=edge("Xmp.crs.CropRight", 1.0),
        angle=edge("Xmp.crs.CropAngle", 0.0),
    )

    return compute_crop_transform(
        final_orientation, capture_orientation, sensor_size, rect, image_size
    )


def import_crop(metadata: IMetadataSource, settings: ISettingsSink) -> bool:
    """
    Writes the crop, coarse transform and fine rotation of one image.
    Nothing is written if there is no crop or the crop is malformed
    (CropGeometryError propagates).
    """
    transform = read_crop_transform(metadata)
    if transform is None:
        return False

    logger.debug(f"Crop: {transform}")

    settings.set("Coarse Transformation", "Rotate", transform.orientation.rotate)
    settings.set("Coarse Transformation", "HorizontalFlip", transform.orientation.horizontal_flip)
    settings.set("Coarse Transformation", "VerticalFlip", False)
    settings.set("Crop", "Enabled", True)
    settings.set("Crop", "X", transform.x)
    settings.set("Crop", "Y", transform.y)
    settings.set("Crop", "W", transform.width)
    settings.set("Crop", "H", transform.height)
    settings.set("Common Properties for Transformations", "AutoFill", False)
    settings.set("Rotation", "Degree", transform.angle)
    return True
