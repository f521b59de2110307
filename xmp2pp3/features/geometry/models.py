from dataclasses import dataclass
from typing import Dict, Tuple


# TIFF/EXIF orientation code -> (horizontal_flip, rotate)
ORIENTATION_TAGS: Dict[int, Tuple[bool, int]] = {
    1: (False, 0),  # top-left
    2: (True, 0),  # top-right
    3: (False, 180),  # bottom-right
    4: (True, 180),  # bottom-left
    5: (True, 90),  # left-top
    6: (False, 90),  # right-top
    7: (True, 270),  # right-bottom
    8: (False, 270),  # left-bottom
}


@dataclass(frozen=True)
class OrientationOperator:
    """
    One of the eight symmetries of a rectangle: an optional horizontal flip
    followed by a clockwise rotation by a multiple of 90 degrees.

    Operators compose left to right: `a + b` applies `a`, then `b` in the
    frame `a` established. `-a` is the inverse, so `a + (-a)` is identity.
    """

    horizontal_flip: bool = False
    rotate: int = 0

    def __post_init__(self) -> None:
        if self.rotate % 90 != 0:
            raise ValueError(f"Rotation must be a multiple of 90 degrees, got {self.rotate}")
        object.__setattr__(self, "rotate", self.rotate % 360)

    @classmethod
    def from_tag(cls, code: int) -> "OrientationOperator":
        """
        Unknown codes are read as 1 (no orientation) rather than rejected.
        """
        flip, rotate = ORIENTATION_TAGS.get(code, ORIENTATION_TAGS[1])
        return cls(flip, rotate)

    def to_tag(self) -> int:
        for code, value in ORIENTATION_TAGS.items():
            if value == (self.horizontal_flip, self.rotate):
                return code
        raise AssertionError(f"unreachable orientation {self}")

    def is_portrait(self) -> bool:
        return self.rotate % 180 == 90

    def append_flip(self, flip: bool) -> "OrientationOperator":
        # Mirroring reverses the sense of the rotation already applied.
        if not flip:
            return self
        return OrientationOperator(not self.horizontal_flip, (360 - self.rotate) % 360)

    def append_rotate(self, degrees: int) -> "OrientationOperator":
        return OrientationOperator(self.horizontal_flip, self.rotate + degrees)

    def compose(self, other: "OrientationOperator") -> "OrientationOperator":
        return self.append_flip(other.horizontal_flip).append_rotate(other.rotate)

    def invert(self) -> "OrientationOperator":
        return IDENTITY.append_rotate(360 - self.rotate).append_flip(self.horizontal_flip)

    def __add__(self, other: "OrientationOperator") -> "OrientationOperator":
        return self.compose(other)

    def __neg__(self) -> "OrientationOperator":
        return self.invert()


IDENTITY = OrientationOperator()


@dataclass(frozen=True)
class CropRect:
    """
    Normalized crop edges (0-1) in the displayed orientation plus the
    straightening angle in degrees.
    """

    top: float = 0.0
    left: float = 0.0
    bottom: float = 1.0
    right: float = 1.0
    angle: float = 0.0


@dataclass(frozen=True)
class CropTransform:
    """
    Pixel-space crop and coarse transform as the render engine expects them.
    """

    orientation: OrientationOperator
    x: int
    y: int
    width: int
    height: int
    angle: float
