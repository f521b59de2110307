from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar

from xmp2pp3.core.types import MetadataKeys
from xmp2pp3.infrastructure.metadata.decoding import decode_value
from xmp2pp3.kernel.system.config import APP_CONFIG

T = TypeVar("T")


class MetadataSnapshot:
    """
    Immutable view over the metadata of one image.

    Values from the XMP sidecar win over anything embedded in the image,
    for every candidate key: all aliases are tried in the sidecar before
    the embedded XMP/EXIF is consulted.
    """

    def __init__(
        self,
        exif: Optional[Mapping[str, Any]] = None,
        xmp: Optional[Mapping[str, Any]] = None,
        sidecar_xmp: Optional[Mapping[str, Any]] = None,
        width: int = 0,
        height: int = 0,
        source: Optional[str] = None,
    ):
        self._exif: Dict[str, Any] = dict(exif or {})
        self._xmp: Dict[str, Any] = dict(xmp or {})
        self._sidecar: Optional[Dict[str, Any]] = (
            dict(sidecar_xmp) if sidecar_xmp is not None else None
        )
        self._width = int(width)
        self._height = int(height)
        self.source = source

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def has_sidecar(self) -> bool:
        return self._sidecar is not None

    def _candidates(self, keys: Iterable[str]) -> Iterable[Any]:
        if self._sidecar is not None:
            for key in keys:
                if key.startswith("Xmp.") and key in self._sidecar:
                    yield self._sidecar[key]
        for key in keys:
            if key.startswith("Xmp.") and key in self._xmp:
                yield self._xmp[key]
            elif key.startswith("Exif.") and key in self._exif:
                yield self._exif[key]

    def get(self, keys: MetadataKeys, value_type: Type[T]) -> Optional[T]:
        """
        Returns the first candidate that decodes to a value, or None.
        Raises MetadataTypeError if a stored value can't be read as `value_type`.
        """
        key_list: Tuple[str, ...] = (keys,) if isinstance(keys, str) else tuple(keys)
        for raw in self._candidates(key_list):
            value = decode_value(raw, value_type)
            if value is not None:
                return value
        return None

    def is_lightroom(self) -> bool:
        tool = self.get("Xmp.xmp.CreatorTool", str)
        if not tool:
            return False
        tool = tool.casefold()
        return any(marker in tool for marker in APP_CONFIG.creator_tool_markers)

    def describe(self) -> str:
        lines: List[str] = [f"WxH: {self._width}x{self._height}"]

        def section(title: str, data: Mapping[str, Any]) -> None:
            lines.append(f"{title}:")
            for key, value in data.items():
                lines.append(f"  {key}: {value!r} ({type(value).__name__})")

        section("EXIF from file", self._exif)
        section("XMP from file", self._xmp)
        if self._sidecar is not None:
            section("XMP from sidecar", self._sidecar)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"MetadataSnapshot(source={self.source!r}, {self._width}x{self._height}, "
            f"sidecar={self.has_sidecar})"
        )
