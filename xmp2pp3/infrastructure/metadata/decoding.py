"""
Decodes raw metadata values into the Python type a conversion rule asks for.

pyexiv2 hands values back as plain Python objects: text for simple
properties and EXIF tags, lists for XMP bags/sequences, and dicts keyed by
`lang="..."` for language alternatives. Numbers only appear natively when a
snapshot is built by hand.
"""

from fractions import Fraction
from typing import Any, Callable, Dict, List, Optional, Union

from xmp2pp3.core.errors import MetadataTypeError
from xmp2pp3.kernel.system.logging import get_logger

logger = get_logger(__name__)

TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
FALSE_STRINGS = frozenset({"false", "no", "off", "0"})

DEFAULT_LANGUAGE = 'lang="x-default"'


def _is_number(raw: Any) -> bool:
    return isinstance(raw, (int, float, Fraction))


def _lang_alt_default(raw: Dict[str, Any]) -> str:
    if DEFAULT_LANGUAGE in raw:
        return str(raw[DEFAULT_LANGUAGE])
    return str(next(iter(raw.values()), ""))


def parse_number(text: str) -> Optional[Union[int, float, Fraction]]:
    """
    Parses decimal ("+15", "-0.35") and rational ("10/3") strings.
    """
    s = text.strip()
    try:
        return int(s)
    except ValueError:
        pass
    try:
        return float(s)
    except ValueError:
        pass
    try:
        return Fraction(s)
    except (ValueError, ZeroDivisionError):
        return None


def decode_bool(raw: Any) -> Optional[bool]:
    if _is_number(raw):
        return raw != 0
    if isinstance(raw, str):
        s = raw.strip().casefold()
        if s in TRUE_STRINGS:
            return True
        if s in FALSE_STRINGS:
            return False
        logger.debug(f"Unrecognized boolean {raw!r}")
        return None
    raise MetadataTypeError(f"Cannot decode {type(raw).__name__} value as bool")


def _decode_number(raw: Any, cast: Callable[[Any], Any]) -> Any:
    if _is_number(raw):
        return cast(raw)
    if isinstance(raw, str):
        number = parse_number(raw)
        if number is None:
            logger.warning(f"Ignoring unparsable number {raw!r}")
            return None
        return cast(number)
    raise MetadataTypeError(f"Cannot decode {type(raw).__name__} value as a number")


def decode_int(raw: Any) -> Optional[int]:
    return _decode_number(raw, int)


def decode_float(raw: Any) -> Optional[float]:
    return _decode_number(raw, float)


def decode_str(raw: Any) -> Optional[str]:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, dict):
        return _lang_alt_default(raw)
    if isinstance(raw, (list, tuple)):
        return "\n".join(str(item) for item in raw)
    raise MetadataTypeError(f"Cannot decode {type(raw).__name__} value as text")


def decode_list(raw: Any) -> Optional[List[str]]:
    if isinstance(raw, (list, tuple)):
        return [str(item) for item in raw]
    if isinstance(raw, str):
        return [raw]
    if isinstance(raw, dict):
        return [str(item) for item in raw.values()]
    raise MetadataTypeError(f"Cannot decode {type(raw).__name__} value as a list")


DECODERS: Dict[type, Callable[[Any], Any]] = {
    bool: decode_bool,
    int: decode_int,
    float: decode_float,
    str: decode_str,
    list: decode_list,
}


def decode_value(raw: Any, value_type: type) -> Any:
    """
    Returns the decoded value, or None when the value carries no usable
    content (e.g. an unrecognized boolean word).

    Raises MetadataTypeError when the stored type cannot represent
    `value_type` at all.
    """
    decoder = DECODERS.get(value_type)
    if decoder is None:
        raise MetadataTypeError(f"No decoder for {value_type!r}")
    return decoder(raw)
