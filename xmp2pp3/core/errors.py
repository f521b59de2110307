class ConversionError(Exception):
    """Base class for everything the converter raises on purpose."""


class MetadataTypeError(ConversionError, TypeError):
    """
    A metadata value exists but cannot be decoded as the requested type.
    The rule tables always request the right type for a known key, so this
    is a contract violation rather than bad user data.
    """


class MetadataLoadError(ConversionError, OSError):
    """The image (or its metadata) could not be read."""


class CropGeometryError(ConversionError, ValueError):
    """The crop rectangle or angle recorded in the source is out of range."""
