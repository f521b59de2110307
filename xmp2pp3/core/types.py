from typing import Any, Optional, Protocol, Sequence, Tuple, Type, TypeAlias, TypeVar, Union

# Curve Types
# (input, output)
ControlPoint: TypeAlias = Tuple[float, float]

# Metadata Types
# One key or an ordered list of aliases, first present wins
MetadataKeys: TypeAlias = Union[str, Sequence[str]]

# Settings Types
# Values the settings sink knows how to serialize
SettingValue: TypeAlias = Union[str, bool, int, float, Sequence[Any]]

T = TypeVar("T")


class IMetadataSource(Protocol):
    """
    Read-only view over the metadata of one image (sidecar first).
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get(self, keys: MetadataKeys, value_type: Type[T]) -> Optional[T]: ...


class ISettingsSink(Protocol):
    """
    Category -> key -> value store the converters write into.
    """

    def set(self, category: str, key: str, value: SettingValue) -> None: ...
