from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Tuple, Type

from xmp2pp3.core.types import IMetadataSource, ISettingsSink, MetadataKeys
from xmp2pp3.kernel.system.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FieldRule:
    """
    Copies one metadata field into one settings entry.

    `keys` are tried in order and the first one present wins, which covers
    fields renamed between process versions (e.g. Exposure2012 / Exposure).
    `convert` may return None to signal that the value has no equivalent.
    """

    keys: Tuple[str, ...]
    value_type: Type[Any]
    category: str
    key: str
    convert: Optional[Callable[[Any], Any]] = None

    @classmethod
    def of(
        cls,
        keys: MetadataKeys,
        value_type: Type[Any],
        category: str,
        key: str,
        convert: Optional[Callable[[Any], Any]] = None,
    ) -> "FieldRule":
        key_tuple = (keys,) if isinstance(keys, str) else tuple(keys)
        return cls(key_tuple, value_type, category, key, convert)

    def apply(self, metadata: IMetadataSource, settings: ISettingsSink) -> bool:
        """
        Returns True if a value was written.
        """
        source = metadata.get(self.keys, self.value_type)
        if source is None:
            return False

        target = source if self.convert is None else self.convert(source)
        if target is None:
            logger.debug(f"{self.keys[0]}={source!r} has no {self.category}/{self.key} equivalent")
            return False

        settings.set(self.category, self.key, target)
        return True


def apply_rules(
    rules: Iterable[FieldRule], metadata: IMetadataSource, settings: ISettingsSink
) -> bool:
    """
    Applies every rule (no short-circuit) and returns True if any of them wrote.
    """
    results = [rule.apply(metadata, settings) for rule in rules]
    return any(results)
