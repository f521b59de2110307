from typing import Dict, Optional

from xmp2pp3.core.rules import FieldRule, apply_rules
from xmp2pp3.core.types import IMetadataSource, ISettingsSink

# Lightroom label name -> RawTherapee color label index
COLOR_LABELS: Dict[str, int] = {
    "red": 1,
    "yellow": 2,
    "green": 3,
    "blue": 4,
    "purple": 5,
}


def convert_color_label(label: str) -> Optional[int]:
    return COLOR_LABELS.get(label.strip().casefold())


TAG_RULES = (
    # IPTC
    FieldRule.of("Xmp.dc.description", str, "IPTC", "Caption"),
    FieldRule.of("Xmp.dc.rights", str, "IPTC", "Copyright"),
    FieldRule.of("Xmp.dc.creator", str, "IPTC", "Creator"),
    FieldRule.of("Xmp.dc.title", str, "IPTC", "Title"),
    FieldRule.of(["Xmp.lr.hierarchicalSubject", "Xmp.dc.subject"], list, "IPTC", "Keywords"),
    # Labels
    FieldRule.of("Xmp.xmp.Rating", int, "General", "Rank"),
    FieldRule.of("Xmp.xmp.Label", str, "General", "ColorLabel", convert_color_label),
)


def import_tags(metadata: IMetadataSource, settings: ISettingsSink) -> bool:
    return apply_rules(TAG_RULES, metadata, settings)
