from xmp2pp3.core.numeric import round_half_away
from xmp2pp3.core.rules import FieldRule, apply_rules
from xmp2pp3.core.types import IMetadataSource, ISettingsSink
from xmp2pp3.features.curves.logic import Interpolator
from xmp2pp3.features.development import tables

_lr_tint_to_lnrg = Interpolator(tables.LR_TINT_TO_LNRG)
_lnrg_to_rt_tint = Interpolator(tables.LNRG_TO_RT_TINT)
_lr_contrast_to_std = Interpolator(tables.LR_CONTRAST_TO_STD)
_std_to_rt_contrast = Interpolator(tables.STD_TO_RT_CONTRAST)
_lr_saturation_to_sat = Interpolator(tables.LR_SATURATION_TO_SAT)
_sat_to_rt_saturation = Interpolator(tables.SAT_TO_RT_SATURATION)
_lr_highlights_to_mid = Interpolator(tables.LR_HIGHLIGHTS_TO_MID)
_mid_to_rt_highlights = Interpolator(tables.MID_TO_RT_HIGHLIGHTS)
_lr_shadows_to_mid = Interpolator(tables.LR_SHADOWS_TO_MID)
_mid_to_rt_shadows = Interpolator(tables.MID_TO_RT_SHADOWS)


def convert_tint(value: int) -> float:
    return _lnrg_to_rt_tint(_lr_tint_to_lnrg(value) + tables.LNRG_OFFSET)


def convert_contrast(value: int) -> int:
    return round_half_away(_std_to_rt_contrast(_lr_contrast_to_std(value)))


def convert_saturation(value: int) -> int:
    return round_half_away(_sat_to_rt_saturation(_lr_saturation_to_sat(value)))


def convert_highlights(value: int) -> int:
    return round_half_away(_mid_to_rt_highlights(_lr_highlights_to_mid(value)))


def convert_shadows(value: int) -> int:
    return round_half_away(_mid_to_rt_shadows(_lr_shadows_to_mid(value)))


WHITE_BALANCE_RULES = (
    FieldRule.of("Xmp.crs.Temperature", int, "White Balance", "Temperature"),
    FieldRule.of("Xmp.crs.Tint", int, "White Balance", "Green", convert_tint),
)

EXPOSURE_RULES = (
    FieldRule.of(
        ["Xmp.crs.Exposure2012", "Xmp.crs.Exposure"], float, "Exposure", "Compensation"
    ),
    FieldRule.of(
        ["Xmp.crs.Contrast2012", "Xmp.crs.Contrast"],
        int,
        "Exposure",
        "Contrast",
        convert_contrast,
    ),
    FieldRule.of("Xmp.crs.Saturation", int, "Exposure", "Saturation", convert_saturation),
)

SHADOWS_HIGHLIGHTS_RULES = (
    FieldRule.of(
        ["Xmp.crs.Highlights2012", "Xmp.crs.Highlights"],
        int,
        "Shadows & Highlights",
        "Highlights",
        convert_highlights,
    ),
    FieldRule.of(
        ["Xmp.crs.Shadows2012", "Xmp.crs.Shadows"],
        int,
        "Shadows & Highlights",
        "Shadows",
        convert_shadows,
    ),
)


def import_development(metadata: IMetadataSource, settings: ISettingsSink) -> None:
    """
    White balance, exposure and shadows/highlights. A group is only switched
    on when at least one of its sliders was found.
    """
    if apply_rules(WHITE_BALANCE_RULES, metadata, settings):
        settings.set("White Balance", "Enabled", True)
        settings.set("White Balance", "Setting", "Custom")

    apply_rules(EXPOSURE_RULES, metadata, settings)

    if apply_rules(SHADOWS_HIGHLIGHTS_RULES, metadata, settings):
        settings.set("Shadows & Highlights", "Enabled", True)
