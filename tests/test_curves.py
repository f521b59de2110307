import pytest
from xmp2pp3.features.curves.logic import Interpolator
from xmp2pp3.features.development import tables


ALL_TABLES = [
    tables.LR_TINT_TO_LNRG,
    tables.LNRG_TO_RT_TINT,
    tables.LR_CONTRAST_TO_STD,
    tables.STD_TO_RT_CONTRAST,
    tables.LR_SATURATION_TO_SAT,
    tables.SAT_TO_RT_SATURATION,
    tables.LR_HIGHLIGHTS_TO_MID,
    tables.MID_TO_RT_HIGHLIGHTS,
    tables.LR_SHADOWS_TO_MID,
    tables.MID_TO_RT_SHADOWS,
]


@pytest.mark.parametrize("points", ALL_TABLES)
def test_control_points_are_exact(points):
    curve = Interpolator(points)
    for x, y in points:
        assert curve(x) == y


@pytest.mark.parametrize("points", ALL_TABLES)
def test_midpoint_is_mean_of_neighbours(points):
    curve = Interpolator(points)
    ordered = sorted(points)
    for (x0, y0), (x1, y1) in zip(ordered, ordered[1:]):
        assert curve((x0 + x1) / 2) == pytest.approx((y0 + y1) / 2)


def test_points_are_sorted():
    curve = Interpolator([(1.0, 10.0), (0.0, 0.0), (0.5, 2.0)])
    assert curve.points == ((0.0, 0.0), (0.5, 2.0), (1.0, 10.0))
    assert curve(0.25) == pytest.approx(1.0)
    assert curve(0.75) == pytest.approx(6.0)


def test_duplicate_input_last_wins():
    curve = Interpolator([(0, 0), (1, 1), (1, 3)])
    assert curve(1) == 3.0
    assert curve.points == ((0.0, 0.0), (1.0, 3.0))


def test_empty_is_rejected():
    with pytest.raises(ValueError):
        Interpolator([])


def test_single_point_is_constant():
    curve = Interpolator([(5, 7)])
    assert curve(-100) == 7.0
    assert curve(5) == 7.0
    assert curve(100) == 7.0


def test_extrapolates_with_edge_segments():
    curve = Interpolator([(0, 0), (1, 2), (2, 3)])
    # Left of the range follows slope 2, right of it slope 1
    assert curve(-1) == pytest.approx(-2.0)
    assert curve(3) == pytest.approx(4.0)
    assert curve(12) == pytest.approx(13.0)


def test_does_not_clamp_saturation_range():
    curve = Interpolator(tables.SAT_TO_RT_SATURATION)
    assert curve(1.2) > 100


def test_chained_curves_bridge_units():
    lr_to_std = Interpolator(tables.LR_CONTRAST_TO_STD)
    std_to_rt = Interpolator(tables.STD_TO_RT_CONTRAST)
    # 0.303206 falls between (0.29, -10) and (0.34, 0)
    assert std_to_rt(lr_to_std(0)) == pytest.approx(-7.3588)


def test_domain_and_repr():
    curve = Interpolator([(3, 0), (-1, 1)])
    assert curve.domain == (-1.0, 3.0)
    assert "2 points" in repr(curve)
