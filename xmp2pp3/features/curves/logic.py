from typing import Iterable, Tuple

import numpy as np
import numpy.typing as npt

from xmp2pp3.core.types import ControlPoint


class Interpolator:
    """
    Piecewise-linear curve through a set of measured (input, output) samples.

    Points may be given in any order; they are sorted by input and a repeated
    input keeps the last output given for it. Inside the sampled range the
    curve interpolates linearly between the bracketing samples. Outside it,
    the first or last segment is extended (no clamping), so extreme slider
    values keep moving instead of saturating at the last sample.
    A single sample defines a constant curve.
    """

    def __init__(self, points: Iterable[ControlPoint]):
        by_x = {float(x): float(y) for x, y in points}
        if not by_x:
            raise ValueError("Interpolator needs at least one control point")

        xs = sorted(by_x)
        self._xs: npt.NDArray[np.float64] = np.array(xs, dtype=np.float64)
        self._ys: npt.NDArray[np.float64] = np.array(
            [by_x[x] for x in xs], dtype=np.float64
        )

    @property
    def points(self) -> Tuple[ControlPoint, ...]:
        return tuple(zip(self._xs.tolist(), self._ys.tolist()))

    @property
    def domain(self) -> Tuple[float, float]:
        return float(self._xs[0]), float(self._xs[-1])

    def _edge_slope(self, lo: int, hi: int) -> float:
        return float((self._ys[hi] - self._ys[lo]) / (self._xs[hi] - self._xs[lo]))

    def evaluate(self, x: float) -> float:
        x = float(x)
        xs, ys = self._xs, self._ys

        if len(xs) == 1:
            return float(ys[0])
        if x < xs[0]:
            return float(ys[0] + self._edge_slope(0, 1) * (x - xs[0]))
        if x > xs[-1]:
            return float(ys[-1] + self._edge_slope(-2, -1) * (x - xs[-1]))

        # np.interp returns the sample's output exactly when x hits a node
        return float(np.interp(x, xs, ys))

    def __call__(self, x: float) -> float:
        return self.evaluate(x)

    def __repr__(self) -> str:
        lo, hi = self.domain
        return f"Interpolator({len(self._xs)} points, domain=[{lo:g}, {hi:g}])"
