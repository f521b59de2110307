import math


def round_half_away(value: float) -> int:
    """
    Rounds to the nearest integer, ties away from zero.
    Python's round() ties to even, which shifts crop edges and slider values
    by one on exact halves.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
