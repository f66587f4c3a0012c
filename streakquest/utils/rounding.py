import math


def round_half_up(value: float) -> int:
    # Python's round() sends halves to the even neighbour
    return math.floor(value + 0.5)
