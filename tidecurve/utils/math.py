"""Scalar helpers shared by the mapping and animation code."""


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def map_range(
    value: float,
    in_min: float,
    in_max: float,
    out_min: float,
    out_max: float
) -> float:
    """Affine map from one range to another, clamped to the output range."""
    if in_max == in_min:
        return out_min
    t = clamp((value - in_min) / (in_max - in_min), 0.0, 1.0)
    return lerp(out_min, out_max, t)


def ease_in_out_quad(t: float) -> float:
    """Quadratic ease used for theme transitions."""
    t = clamp(t, 0.0, 1.0)
    return 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2
