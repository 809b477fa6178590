from __future__ import annotations
from typing import List, Tuple
# spending_planner/income/scale.py

# 游戏内数字后缀（从大到小）
SCALES: List[Tuple[str, float]] = [
    ("D", 1e33),
    ("N", 1e30),
    ("O", 1e27),
    ("S", 1e24),
    ("s", 1e21),
    ("Q", 1e18),
    ("q", 1e15),
    ("T", 1e12),
    ("B", 1e9),
    ("M", 1e6),
    ("K", 1e3),
]

MAX_DECIMALS = 3


def _is_clean(scaled: float) -> bool:
    return abs(scaled - round(scaled, MAX_DECIMALS)) <= 1e-9 * max(1.0, abs(scaled))


def get_best_scale_for_value(value: float) -> str:
    """
    Largest suffix at which the value prints with at most 3 decimals.

    Falls back to smaller suffixes for values that would need more
    precision; '' means no suffix.
    """
    magnitude = abs(value)
    for suffix, threshold in SCALES:
        if magnitude < threshold:
            continue
        if _is_clean(magnitude / threshold):
            return suffix
    return ""


def format_amount(value: float) -> str:
    suffix = get_best_scale_for_value(value)
    divisor = dict(SCALES).get(suffix, 1.0)
    text = f"{value / divisor:.{MAX_DECIMALS}f}".rstrip("0").rstrip(".")
    return f"{text}{suffix}"
