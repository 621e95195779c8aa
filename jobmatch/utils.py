# jobmatch/utils.py
import math
import re
from typing import Any, Optional


def round_half_up(value: float) -> int:
    """Round .5 upwards (e.g. 2.5 -> 3, -2.5 -> -2)"""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_round(value: float, low: int = 0, high: int = 100) -> int:
    """Round then clamp into [low, high]"""
    return int(clamp(round_half_up(value), low, high))


def to_number(value: Any) -> Optional[float]:
    """
    Coerce an untrusted value to a finite float

    Numbers and numeric strings are accepted; booleans, NaN, infinities
    and everything else give None.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().rstrip('%').strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def format_years(years: float) -> str:
    """Render years without a trailing .0"""
    if float(years).is_integer():
        return str(int(years))
    return f"{years:g}"


def strip_punctuation(text: str) -> str:
    return re.sub(r'[^\w]', '', text)
