"""Bound checks for request values.

Every check is pure and returns either ``True``/``False`` or the first
violation message (``None`` when the value is acceptable). Limits come from
`Settings`; nothing here raises.
"""

from typing import Any, Optional

from bfhl.config import Settings


def is_integral(value: Any) -> bool:
    """JSON numbers with no fractional part. Booleans are not numbers here."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def validate_integer(n: Any, min_value: int, max_value: int) -> bool:
    return is_integral(n) and min_value <= n <= max_value


def validate_array(arr: Any, limits: Settings, label: str) -> Optional[str]:
    if not isinstance(arr, list) or len(arr) == 0:
        return f"{label} array must be non-empty"
    if len(arr) > limits.max_array_len:
        return "array length out of bounds"
    for x in arr:
        if not validate_integer(x, -limits.max_abs_value, limits.max_abs_value):
            return "array value out of bounds"
    return None


def validate_fibonacci(n: Any, limits: Settings) -> Optional[str]:
    if not validate_integer(n, 0, limits.max_fib_n):
        return f"fibonacci must be an integer between 0 and {limits.max_fib_n}"
    return None


def validate_question(question: Any, limits: Settings) -> Optional[str]:
    if not isinstance(question, str):
        return "AI question must be a string"
    trimmed = question.strip()
    if not trimmed:
        return "AI question must be non-empty"
    if len(trimmed) > limits.max_ai_question_len:
        return "AI question too long"
    return None
