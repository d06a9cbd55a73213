from __future__ import annotations

import time
import uuid
from typing import Callable

Clock = Callable[[], int]
IdFactory = Callable[[int], str]

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value <= 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def system_clock_ms() -> int:
    return time.time_ns() // 1_000_000


def make_note_id(now_ms: int) -> str:
    # <base36 unix ms>_<8 hex>
    return f"{_to_base36(int(now_ms))}_{uuid.uuid4().hex[:8]}"
