"""
utils/helpers.py
================
Small coercion helpers for raw UI / JSON values.
"""
from __future__ import annotations

import math
import uuid
from typing import Any, Optional


def safe_float(x: Any, default: Optional[float] = None) -> Optional[float]:
    """float(x), or default for None, "", non-numeric and non-finite values."""
    try:
        if x is None or x == "":
            return default
        value = float(x)
    except (TypeError, ValueError):
        return default
    return value if math.isfinite(value) else default


def safe_int(x: Any, default: Optional[int] = None) -> Optional[int]:
    value = safe_float(x)
    return default if value is None else int(value)


def new_id() -> str:
    """Short random identifier for projects, environments and custom models."""
    return uuid.uuid4().hex[:9]
