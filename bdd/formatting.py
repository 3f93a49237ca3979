"""
message formatting for diagnostics.

every failure message goes through `escape` before it is stored, so a recorded
failure always fits on one line of the report no matter what the compared
values contained.
"""

import sys
import unicodedata
from typing import Any, Iterable

import numpy as np
import pandas as pd

_SIMPLE_ESCAPES = (
    ('\r', '\\r'),
    ('\n', '\\n'),
    ('\t', '\\t'),
)


def _is_control(ch: str) -> bool:
    return unicodedata.category(ch) == 'Cc'


def escape(text: str) -> str:
    """escape line breaks, tabs and other control characters"""
    for raw, replacement in _SIMPLE_ESCAPES:
        text = text.replace(raw, replacement)

    if not any(_is_control(ch) for ch in text):
        return text
    return ''.join(f"\\0x{ord(ch):x}" if _is_control(ch) else ch for ch in text)


def render(value: Any) -> str:
    """display string for a compared value"""
    if isinstance(value, str):
        return value
    if isinstance(value, np.ndarray):
        # max_line_width keeps numpy from wrapping long arrays
        return np.array2string(value, separator=', ', max_line_width=sys.maxsize)
    if isinstance(value, (pd.Series, pd.DataFrame)):
        return value.to_string()
    return str(value)


def render_all(values: Iterable[Any]) -> str:
    """render a collection as `[e1, e2, ...]` in iteration order"""
    return '[' + ', '.join(render(v) for v in values) + ']'
