from typing import Any, Callable, Iterable, Optional, Tuple

import numpy as np
import pandas as pd

from .formatting import escape, render, render_all
from .types import call_site

_PANDAS_TYPES = (pd.Series, pd.DataFrame)


# --- custom exception for assertions ---

class AssertionFailure(AssertionError):
    """raised by the should_* helpers, carries the escaped message and call site"""

    def __init__(self, message: str, file: str = '<unknown>', line: int = 0):
        super().__init__(message)
        self.message = message
        self.file = file
        self.line = line

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"AssertionFailure({self.message!r}, {self.file}({self.line}))"


def error_message(error: BaseException) -> str:
    """the text a raised condition carries"""
    if isinstance(error, AssertionFailure):
        return error.message
    return str(error)


# --- internals ---

def _location(file: Optional[str], line: Optional[int]) -> Tuple[str, int]:
    # frames: call_site <- _location <- should_* <- caller
    if file is None or line is None:
        site_file, site_line = call_site(3)
        return file if file is not None else site_file, line if line is not None else site_line
    return file, line


def _fail(default: str, message: Optional[str], file: str, line: int) -> None:
    text = default if message is None else message
    raise AssertionFailure(escape(text), file, line)


def _truth(result: Any) -> bool:
    """collapse element-wise comparison results into one bool"""
    if isinstance(result, np.ndarray):
        return bool(result.all())
    if isinstance(result, _PANDAS_TYPES):
        return bool(result.to_numpy().all())
    return bool(result)


def _equals(a: Any, b: Any) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return bool(np.array_equal(a, b))
    if isinstance(a, _PANDAS_TYPES) or isinstance(b, _PANDAS_TYPES):
        return type(a) is type(b) and a.equals(b)
    try:
        return _truth(a == b)
    except ValueError:
        # containers holding arrays have no single truth value
        return _equals_items(a, b)


def _equals_items(a: Any, b: Any) -> bool:
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return type(a) is type(b) and len(a) == len(b) and all(_equals(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(_equals(a[k], b[k]) for k in a)
    return bool(np.array_equal(np.asarray(a, dtype=object), np.asarray(b, dtype=object)))


def _any(result: Any) -> bool:
    """true when any element of a comparison result holds"""
    if isinstance(result, np.ndarray):
        return bool(result.any())
    if isinstance(result, _PANDAS_TYPES):
        return bool(result.to_numpy().any())
    return bool(result)


# --- public api ---

def should_equal(a: Any, b: Any, message: Optional[str] = None, *,
                 file: Optional[str] = None, line: Optional[int] = None) -> None:
    """
    assert that `a` equals `b`.

    raises AssertionFailure with `<a> expected to equal <b>.` unless a custom
    message is given, in which case that message is used instead.

        should_equal(add(5, 7), 12)
    """
    file, line = _location(file, line)
    if not _equals(a, b):
        _fail(f"<{render(a)}> expected to equal <{render(b)}>.", message, file, line)


def should_not_equal(a: Any, b: Any, message: Optional[str] = None, *,
                     file: Optional[str] = None, line: Optional[int] = None) -> None:
    """assert that `a` does not equal `b`"""
    file, line = _location(file, line)
    if _equals(a, b):
        _fail(f"<{render(a)}> expected to NOT equal <{render(b)}>.", message, file, line)


def should_be_null(a: Any, message: Optional[str] = None, *,
                   file: Optional[str] = None, line: Optional[int] = None) -> None:
    """assert that `a` is None"""
    file, line = _location(file, line)
    if a is not None:
        _fail("expected to be <null>.", message, file, line)


def should_not_be_null(a: Any, message: Optional[str] = None, *,
                       file: Optional[str] = None, line: Optional[int] = None) -> None:
    """assert that `a` is not None"""
    file, line = _location(file, line)
    if a is None:
        _fail("expected to NOT be <null>.", message, file, line)


def should_be_in(value: Any, valid_values: Iterable[Any], message: Optional[str] = None, *,
                 file: Optional[str] = None, line: Optional[int] = None) -> None:
    """
    assert that `value` equals at least one of `valid_values`.

    the collection is listed in its own iteration order in the failure message:
    `<Bobrick> is not in <[Tim, Al]>.`
    """
    file, line = _location(file, line)
    values = list(valid_values)
    if not any(_equals(value, v) for v in values):
        _fail(f"<{render(value)}> is not in <{render_all(values)}>.", message, file, line)


def should_not_be_in(value: Any, invalid_values: Iterable[Any], message: Optional[str] = None, *,
                     file: Optional[str] = None, line: Optional[int] = None) -> None:
    """assert that `value` equals none of `invalid_values`"""
    file, line = _location(file, line)
    values = list(invalid_values)
    if any(_equals(value, v) for v in values):
        _fail(f"<{render(value)}> is in <{render_all(values)}>.", message, file, line)


def should_be_greater(a: Any, b: Any, message: Optional[str] = None, *,
                      file: Optional[str] = None, line: Optional[int] = None) -> None:
    """assert that a > b"""
    file, line = _location(file, line)
    if _any(a <= b):
        _fail(f"<{render(a)}> expected to be greater than <{render(b)}>.", message, file, line)


def should_be_less(a: Any, b: Any, message: Optional[str] = None, *,
                   file: Optional[str] = None, line: Optional[int] = None) -> None:
    """assert that a < b"""
    file, line = _location(file, line)
    if _any(a >= b):
        _fail(f"<{render(a)}> expected to be less than <{render(b)}>.", message, file, line)


def should_be_greater_or_equal(a: Any, b: Any, message: Optional[str] = None, *,
                               file: Optional[str] = None, line: Optional[int] = None) -> None:
    """assert that a >= b"""
    file, line = _location(file, line)
    if _any(a < b):
        _fail(f"<{render(a)}> expected to be greater or equal to <{render(b)}>.", message, file, line)


def should_be_less_or_equal(a: Any, b: Any, message: Optional[str] = None, *,
                            file: Optional[str] = None, line: Optional[int] = None) -> None:
    """assert that a <= b"""
    file, line = _location(file, line)
    if _any(a > b):
        _fail(f"<{render(a)}> expected to be less or equal to <{render(b)}>.", message, file, line)


def should_throw(func: Callable[[], Any], message: Optional[str] = None, *,
                 file: Optional[str] = None, line: Optional[int] = None) -> Exception:
    """
    assert that calling `func` raises.

    any Exception raised by `func` is caught here, including AssertionFailures
    from helpers called inside it. when `message` is given, the raised
    condition's message must match it exactly. the caught exception is returned
    so callers can inspect it further.

        should_throw(lambda: should_equal("abc", "xyz"), "<abc> expected to equal <xyz>.")
    """
    file, line = _location(file, line)
    caught: Optional[Exception] = None
    try:
        func()
    except Exception as ex:
        caught = ex

    if caught is None:
        if message is not None:
            _fail(f"Exception was not thrown. Expected <{message}>", None, file, line)
        _fail("Exception was not thrown. Expected one.", None, file, line)

    actual = error_message(caught)
    if message is not None and message != actual:
        _fail(f"Exception was thrown. Expected <{message}> but got <{actual}>", None, file, line)
    return caught


# --- aliases ---
equal = should_equal
not_equal = should_not_equal
is_null = should_be_null
is_not_null = should_not_be_null
is_in = should_be_in
is_not_in = should_not_be_in
greater = should_be_greater
less = should_be_less
greater_or_equal = should_be_greater_or_equal
less_or_equal = should_be_less_or_equal
expect_throw = should_throw
