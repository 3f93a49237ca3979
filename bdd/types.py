import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Callable, Any, Optional, List, Tuple, Literal
)

from .formatting import escape

Body = Callable[[], Any]
Role = Literal["before", "after"]


def call_site(depth: int = 2) -> Tuple[str, int]:
    """file and line of the frame `depth` levels above this call"""
    frame = sys._getframe(depth)
    return display_path(frame.f_code.co_filename), frame.f_lineno


def display_path(path: str) -> str:
    """paths under the working directory are shown relative to it"""
    try:
        rel = os.path.relpath(path)
    except ValueError:
        # different drive on windows
        return path
    return path if rel.startswith('..') else rel


def _require_callable(body: Any, what: str) -> None:
    if not callable(body):
        raise TypeError(f"{what} body must be callable, got {type(body).__name__}")


@dataclass(frozen=True)
class TestCase:
    """a named test body, built by `it()`"""
    __test__ = False

    message: str
    body: Body
    file: str = '<unknown>'
    line: int = 0

    def __post_init__(self):
        _require_callable(self.body, "it()")


@dataclass(frozen=True)
class Hook:
    """a before/after fixture callback, built by `before()` / `after()`"""
    role: Role
    body: Body
    file: str = '<unknown>'
    line: int = 0

    def __post_init__(self):
        if self.role not in ("before", "after"):
            raise ValueError(f"unknown hook role: '{self.role}'")
        _require_callable(self.body, f"{self.role}()")

    @property
    def label(self) -> str:
        return f"{self.role}()"


@dataclass(frozen=True)
class Fixture:
    """at most one before and one after hook for a describe group"""
    before: Optional[Hook] = None
    after: Optional[Hook] = None

    def __post_init__(self):
        if self.before is not None and self.before.role != "before":
            raise ValueError("Fixture.before must be a before() hook")
        if self.after is not None and self.after.role != "after":
            raise ValueError("Fixture.after must be an after() hook")


@dataclass(frozen=True)
class DescribeGroup:
    description: str
    cases: List[TestCase] = field(default_factory=list)
    fixture: Fixture = field(default_factory=Fixture)


class FailureKind(Enum):
    ASSERTION = "assertion"
    HOOK = "hook"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class Failure:
    """one recorded failure; `message` is already escaped, `label` is escaped on render"""
    label: str
    file: str
    line: int
    message: str
    kind: FailureKind = FailureKind.UNEXPECTED
    error: Optional[BaseException] = field(default=None, compare=False, repr=False)

    def render(self) -> str:
        return f'"{escape(self.label)}: {self.message}" {self.file}({self.line})'


@dataclass
class Outcome:
    """result of one before/it/after cycle"""
    case: TestCase
    failures: List[Failure] = field(default_factory=list)
    duration: float = 0.0

    @property
    def passed(self) -> bool:
        return not self.failures

    def __repr__(self) -> str:
        status = "pass" if self.passed else f"fail x{len(self.failures)}"
        return f"Outcome(case={self.case.message!r}, {status}, {self.duration * 1000:.2f}ms)"
