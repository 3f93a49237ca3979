import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from .config import RunConfig
from .types import Body, Failure

logger = logging.getLogger(__name__)


class RunState:
    """
    accumulated results of a test run.

    one instance normally lives for the whole process and every describe group
    records into it; groups sharing a description share one list of failure
    lines. capture mode diverts failures into a side buffer instead, which is
    how the framework's own tests look at failures without them showing up in
    the real report.
    """

    def __init__(self, config: Optional[RunConfig] = None):
        self.config = config or RunConfig()
        self.success_count = 0
        self.fail_count = 0
        self.fail_messages: Dict[str, List[str]] = {}
        # process-wide callbacks wrapped around every test case
        self.before_each: Optional[Body] = None
        self.after_each: Optional[Body] = None
        self._captured: Optional[List[Any]] = None

    @property
    def total(self) -> int:
        return self.success_count + self.fail_count

    @property
    def is_capturing(self) -> bool:
        return self._captured is not None

    def record_success(self) -> None:
        if self.is_capturing:
            return
        self.success_count += 1

    def record_failure(self, description: str, label: str, file: str, line: int,
                       message: str, error: Optional[BaseException] = None) -> None:
        rendered = Failure(label, file, line, message).render()
        if self.is_capturing:
            self._captured.append(error if error is not None else rendered)
            return
        self.fail_messages.setdefault(description, []).append(rendered)
        self.fail_count += 1
        logger.debug("failure recorded under '%s': %s", description, rendered)

    def start_capturing(self) -> None:
        if self.is_capturing:
            raise RuntimeError("already capturing")
        self._captured = []

    def stop_capturing(self) -> List[Any]:
        """leave capture mode and hand back everything captured"""
        if not self.is_capturing:
            raise RuntimeError("not capturing")
        captured, self._captured = self._captured, None
        return captured

    @contextmanager
    def capturing(self) -> Iterator[List[Any]]:
        self.start_capturing()
        buffer = self._captured
        try:
            yield buffer
        finally:
            self.stop_capturing()

    def reset(self) -> None:
        self.success_count = 0
        self.fail_count = 0
        self.fail_messages = {}
        self._captured = None

    def __repr__(self) -> str:
        return f"RunState(total={self.total}, success={self.success_count}, failed={self.fail_count})"


_default_state = RunState()


def default_state() -> RunState:
    """the process-wide state used when no state is passed explicitly"""
    return _default_state


def set_default_state(state: RunState) -> RunState:
    """swap the process-wide state, returning the previous one"""
    global _default_state
    previous, _default_state = _default_state, state
    return previous
