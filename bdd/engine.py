"""
the execution engine.

each test case runs as one cycle: before callbacks, the body, then after
callbacks. a raise anywhere in the cycle is turned into a recorded failure and
never escapes the cycle, so one broken test cannot stop the rest of the run.
"""

import logging
import time
import traceback
from typing import List, Optional, Tuple

from .assertions import AssertionFailure, error_message
from .formatting import escape
from .report import print_outcome
from .state import RunState
from .types import Body, DescribeGroup, Failure, FailureKind, Outcome, TestCase, display_path

logger = logging.getLogger(__name__)


def _origin(error: BaseException) -> Tuple[str, int]:
    """where the error was raised"""
    if isinstance(error, AssertionFailure):
        return error.file, error.line
    frames = traceback.extract_tb(error.__traceback__)
    if not frames:
        return '<unknown>', 0
    innermost = frames[-1]
    return display_path(innermost.filename), innermost.lineno or 0


def _describe_error(error: BaseException) -> str:
    if isinstance(error, AssertionFailure):
        return escape(error.message)
    text = error_message(error)
    name = type(error).__name__
    return escape(f"{name}: {text}" if text else name)


def to_failure(error: BaseException, label: str, kind: Optional[FailureKind] = None) -> Failure:
    """turn a raised condition into a failure record"""
    if kind is None:
        kind = FailureKind.ASSERTION if isinstance(error, AssertionFailure) else FailureKind.UNEXPECTED
    file, line = _origin(error)
    return Failure(label, file, line, _describe_error(error), kind, error)


def _invoke(body: Optional[Body], label: str, kind: Optional[FailureKind] = None) -> Optional[Failure]:
    if body is None:
        return None
    try:
        body()
    except Exception as ex:
        return to_failure(ex, label, kind)
    return None


def run_case(group: DescribeGroup, case: TestCase, state: RunState) -> Outcome:
    """run one before/it/after cycle and record what happened"""
    fixture = group.fixture
    failures: List[Failure] = []
    start = time.perf_counter()

    befores = [
        (state.before_each, "before_each()"),
        (fixture.before.body if fixture.before else None, "before()"),
    ]
    for body, label in befores:
        failure = _invoke(body, label, FailureKind.HOOK)
        if failure is not None:
            failures.append(failure)
            break
    else:
        failure = _invoke(case.body, case.message)
        if failure is not None:
            failures.append(failure)

    # after callbacks always run, each on its own
    afters = [
        (fixture.after.body if fixture.after else None, "after()"),
        (state.after_each, "after_each()"),
    ]
    for body, label in afters:
        failure = _invoke(body, label, FailureKind.HOOK)
        if failure is not None:
            failures.append(failure)

    outcome = Outcome(case, failures, time.perf_counter() - start)
    _record(group.description, outcome, state)
    return outcome


def _record(description: str, outcome: Outcome, state: RunState) -> None:
    if outcome.passed:
        state.record_success()
    for failure in outcome.failures:
        state.record_failure(description, failure.label, failure.file, failure.line,
                             failure.message, error=failure.error)

    logger.debug("%s: %r", description, outcome)
    if state.config.live:
        print_outcome(outcome, state.config)


def run_group(group: DescribeGroup, state: RunState) -> List[Outcome]:
    """run every test case of a group in registration order"""
    logger.debug("running '%s' (%d test case(s))", group.description, len(group.cases))
    return [run_case(group, case, state) for case in group.cases]
