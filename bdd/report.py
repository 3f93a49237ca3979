import sys
from typing import List, Optional, TextIO

from .config import RunConfig
from .formatting import escape
from .state import RunState, default_state
from .types import Outcome


class _c:
    """a tiny, silent class for holding color codes."""
    ok = '\033[92m'
    fail = '\033[91m'
    info = '\033[94m'
    grey = '\033[90m'
    reset = '\033[0m'


def _paint(text: str, code: str, color: bool) -> str:
    return f"{code}{text}{_c.reset}" if color else text


def format_results(state: RunState, color: bool = False) -> List[str]:
    """the summary report as a list of lines"""
    summary_color = _c.ok if state.fail_count == 0 else _c.fail
    lines = [
        _paint(state.config.header, _c.info, color),
        _paint(f"{state.total} total, {state.success_count} successful, {state.fail_count} failed",
               summary_color, color),
    ]
    for description, messages in state.fail_messages.items():
        lines.append(escape(description))
        for message in messages:
            lines.append(_paint(f"- {message}", _c.fail, color))
    return lines


def print_results(state: Optional[RunState] = None, stream: Optional[TextIO] = None) -> int:
    """
    print the summary of everything recorded so far.

    returns 1 when any failure was recorded and 0 otherwise, so the result can
    be handed straight to sys.exit().
    """
    state = state or default_state()
    stream = stream or sys.stdout

    for line in format_results(state, state.config.use_color(stream)):
        print(line, file=stream)
    return 1 if state.fail_count > 0 else 0


def print_outcome(outcome: Outcome, config: RunConfig, stream: Optional[TextIO] = None) -> None:
    """one progress line per test case, used in live mode"""
    stream = stream or sys.stdout
    color = config.use_color(stream)
    timing = _paint(f"{outcome.duration * 1000:.2f}ms", _c.grey, color)

    if outcome.passed:
        print(f"  {_paint('✔ pass', _c.ok, color)}  {escape(outcome.case.message)} {timing}", file=stream)
        return

    print(f"  {_paint('✖ fail', _c.fail, color)}  {escape(outcome.case.message)} {timing}", file=stream)
    for failure in outcome.failures:
        print(f"    {_paint('└─> ' + failure.render(), _c.grey, color)}", file=stream)
