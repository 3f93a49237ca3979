r"""
'    ___.     .___  .___
'    \_ |__ __| _/__| _/
'     | __ \/ __ |/ __ |
'     | \_\ \ /_/ / /_/ |
'     |___  /____ \____ |
'         \/     \/    \/
"""

# expose the registration dsl
from .dsl import describe, it, before, after

# expose the assertions
from .assertions import (
    AssertionFailure,
    should_equal,
    should_not_equal,
    should_be_null,
    should_not_be_null,
    should_be_in,
    should_not_be_in,
    should_be_greater,
    should_be_less,
    should_be_greater_or_equal,
    should_be_less_or_equal,
    should_throw,
    # short aliases
    equal,
    not_equal,
    is_null,
    is_not_null,
    is_in,
    is_not_in,
    greater,
    less,
    greater_or_equal,
    less_or_equal,
    expect_throw
)

# expose run state, reporting and running
from .config import RunConfig
from .formatting import escape, render
from .report import print_results, format_results
from .runner import collect, run_module, run, main
from .state import RunState, default_state, set_default_state
from .types import TestCase, Hook, Fixture, DescribeGroup, Failure, FailureKind, Outcome

# define what `import *` does
__all__ = [
    "describe",
    "it",
    "before",
    "after",
    "AssertionFailure",
    "should_equal",
    "should_not_equal",
    "should_be_null",
    "should_not_be_null",
    "should_be_in",
    "should_not_be_in",
    "should_be_greater",
    "should_be_less",
    "should_be_greater_or_equal",
    "should_be_less_or_equal",
    "should_throw",
    "equal",
    "not_equal",
    "is_null",
    "is_not_null",
    "is_in",
    "is_not_in",
    "greater",
    "less",
    "greater_or_equal",
    "less_or_equal",
    "expect_throw",
    "RunConfig",
    "escape",
    "render",
    "print_results",
    "format_results",
    "collect",
    "run_module",
    "run",
    "main",
    "RunState",
    "default_state",
    "set_default_state",
    "TestCase",
    "Hook",
    "Fixture",
    "DescribeGroup",
    "Failure",
    "FailureKind",
    "Outcome"
]
