import io
import sys

import bdd
from bdd import (
    RunConfig, RunState, describe, it, before, after, print_results,
    should_equal
)


def add(a: int, b: int) -> int:
    return a + b


def test_math_add_end_to_end():
    """math#add passes and reports a clean run"""
    state = RunState(RunConfig(color=False))
    log = []

    describe("math#add",
             before(lambda: log.append("Before called ...")),
             after(lambda: log.append("After called ...")),
             it("Should add positive numbers", lambda: should_equal(add(5, 7), 12)),
             it("Should add negative numbers", lambda: should_equal(add(5, -7), -2)),
             state=state)

    out = io.StringIO()
    should_equal(print_results(state, out), 0)
    should_equal(out.getvalue().splitlines()[1], "2 total, 2 successful, 0 failed")
    should_equal(log, ["Before called ...", "After called ..."] * 2)


def test_math_add_with_a_wrong_expectation():
    """a wrong expectation shows up in the report with its location"""
    state = RunState(RunConfig(color=False))

    describe("math#add",
             it("Should add positive numbers", lambda: should_equal(add(5, 7), 12)),
             it("Should add wrongly", lambda: should_equal(add(1, 1), 3)),
             state=state)

    out = io.StringIO()
    should_equal(print_results(state, out), 1)
    lines = out.getvalue().splitlines()
    should_equal(lines[1], "2 total, 1 successful, 1 failed")
    should_equal(lines[2], "math#add")
    should_equal(lines[3].startswith('- "Should add wrongly: <2> expected to equal <3>." '), True)
    location = lines[3].rsplit(" ", 1)[1]
    should_equal(location.split("(")[0].endswith("bdd_test.py"), True)


# --- run the suite ---
if __name__ == "__main__":
    sys.exit(bdd.run(__name__))
