import inspect
import sys

import bdd
from bdd import (
    RunState, Fixture, FailureKind, TestCase, describe, it, before, after,
    should_equal, should_throw
)
from bdd.types import display_path


# it() / before() / after()

def test_it_builds_a_test_case():
    """it captures the message, the body and where it was written"""
    body = lambda: None
    line = inspect.currentframe().f_lineno + 1
    case = it("Should do a thing", body)
    should_equal(isinstance(case, TestCase), True)
    should_equal(case.message, "Should do a thing")
    should_equal(case.body, body)
    should_equal(case.line, line)
    should_equal(case.file, display_path(__file__))


def test_test_cases_are_immutable():
    """a test case cannot be changed after it is built"""
    case = it("frozen", lambda: None)

    def change():
        case.message = "thawed"

    should_throw(change)


def test_hooks_know_their_role():
    """before and after build hooks with the right role"""
    should_equal(before(lambda: None).role, "before")
    should_equal(after(lambda: None).role, "after")
    should_equal(after(lambda: None).label, "after()")


def test_bodies_must_be_callable():
    """it, before and after reject non callable bodies"""
    should_throw(lambda: it("not callable", 12), "it() body must be callable, got int")
    should_throw(lambda: before("nope"), "before() body must be callable, got str")
    should_throw(lambda: after(None), "after() body must be callable, got NoneType")


# describe()

def _hook_run(*hooks):
    state = RunState()
    calls = []
    items = [h(lambda name=h.__name__: calls.append(name)) for h in hooks]
    describe("dsl#hooks", *items, it("body", lambda: calls.append("it")), state=state)
    return calls, state


def test_describe_without_hooks():
    """describe runs test cases without any hooks"""
    calls, state = _hook_run()
    should_equal(calls, ["it"])
    should_equal(state.success_count, 1)


def test_describe_with_before_only():
    """describe runs a lone before hook"""
    calls, _ = _hook_run(before)
    should_equal(calls, ["before", "it"])


def test_describe_with_after_only():
    """describe runs a lone after hook"""
    calls, _ = _hook_run(after)
    should_equal(calls, ["it", "after"])


def test_describe_with_both_hooks_in_any_order():
    """describe accepts both hooks whichever comes first"""
    calls, _ = _hook_run(after, before)
    should_equal(calls, ["before", "it", "after"])


def test_describe_accepts_a_fixture_and_a_list():
    """describe takes a Fixture value and a list of test cases"""
    state = RunState()
    calls = []
    fixture = Fixture(before=before(lambda: calls.append("before")))
    cases = [it("one", lambda: calls.append("one")), it("two", lambda: calls.append("two"))]
    outcomes = describe("dsl#fixture", fixture, cases, state=state)
    should_equal(calls, ["before", "one", "before", "two"])
    should_equal([o.case.message for o in outcomes], ["one", "two"])


def test_describe_accepts_a_generator_of_cases():
    """any iterable of test cases works, generators included"""
    state = RunState()
    outcomes = describe("dsl#generated", (it(f"case {n}", lambda: None) for n in range(3)), state=state)
    should_equal([o.case.message for o in outcomes], ["case 0", "case 1", "case 2"])
    should_equal(state.success_count, 3)


def test_describe_rejects_a_second_hook():
    """describe accepts at most one hook of each kind"""
    should_throw(lambda: describe("dsl#twice", before(lambda: None), before(lambda: None), state=RunState()),
                 "describe accepts at most one before() hook")
    should_throw(lambda: describe("dsl#twice", Fixture(after=after(lambda: None)), after(lambda: None),
                                  state=RunState()),
                 "describe accepts at most one after() hook")


def test_describe_rejects_unknown_items():
    """describe rejects things that are not hooks or test cases"""
    ex = should_throw(lambda: describe("dsl#junk", "not a test", state=RunState()))
    should_equal(type(ex), TypeError)
    ex = should_throw(lambda: describe("dsl#junk", [lambda: None], state=RunState()))
    should_equal(type(ex), TypeError)
    ex = should_throw(lambda: describe("dsl#junk", b"bytes", state=RunState()))
    should_equal(type(ex), TypeError)


def test_fixture_checks_roles():
    """a fixture will not take a hook in the wrong slot"""
    should_throw(lambda: Fixture(before=after(lambda: None)), "Fixture.before must be a before() hook")


def test_describe_returns_outcomes():
    """describe returns one outcome per test case"""
    outcomes = describe("dsl#outcomes",
                        it("passes", lambda: None),
                        it("fails", lambda: should_equal(1, 2)),
                        state=RunState())
    should_equal([o.passed for o in outcomes], [True, False])
    should_equal(outcomes[1].failures[0].kind, FailureKind.ASSERTION)


def test_describe_with_no_test_cases():
    """describe with nothing to run records nothing"""
    state = RunState()
    should_equal(describe("dsl#empty", before(lambda: None), state=state), [])
    should_equal(state.total, 0)


if __name__ == "__main__":
    sys.exit(bdd.run(__name__))
