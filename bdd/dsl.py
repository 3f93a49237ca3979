from collections.abc import Iterable
from typing import List, Optional, Tuple, Union

from .engine import run_group
from .state import RunState, default_state
from .types import Body, DescribeGroup, Fixture, Hook, Outcome, TestCase, call_site

Item = Union[TestCase, Hook, Fixture, Iterable[TestCase]]


def it(message: str, body: Body) -> TestCase:
    """
    the 'it' part of a test: one named behavior to check.

        it("Should add positive numbers", lambda: should_equal(add(5, 7), 12))
    """
    file, line = call_site()
    return TestCase(message, body, file, line)


def before(body: Body) -> Hook:
    """callback run before every test case of a describe group"""
    file, line = call_site()
    return Hook("before", body, file, line)


def after(body: Body) -> Hook:
    """callback run after every test case of a describe group, even failed ones"""
    file, line = call_site()
    return Hook("after", body, file, line)


def _merge_hook(fixture: Fixture, hook: Hook) -> Fixture:
    current = getattr(fixture, hook.role)
    if current is not None:
        raise ValueError(f"describe accepts at most one {hook.label} hook")
    if hook.role == "before":
        return Fixture(before=hook, after=fixture.after)
    return Fixture(before=fixture.before, after=hook)


def _split_items(items: Tuple[Item, ...]) -> Tuple[Fixture, List[TestCase]]:
    fixture = Fixture()
    cases: List[TestCase] = []
    for item in items:
        if isinstance(item, TestCase):
            cases.append(item)
        elif isinstance(item, Hook):
            fixture = _merge_hook(fixture, item)
        elif isinstance(item, Fixture):
            for hook in (item.before, item.after):
                if hook is not None:
                    fixture = _merge_hook(fixture, hook)
        elif isinstance(item, Iterable) and not isinstance(item, (str, bytes)):
            for case in item:
                if not isinstance(case, TestCase):
                    raise TypeError(f"expected it() test cases, got {type(case).__name__}")
                cases.append(case)
        else:
            raise TypeError(f"describe got an unexpected {type(item).__name__}; "
                            f"use it(), before() or after()")
    return fixture, cases


def describe(description: str, *items: Item, state: Optional[RunState] = None) -> List[Outcome]:
    """
    the 'describe' part of a test: run a named group of test cases.

    hooks and test cases can be passed in any order and any combination; the
    group runs right away and its outcomes are returned.

        describe("math#add",
            before(lambda: print("Before called ...")),
            it("Should add positive numbers", lambda: should_equal(add(5, 7), 12)),
            it("Should add negative numbers", lambda: should_equal(add(5, -7), -2)),
        )
    """
    if not isinstance(description, str):
        raise TypeError(f"describe description must be a string, got {type(description).__name__}")
    fixture, cases = _split_items(items)
    group = DescribeGroup(description, cases, fixture)
    return run_group(group, state if state is not None else default_state())
