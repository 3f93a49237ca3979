"""
run everything, then report.

test modules are plain python modules. any `describe(...)` call at module
level runs while the module is imported; every module-level `test_*` function
is additionally wrapped in an `it()` and run as one describe group named after
the module.
"""

import argparse
import importlib
import importlib.util
import inspect
import logging
import sys
from dataclasses import replace
from pathlib import Path
from types import ModuleType
from typing import List, Optional, Sequence, Union

from .config import RunConfig
from .dsl import describe
from .formatting import escape
from .report import print_results
from .state import RunState, default_state, set_default_state
from .types import Outcome, TestCase, display_path

logger = logging.getLogger(__name__)

ModuleRef = Union[ModuleType, str]


def _message_for(func) -> str:
    doc = inspect.getdoc(func)
    if doc:
        return doc.splitlines()[0].strip()
    return func.__name__


def collect(module: ModuleType) -> List[TestCase]:
    """every zero-argument `test_*` function defined in `module`, in definition order"""
    cases = []
    for name, func in vars(module).items():
        if not name.startswith('test_') or not inspect.isfunction(func):
            continue
        if func.__module__ != module.__name__:
            continue  # imported from somewhere else
        params = inspect.signature(func).parameters.values()
        if any(p.default is p.empty and p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) for p in params):
            logger.debug("skipping %s.%s, it takes arguments", module.__name__, name)
            continue
        source = inspect.getsourcefile(func) or '<unknown>'
        cases.append(TestCase(_message_for(func), func, display_path(source), func.__code__.co_firstlineno))
    return cases


def _group_name(module: ModuleType) -> str:
    if module.__name__ == '__main__' and getattr(module, '__file__', None):
        return Path(module.__file__).stem
    return module.__name__


def _resolve(ref: ModuleRef) -> ModuleType:
    if isinstance(ref, ModuleType):
        return ref
    return sys.modules.get(ref) or importlib.import_module(ref)


def run_module(module: ModuleRef, state: Optional[RunState] = None) -> List[Outcome]:
    """run the `test_*` functions of a module as one describe group"""
    module = _resolve(module)
    state = state if state is not None else default_state()
    cases = collect(module)
    if not cases:
        logger.debug("no test functions in %s", module.__name__)
        return []
    if state.config.live:
        print(f"\n--- running: {_group_name(module)} ---")
    return describe(_group_name(module), cases, state=state)


def run(*modules: ModuleRef, state: Optional[RunState] = None) -> int:
    """
    run the given modules, print the report and return the exit status.

        if __name__ == "__main__":
            sys.exit(bdd.run(__name__))
    """
    state = state if state is not None else default_state()
    for module in modules:
        run_module(module, state)
    return print_results(state)


# --- command line ---

def load(target: str) -> ModuleType:
    """import a python file path or a dotted module name"""
    path = Path(target)
    if path.suffix != '.py':
        return importlib.import_module(target)

    if not path.is_file():
        raise FileNotFoundError(f"no such test file: {target}")
    parent = str(path.resolve().parent)
    if parent not in sys.path:
        sys.path.insert(0, parent)

    spec = importlib.util.spec_from_file_location(path.stem, path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[path.stem] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(path.stem, None)
        raise
    return module


def create_cli_interface() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bdd',
        description='run describe/it test modules and print a summary',
    )
    parser.add_argument('targets', nargs='+', help='python files or dotted module names')
    parser.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    parser.add_argument('--live', action='store_true', help='print a line per test case')
    color = parser.add_mutually_exclusive_group()
    color.add_argument('--color', dest='color', action='store_true', default=None, help='force colors')
    color.add_argument('--no-color', dest='color', action='store_false', help='disable colors')
    parser.set_defaults(color=None)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """main entry point, returns the process exit status"""
    args = create_cli_interface().parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(message)s')
    config = RunConfig.from_env()
    config = replace(
        config,
        color=config.color if args.color is None else args.color,
        live=config.live or args.live,
        verbose=config.verbose or args.verbose,
    )
    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    state = RunState(config)
    previous = set_default_state(state)
    try:
        for target in args.targets:
            logger.info("loading %s", target)
            try:
                module = load(target)
            except Exception as ex:
                logger.error("could not load %s: %s", target, ex)
                state.record_failure(target, "load", target, 0, escape(f"{type(ex).__name__}: {ex}"), error=ex)
                continue
            run_module(module, state)
        return print_results(state)
    finally:
        set_default_state(previous)
