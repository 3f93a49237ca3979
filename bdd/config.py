import os
from dataclasses import dataclass, replace
from typing import Optional, TextIO

_TRUE = ('1', 'true', 'yes', 'on')
_FALSE = ('0', 'false', 'no', 'off')


def _env_flag(name: str) -> Optional[bool]:
    raw = os.environ.get(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be one of {_TRUE + _FALSE}, got '{raw}'")


@dataclass
class RunConfig:
    """configuration for a test run"""
    color: Optional[bool] = None  # none means: only when writing to a tty
    live: bool = False  # print a line per test case while running
    verbose: bool = False
    header: str = "Unit Test Results:"

    @classmethod
    def from_env(cls) -> 'RunConfig':
        """build a config from BDD_COLOR, BDD_LIVE, BDD_VERBOSE and NO_COLOR"""
        config = cls()
        color = _env_flag('BDD_COLOR')
        if color is None and 'NO_COLOR' in os.environ:
            color = False
        live = _env_flag('BDD_LIVE')
        verbose = _env_flag('BDD_VERBOSE')
        return replace(
            config,
            color=color,
            live=config.live if live is None else live,
            verbose=config.verbose if verbose is None else verbose,
        )

    def use_color(self, stream: TextIO) -> bool:
        if self.color is not None:
            return self.color
        if 'NO_COLOR' in os.environ:
            return False
        isatty = getattr(stream, 'isatty', None)
        return bool(isatty and isatty())
