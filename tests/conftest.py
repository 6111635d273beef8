"""Pytest configuration and shared fixtures."""

import asyncio
import inspect

import pytest

from shellshade.colors import AnsiColors, CanonicalTheme, ThemeColors
from shellshade.scripting import ScriptResult

TOKYO_NIGHT_PALETTE = [
    "#15161e", "#f7768e", "#9ece6a", "#e0af68", "#7aa2f7", "#bb9af7", "#7dcfff", "#a9b1d6",
    "#414868", "#ff899d", "#9fe044", "#faba4a", "#8db0ff", "#c7a9ff", "#a4daff", "#c0caf5",
]


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem):
    """Execute async tests without external plugins."""
    testfunction = pyfuncitem.obj
    if inspect.iscoroutinefunction(testfunction):
        loop = asyncio.new_event_loop()
        try:
            asyncio.set_event_loop(loop)
            sig = inspect.signature(testfunction)
            call_kwargs = {name: pyfuncitem.funcargs[name] for name in sig.parameters}
            loop.run_until_complete(testfunction(**call_kwargs))
        finally:
            asyncio.set_event_loop(None)
            loop.close()
        return True
    return None


class FakeRunner:
    """Stands in for ScriptRunner; records scripts and replays canned results."""

    def __init__(self, *results: ScriptResult, default: ScriptResult | None = None) -> None:
        self.results = list(results)
        self.default = default or ScriptResult(ok=True)
        self.calls: list[tuple[str, str]] = []
        self.timeout = 1

    def _next(self) -> ScriptResult:
        return self.results.pop(0) if self.results else self.default

    def available(self, program: str) -> bool:
        return True

    def osascript(self, script: str) -> ScriptResult:
        self.calls.append(("osascript", script))
        return self._next()

    def shell(self, script: str) -> ScriptResult:
        self.calls.append(("shell", script))
        return self._next()


@pytest.fixture
def tokyo_night() -> CanonicalTheme:
    return CanonicalTheme(
        name="Tokyo Night",
        author="enkia",
        colors=ThemeColors(
            background="#1a1b26",
            foreground="#c0caf5",
            cursor="#c0caf5",
            cursor_text="#1a1b26",
            selection="#283457",
            selection_text="#c0caf5",
            ansi=AnsiColors.from_list(TOKYO_NIGHT_PALETTE),
        ),
    )


@pytest.fixture
def ok_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def failing_runner() -> FakeRunner:
    return FakeRunner(default=ScriptResult(ok=False, error="execution error: not allowed"))
