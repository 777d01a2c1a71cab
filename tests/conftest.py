"""Shared test fixtures for pawprint."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeAlias

import pytest

from pawprint.observability import CompileEvent, EventBus
from pawprint.reporting.diagnostic import Frame


@dataclass
class FakeRep:
    """A representation with settable flags, as the compiler would leave it."""

    output_path: str
    name: str = "default"
    compiled: bool = True
    written: bool = True
    created: bool = False
    modified: bool = False


@dataclass
class FakeUnit:
    """A page or asset with its reps."""

    identifier: str
    reps: list[FakeRep] = field(default_factory=list)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


Script: TypeAlias = Callable[[EventBus, "FakeCompiler"], None]


class FakeCompiler:
    """Compiler double that runs a scripted sequence of events."""

    def __init__(self, script: Script | None = None) -> None:
        self.script = script
        self.stack: list[Frame] = []
        self.calls: list[tuple[Any, bool]] = []

    def run(self, units: Any, *, force: bool, bus: EventBus) -> None:
        self.calls.append((units, force))
        if self.script is not None:
            self.script(bus, self)


@dataclass
class FakeSite:
    pages: list[FakeUnit] = field(default_factory=list)
    assets: list[FakeUnit] = field(default_factory=list)
    compiler: FakeCompiler = field(default_factory=FakeCompiler)


def emit_compilation(
    bus: EventBus,
    clock: FakeClock,
    rep: FakeRep,
    *,
    seconds: float = 0.0,
    filters: Iterable[tuple[str, float]] = (),
) -> None:
    """Publish a full compilation of *rep*, running each filter in turn."""
    bus.publish(CompileEvent.COMPILATION_STARTED, rep)
    for filter_name, filter_seconds in filters:
        bus.publish(CompileEvent.FILTERING_STARTED, rep, filter_name)
        clock.advance(filter_seconds)
        bus.publish(CompileEvent.FILTERING_ENDED, rep, filter_name)
    clock.advance(seconds)
    bus.publish(CompileEvent.COMPILATION_ENDED, rep)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def tmp_site(tmp_path: Path) -> Path:
    """Create a site root with a ``site.py`` factory for CLI tests.

    The factory builds two pages and one asset. Compiling writes every rep
    and marks ``/about/`` as newly created.
    """
    (tmp_path / "site.py").write_text(
        '''\
from types import SimpleNamespace

from pawprint.observability import CompileEvent


def _rep(path):
    return SimpleNamespace(
        name="default", output_path=path,
        compiled=False, written=False, created=False, modified=False,
    )


class Compiler:
    def __init__(self, site):
        self.site = site
        self.stack = []

    def run(self, units, *, force, bus):
        if units is None:
            units = [*self.site.pages, *self.site.assets]
        for unit in units:
            for rep in unit.reps:
                bus.publish(CompileEvent.COMPILATION_STARTED, rep)
                bus.publish(CompileEvent.FILTERING_STARTED, rep, "markdown")
                bus.publish(CompileEvent.FILTERING_ENDED, rep, "markdown")
                rep.compiled = True
                rep.written = True
                rep.created = unit.identifier == "/about/"
                rep.modified = rep.created
                bus.publish(CompileEvent.COMPILATION_ENDED, rep)


def load_site(config):
    site = SimpleNamespace(
        pages=[
            SimpleNamespace(identifier="/", reps=[_rep("output/index.html")]),
            SimpleNamespace(identifier="/about/", reps=[_rep("output/about/index.html")]),
        ],
        assets=[
            SimpleNamespace(identifier="/style/", reps=[_rep("output/style.css")]),
        ],
    )
    site.compiler = Compiler(site)
    return site
'''
    )
    return tmp_path
