"""Interfaces of the external site and compiler.

Pawprint never loads content or decides what to compile. It talks to the
site through the protocols below and loads the site itself through a
user-supplied factory named in the config (``module:attr``).
"""

from __future__ import annotations

import importlib.util
import sys
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from pawprint._errors import ConfigError

if TYPE_CHECKING:
    from pawprint.config import PawprintConfig
    from pawprint.observability.bus import EventBus
    from pawprint.reporting.diagnostic import Frame


class Representation(Protocol):
    """One output artifact of a page or asset.

    The four flags are set by the compiler and read-only to pawprint.
    ``output_path`` is unique per rep and keys its timing.
    """

    name: str
    output_path: str
    compiled: bool
    written: bool
    created: bool
    modified: bool


class CompilationUnit(Protocol):
    """A page or asset with one or more reps."""

    identifier: str
    reps: Sequence[Representation]


class Compiler(Protocol):
    """The engine that compiles units and publishes lifecycle events."""

    @property
    def stack(self) -> Sequence[Frame]:
        """Current compilation stack, outermost first. Valid mid-failure."""
        ...

    def run(
        self,
        units: Sequence[CompilationUnit] | None,
        *,
        force: bool,
        bus: EventBus,
    ) -> None:
        """Compile *units* (``None`` means everything), publishing on *bus*."""
        ...


class Site(Protocol):
    """A loaded site: its pages, assets and compiler."""

    pages: Sequence[CompilationUnit]
    assets: Sequence[CompilationUnit]
    compiler: Compiler


def clean_identifier(identifier: str) -> str:
    """Normalise an identifier to have exactly one leading and trailing slash.

    >>> clean_identifier("about")
    '/about/'
    >>> clean_identifier("//blog/post")
    '/blog/post/'

    """
    stripped = identifier.strip("/")
    return f"/{stripped}/" if stripped else "/"


def all_reps(site: Site) -> list[Representation]:
    """Every rep of every page, then every rep of every asset."""
    reps: list[Representation] = []
    for unit in (*site.pages, *site.assets):
        reps.extend(unit.reps)
    return reps


def load_site(config: PawprintConfig) -> Site:
    """Import the configured site factory and call it with *config*.

    ``config.site`` has the form ``module:attr`` (e.g. ``site:load_site`` for
    ``<root>/site.py``).

    Raises:
        ConfigError: If the factory path is malformed, the module cannot be loaded,
            or the attribute is not callable.

    """
    spec = config.site
    module_part, _, attr = spec.partition(":")
    if not module_part or not attr:
        msg = f"site {spec!r}: expected 'module:attr'"
        raise ConfigError(msg)
    py_file = config.root / f"{module_part.replace('.', '/')}.py"
    if not py_file.is_file():
        msg = f"site {spec!r}: {py_file} not found"
        raise ConfigError(msg)
    module_name = f"pawprint_site_{module_part.replace('.', '_')}"
    spec_obj = importlib.util.spec_from_file_location(module_name, py_file)
    if spec_obj is None or spec_obj.loader is None:
        msg = f"site {spec!r}: failed to load {py_file}"
        raise ConfigError(msg)
    module = importlib.util.module_from_spec(spec_obj)
    sys.modules[module_name] = module
    try:
        spec_obj.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        msg = f"site {spec!r}: failed to load {py_file}: {exc}"
        raise ConfigError(msg) from exc
    factory = getattr(module, attr, None)
    if not callable(factory):
        msg = f"site {spec!r}: {attr} not callable in {py_file}"
        raise ConfigError(msg)
    try:
        return factory(config)
    except Exception as exc:
        msg = f"site {spec!r}: {attr} failed: {exc}"
        raise ConfigError(msg) from exc
