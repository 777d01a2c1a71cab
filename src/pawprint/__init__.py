"""Pawprint — compilation reports for static-site builds.

Watches a site compiler through its lifecycle events and tells you what
happened: which files were created, updated, skipped or left unwritten, how
long every filter took, and, when a build fails, what was being compiled and
where it broke.

Quick start::

    from pawprint import CompileCommand, CompileOptions

    command = CompileCommand(site)
    exit_code = command.run(CompileOptions(force=True, verbose=True))

From the shell::

    pawprint compile --verbose
    pawprint compile /about/ /blog/first-post/

"""

__version__ = "0.1.0.dev0"
__all__ = [
    "CompileCommand",
    "CompileOptions",
    "EventBus",
    "PawprintConfig",
    "TimingAggregator",
    "__version__",
    "classify",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import pawprint`` fast while providing a clean top-level API.
    """
    if name == "PawprintConfig":
        from pawprint.config import PawprintConfig

        return PawprintConfig

    if name in ("CompileCommand", "CompileOptions"):
        from pawprint.commands import compile as _compile

        return getattr(_compile, name)

    if name in ("EventBus", "TimingAggregator"):
        from pawprint import observability

        return getattr(observability, name)

    if name == "classify":
        from pawprint.reporting.outcome import classify

        return classify

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
