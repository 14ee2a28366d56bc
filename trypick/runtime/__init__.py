"""Public runtime orchestration entry points.

This package groups the interactive selector bootstrap (`run_selector`) and
the lower-level event loop used by tests and composition code.
"""

from __future__ import annotations


def run_selector(*args, **kwargs):
    """Lazily import selector entrypoint to avoid heavy bootstrap on import."""
    from .app import run_selector as _run_selector

    return _run_selector(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = [
    "run_selector",
    "run_main_loop",
]
