"""Public package surface for dirindex.

Exports ``main`` for programmatic CLI invocation and ``scan_tree`` for
library use. Most implementation lives in submodules under ``dirindex``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def scan_tree(*args, **kwargs):
    """Lazily import the tree walker entrypoint."""
    from .walk import scan_tree as _scan_tree

    return _scan_tree(*args, **kwargs)


__all__ = ["main", "scan_tree"]
