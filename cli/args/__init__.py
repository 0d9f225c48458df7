"""CLI argument builder modules.

The top-level :mod:`teambuild_cli` is intentionally kept thin. Groups of flags
are registered via small "arg builder" functions housed here:

- :func:`cli.args.base.add_base_args`
- :func:`cli.args.modes.add_mode_args`
"""

from __future__ import annotations

__all__ = [
    "base",
    "modes",
]
