"""classcopy-cli: Command line interface for classcopy."""

from __future__ import annotations

__version__ = "0.1.0"
