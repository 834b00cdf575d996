"""cutover-cli: Command-line interface for upgrade descriptor generation."""

from __future__ import annotations

__version__ = "0.1.0"
