"""Shared testing infrastructure for cutover.

This package provides reusable test fixtures for testing across all
cutover packages.

Modules:
    fixtures: Factories for compiled units and build directories

Usage:
    In your conftest.py:
        from testing.fixtures.artifacts import make_beam, write_build
"""

from __future__ import annotations
