"""Deps builders for the tracker API services."""
from __future__ import annotations


def get_app_core():
    """Return the module that owns paths and service entry points."""
    from tracker.api import app_core as _mod

    return _mod
