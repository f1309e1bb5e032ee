# File: helpers/__init__.py
"""Boundary helper functions for Pact Cadence.

Code that touches raw data-store rows lives here, NOT in engines/.

Submodules:
    - record_helpers: Row validation (voluptuous), record builders, history ordering

Usage:
    from . import record_helpers
    from .record_helpers import build_pact, sort_history
"""

from . import record_helpers

__all__ = ["record_helpers"]
