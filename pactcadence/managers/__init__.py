"""Managers for Pact Cadence.

Managers own the seam to the surrounding application: they read records
through collaborator interfaces and delegate all computation to engines.
"""

from .statistics_manager import PactReader, StatisticsManager

__all__ = ["PactReader", "StatisticsManager"]
