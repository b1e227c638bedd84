"""Test fixture package for the orchestrator.

Contains helpers for:
- Deterministic random sources for prompt rendering
"""

from .randomness import FixedRandom

__all__ = ["FixedRandom"]
