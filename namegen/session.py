#!/usr/bin/env python3
"""
Session State
=============
Mutable per-generator state: the random cursor and the set of names already
handed out. Not thread-safe; one generator (and so one session) per owner.
"""

import logging
from collections import Counter
from typing import Optional, Set

from .enums import EntityType
from .random_sequence import RandomSequence

logger = logging.getLogger(__name__)


class SessionTracker:
    """Names returned in the current session, with per-category counts."""

    def __init__(self):
        self._names: Set[str] = set()
        self._per_type: Counter = Counter()

    def is_known(self, name: str) -> bool:
        return name in self._names

    def record(self, name: str, entity_type: Optional[EntityType] = None):
        self._names.add(name)
        if entity_type is not None:
            self._per_type[entity_type] += 1

    def clear(self):
        self._names.clear()
        self._per_type.clear()

    def count(self, entity_type: Optional[EntityType] = None) -> int:
        """Number of names recorded, overall or for one category."""
        if entity_type is None:
            return len(self._names)
        return self._per_type[entity_type]

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: str) -> bool:
        return self.is_known(name)


class SessionState:
    """Seed, random cursor, tracker and attempt counter for one generator."""

    def __init__(self, seed: int):
        self.seed = seed
        self.random = RandomSequence(seed)
        self.tracker = SessionTracker()
        self.attempts = 0

    def reset(self):
        """Rewind to a fresh session for the same seed."""
        self.tracker.clear()
        self.random = RandomSequence(self.seed)
        self.attempts = 0
        logger.debug("Session reset (seed=%d)", self.seed)


__all__ = ['SessionTracker', 'SessionState']
