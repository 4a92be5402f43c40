#!/usr/bin/env python3
"""
Name Generator
==============
Public entry point: seeded, deterministic, duplicate-free name generation.

Usage:
    from namegen import NameGenerator, Theme, Gender

    gen = NameGenerator(seed=42)
    gen.generate_npc_name(Theme.CYBERPUNK, Gender.MALE)
    gen.generate_city_name(Theme.ELVES)
    gen.reset_session()     # replay the same sequence from the start

A generator is not thread-safe. Use one instance per thread.
"""

import logging
from typing import Optional

from .composer import Composer, draw_gender
from .enums import BuildingType, EntityType, Gender, enum_labels
from .exceptions import InvalidParameter, NamePoolExhausted
from .random_sequence import new_seed
from .registry import ThemeConfig, ThemeRegistry
from .session import SessionState

logger = logging.getLogger(__name__)

# Fixed retry budget per call. Does not scale with pool size.
MAX_ATTEMPTS = 1000


def _coerce(value, enum_cls, parameter: str):
    """Accept an enum member or its name/value string; anything else is invalid."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for member in enum_cls:
            if key in (member.value, member.name.lower()):
                return member
    raise InvalidParameter(parameter, value, enum_labels(enum_cls))


class NameGenerator:
    """
    Generates unique names for NPCs, buildings, cities, districts, streets
    and factions.

    Parameters
    ----------
    seed : int, optional
        Seed for the random sequence. A fresh one is drawn from system
        entropy when omitted; read it back through ``seed``.
    config : ThemeConfig, optional
        Custom themes and theme extensions.

    Every name returned within a session is unique across all categories.
    """

    def __init__(self, seed: Optional[int] = None, config: Optional[ThemeConfig] = None):
        if seed is None:
            seed = new_seed()
        elif isinstance(seed, bool) or not isinstance(seed, int) or seed < 0:
            raise InvalidParameter('seed', seed,
                                   message=f"Seed must be a non-negative integer, got {seed!r}.")

        self._registry = ThemeRegistry(config)
        self._composer = Composer(self._registry)
        self._session = SessionState(seed)

    @property
    def seed(self) -> int:
        return self._session.seed

    @property
    def generated_count(self) -> int:
        """Names handed out since construction or the last reset."""
        return len(self._session.tracker)

    @property
    def themes(self) -> list:
        return self._registry.theme_names()

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate_npc_name(self, theme, gender: Optional[Gender] = None) -> str:
        """
        Generate an NPC name.

        When gender is omitted one is drawn from the seeded sequence on
        every attempt, so the choice is reproducible.
        """
        return self.generate(EntityType.NPC, theme, gender)

    def generate_building_name(self, theme, building_type: Optional[BuildingType] = None) -> str:
        """Generate a building name; without a type the generic pools are used."""
        return self.generate(EntityType.BUILDING, theme, building_type)

    def generate_city_name(self, theme) -> str:
        return self.generate(EntityType.CITY, theme)

    def generate_district_name(self, theme) -> str:
        return self.generate(EntityType.DISTRICT, theme)

    def generate_street_name(self, theme) -> str:
        return self.generate(EntityType.STREET, theme)

    def generate_faction_name(self, theme) -> str:
        return self.generate(EntityType.FACTION, theme)

    def generate(self, entity_type, theme, modifier=None) -> str:
        """
        Generate a unique name for any category.

        Raises
        ------
        InvalidParameter
            If the category, theme or modifier is not valid. Nothing is
            drawn and the session is untouched.
        NamePoolExhausted
            If MAX_ATTEMPTS candidates in a row were already taken. Draws
            made by the failed attempts are not rolled back.
        """
        entity_type = _coerce(entity_type, EntityType, 'entity_type')
        key = self._registry.resolve(theme)
        if modifier is not None:
            if entity_type is EntityType.NPC:
                modifier = _coerce(modifier, Gender, 'gender')
            elif entity_type is EntityType.BUILDING:
                modifier = _coerce(modifier, BuildingType, 'building_type')
            else:
                raise InvalidParameter(
                    'modifier', modifier,
                    message=f"{entity_type.label} names take no modifier, got {modifier!r}.",
                )

        session = self._session
        rng = session.random
        tracker = session.tracker

        for attempt in range(1, MAX_ATTEMPTS + 1):
            session.attempts += 1
            current = modifier
            if entity_type is EntityType.NPC and current is None:
                current = draw_gender(rng)

            candidate = self._composer.synthesize(key, entity_type, current, rng)
            if not tracker.is_known(candidate):
                tracker.record(candidate, entity_type)
                if attempt > 1:
                    logger.debug("%s name accepted after %d collisions", entity_type.label, attempt - 1)
                return candidate

        label = self._registry.label(key)
        logger.warning(
            "Name pool exhausted: %s/%s after %d attempts (seed=%d, %d names in session)",
            label, entity_type.label, MAX_ATTEMPTS, self.seed, len(tracker),
        )
        raise NamePoolExhausted(entity_type, label, MAX_ATTEMPTS)

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    def reset_session(self):
        """Forget returned names and rewind the random sequence to the seed."""
        self._session.reset()

    def __repr__(self) -> str:
        return f"NameGenerator(seed={self.seed}, generated={self.generated_count})"


__all__ = ['NameGenerator', 'MAX_ATTEMPTS']
