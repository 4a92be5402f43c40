#!/usr/bin/env python3
"""
Closed Enumerations
===================
Themes, genders, building types and entity categories understood by the
generator. Declaration order is stable and is the order used for seeded
default selection (e.g. the implicit gender draw).
"""

from enum import Enum


class Theme(Enum):
    """Built-in naming themes."""
    CYBERPUNK = 'cyberpunk'
    ELVES = 'elves'
    ORCS = 'orcs'

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Gender(Enum):
    """NPC gender, selects the NPC fragment pools."""
    MALE = 'male'
    FEMALE = 'female'
    NEUTRAL = 'neutral'

    @property
    def label(self) -> str:
        return self.name.capitalize()


class BuildingType(Enum):
    """Building categories with their own fragment pools."""
    RESIDENTIAL = 'residential'
    COMMERCIAL = 'commercial'
    INDUSTRIAL = 'industrial'
    GOVERNMENT = 'government'
    ENTERTAINMENT = 'entertainment'
    MEDICAL = 'medical'
    EDUCATIONAL = 'educational'

    @property
    def label(self) -> str:
        return self.name.capitalize()


class EntityType(Enum):
    """Kinds of things that can be named."""
    NPC = 'npc'
    BUILDING = 'building'
    CITY = 'city'
    DISTRICT = 'district'
    STREET = 'street'
    FACTION = 'faction'

    @property
    def label(self) -> str:
        if self is EntityType.NPC:
            return 'NPC'
        return self.name.capitalize()


def enum_labels(enum_cls) -> list:
    """Display names of every member, in declaration order."""
    return [member.label for member in enum_cls]


__all__ = ['Theme', 'Gender', 'BuildingType', 'EntityType', 'enum_labels']
