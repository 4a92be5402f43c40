#!/usr/bin/env python3
"""
namegen - Deterministic Procedural Name Generator
=================================================

Seeded, themed name generation for NPCs, buildings, cities, districts,
streets and factions, with no repeats inside a session.

Quick Start
-----------
    from namegen import NameGenerator, Theme, Gender, BuildingType

    gen = NameGenerator(seed=42)
    gen.generate_npc_name(Theme.CYBERPUNK, Gender.FEMALE)
    gen.generate_building_name(Theme.ORCS, BuildingType.INDUSTRIAL)
    gen.generate_street_name(Theme.ELVES)

    gen.reset_session()   # same seed, same sequence again

Modules
-------
    namegen.generator  - NameGenerator (retry loop, session, reset)
    namegen.themes     - Bundled theme data and validation
    namegen.registry   - Custom themes and extensions
    namegen.composer   - Fragment selection and templates

CLI Usage
---------
    python -m namegen generate npc --theme elves -n 5 --seed 42
    python -m namegen themes
"""

__version__ = "0.1.0"

from .enums import Theme, Gender, BuildingType, EntityType
from .exceptions import (
    NameGenError, InvalidParameter, NamePoolExhausted, ThemeDataError, SettingsError,
)
from .random_sequence import RandomSequence
from .themes import ThemeData, load_theme_file
from .registry import ThemeConfig, ThemeExtension, ThemeRegistry
from .composer import Composer
from .session import SessionTracker
from .generator import NameGenerator, MAX_ATTEMPTS

__all__ = [
    '__version__',
    # Generator
    'NameGenerator',
    'MAX_ATTEMPTS',
    # Enumerations
    'Theme',
    'Gender',
    'BuildingType',
    'EntityType',
    # Errors
    'NameGenError',
    'InvalidParameter',
    'NamePoolExhausted',
    'ThemeDataError',
    'SettingsError',
    # Building blocks
    'RandomSequence',
    'Composer',
    'SessionTracker',
    # Theme data
    'ThemeData',
    'ThemeConfig',
    'ThemeExtension',
    'ThemeRegistry',
    'load_theme_file',
]
