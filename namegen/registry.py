#!/usr/bin/env python3
"""
Theme Registry
==============
Resolves theme references to validated ThemeData, covering:
- Built-in themes (Theme members, or their names as strings)
- Custom themes registered under a string identifier
- Extensions that append fragments to an existing theme

Usage:
    config = (ThemeConfig()
              .add_theme_from_file('steampunk', 'themes/steampunk.yaml')
              .extend_theme(Theme.ELVES, {'city_names': {'prefixes': ['Nim']}}))
    gen = NameGenerator(seed=7, config=config)
    gen.generate_city_name('steampunk')

Identifiers are case-insensitive. Built-in names are reserved.
"""

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Union

from .enums import BuildingType, Gender, Theme, enum_labels
from .exceptions import InvalidParameter
from .themes import (
    BuildingNameData,
    BuildingTypeData,
    CityNameData,
    DistrictNameData,
    FactionNameData,
    GenderNameData,
    NpcNameData,
    StreetNameData,
    ThemeData,
    build_partial_theme,
    check_theme_data,
    load_builtin_themes,
    load_theme_file,
)

logger = logging.getLogger(__name__)

ThemeRef = Union[Theme, str]

RESERVED_IDENTIFIERS = frozenset(
    {t.value for t in Theme} | {t.name.lower() for t in Theme}
)


# =============================================================================
# Extensions and Configuration
# =============================================================================

@dataclass(frozen=True)
class ThemeExtension:
    """Partial theme data to be appended to a base theme's pools."""
    base: ThemeRef
    data: ThemeData

    @classmethod
    def from_dict(cls, base: ThemeRef, data: Mapping) -> 'ThemeExtension':
        """Build an extension; every section and pool is optional."""
        label = f"{getattr(base, 'label', base)} extension"
        return cls(base=base, data=build_partial_theme(data, label))


@dataclass
class ThemeConfig:
    """
    Custom themes and extensions to install into a NameGenerator.

    Every method returns self so calls can be chained. Extensions are
    applied in the order they were added, after all custom themes.
    """
    custom_themes: Dict[str, ThemeData] = field(default_factory=dict)
    extensions: List[ThemeExtension] = field(default_factory=list)

    def add_theme(self, identifier: str, theme_data: Union[ThemeData, Mapping]) -> 'ThemeConfig':
        identifier = _check_identifier(identifier, 'identifier')
        if isinstance(theme_data, ThemeData):
            check_theme_data(theme_data)
        else:
            theme_data = ThemeData.from_dict(theme_data, name=identifier)
        self.custom_themes[identifier] = theme_data
        return self

    def add_theme_from_file(self, identifier: str, path: Union[str, Path]) -> 'ThemeConfig':
        identifier = _check_identifier(identifier, 'identifier')
        return self.add_theme(identifier, load_theme_file(path, name=identifier))

    def extend_theme(self, base: ThemeRef,
                     extension: Union[ThemeExtension, ThemeData, Mapping]) -> 'ThemeConfig':
        if isinstance(extension, ThemeExtension):
            extension = replace(extension, base=base)
        elif isinstance(extension, ThemeData):
            extension = ThemeExtension(base=base, data=check_theme_data(extension, partial=True))
        else:
            extension = ThemeExtension.from_dict(base, extension)
        self.extensions.append(extension)
        return self


def _check_identifier(identifier, parameter: str) -> str:
    if not isinstance(identifier, str) or not identifier.strip():
        raise InvalidParameter(
            parameter, identifier,
            message=f"Theme {parameter} must be a non-empty string, got {identifier!r}.",
        )
    return identifier.strip().lower()


# =============================================================================
# Merging
# =============================================================================

def _cat(base: tuple, extras: Sequence[tuple]) -> tuple:
    merged = list(base)
    for extra in extras:
        merged.extend(extra)
    return tuple(merged)


def _merge_gender(base: GenderNameData, extras: List[GenderNameData]) -> GenderNameData:
    return GenderNameData(
        prefixes=_cat(base.prefixes, [e.prefixes for e in extras]),
        cores=_cat(base.cores, [e.cores for e in extras]),
        suffixes=_cat(base.suffixes, [e.suffixes for e in extras]),
    )


def _merge_buildings(base: BuildingNameData, extras: List[BuildingNameData]) -> BuildingNameData:
    types = dict(base.types)
    for extra in extras:
        for bt, data in extra.types.items():
            current = types.get(bt, BuildingTypeData())
            types[bt] = BuildingTypeData(
                prefixes=current.prefixes + data.prefixes,
                descriptors=current.descriptors + data.descriptors,
                suffixes=current.suffixes + data.suffixes,
            )
    return BuildingNameData(
        generic_prefixes=_cat(base.generic_prefixes, [e.generic_prefixes for e in extras]),
        generic_suffixes=_cat(base.generic_suffixes, [e.generic_suffixes for e in extras]),
        types=MappingProxyType({bt: types[bt] for bt in BuildingType if bt in types}),
    )


def merge_theme(base: ThemeData, extensions: Sequence[ThemeData]) -> ThemeData:
    """Append every extension's pools to the base theme, in order."""
    if not extensions:
        return base
    npc = NpcNameData(**{
        g.value: _merge_gender(base.npc_names.for_gender(g),
                               [e.npc_names.for_gender(g) for e in extensions])
        for g in Gender
    })

    def simple(attr, cls):
        current = getattr(base, attr)
        pools = {}
        for f in fields(cls):
            name = f.name
            pools[name] = _cat(getattr(current, name),
                               [getattr(getattr(e, attr), name) for e in extensions])
        return cls(**pools)

    return replace(
        base,
        npc_names=npc,
        building_names=_merge_buildings(base.building_names,
                                        [e.building_names for e in extensions]),
        city_names=simple('city_names', CityNameData),
        district_names=simple('district_names', DistrictNameData),
        street_names=simple('street_names', StreetNameData),
        faction_names=simple('faction_names', FactionNameData),
    )


# =============================================================================
# Registry
# =============================================================================

class ThemeRegistry:
    """
    Theme lookup for one generator.

    Built-in data is loaded (and validated) once per process and shared;
    custom themes and extensions are local to the registry.
    """

    def __init__(self, config: Optional[ThemeConfig] = None):
        self._builtin = load_builtin_themes()
        self._custom: Dict[str, ThemeData] = {}
        self._extensions: Dict[ThemeRef, List[ThemeData]] = {}
        self._merged: Dict[ThemeRef, ThemeData] = {}

        if config is not None:
            for identifier, data in config.custom_themes.items():
                self.register_custom_theme(identifier, data)
            for extension in config.extensions:
                self.register_extension(extension.base, extension.data)

    def register_custom_theme(self, identifier: str, theme_data: ThemeData):
        """
        Install a complete theme under identifier.

        Raises
        ------
        InvalidParameter
            If the identifier is empty, reserved or already taken.
        ThemeDataError
            If any pool, building type or template is missing or malformed.
        """
        key = _check_identifier(identifier, 'identifier')
        if key in RESERVED_IDENTIFIERS:
            raise InvalidParameter(
                'identifier', identifier,
                message=f"The identifier '{identifier}' is reserved for built-in themes. "
                        f"Please use a different identifier.",
            )
        if key in self._custom:
            raise InvalidParameter(
                'identifier', identifier,
                message=f"A custom theme with identifier '{identifier}' has already been "
                        f"registered. Please use a different identifier.",
            )
        check_theme_data(theme_data)
        self._custom[key] = theme_data
        self._merged.pop(key, None)
        logger.debug("Registered custom theme '%s'", key)

    def register_extension(self, base: ThemeRef, extension_data: ThemeData):
        key = self.resolve(base)
        check_theme_data(extension_data, partial=True)
        self._extensions.setdefault(key, []).append(extension_data)
        self._merged.pop(key, None)
        logger.debug("Registered extension for theme '%s'", self.label(key))

    def resolve(self, theme) -> ThemeRef:
        """
        Canonical key for a theme reference.

        Raises
        ------
        InvalidParameter
            For anything that is not a Theme, a built-in theme name or a
            registered custom identifier.
        """
        if isinstance(theme, Theme):
            return theme
        if isinstance(theme, str):
            key = theme.strip().lower()
            for builtin in Theme:
                if key in (builtin.value, builtin.name.lower()):
                    return builtin
            if key in self._custom:
                return key
        raise InvalidParameter('theme', theme, self.theme_names())

    def label(self, key: ThemeRef) -> str:
        return key.label if isinstance(key, Theme) else key

    def get_theme(self, theme) -> ThemeData:
        """Theme data merged with its extensions."""
        key = self.resolve(theme)
        cached = self._merged.get(key)
        if cached is not None:
            return cached
        base = self._builtin[key] if isinstance(key, Theme) else self._custom[key]
        merged = merge_theme(base, self._extensions.get(key, []))
        self._merged[key] = merged
        return merged

    def fragments_for(self, theme, entity_type, modifier=None):
        return self.get_theme(theme).fragments_for(entity_type, modifier)

    def has_custom_theme(self, identifier) -> bool:
        return isinstance(identifier, str) and identifier.strip().lower() in self._custom

    def theme_names(self) -> List[str]:
        """Built-in theme names followed by custom identifiers."""
        return enum_labels(Theme) + list(self._custom)


__all__ = [
    'ThemeConfig',
    'ThemeExtension',
    'ThemeRegistry',
    'merge_theme',
    'RESERVED_IDENTIFIERS',
]
