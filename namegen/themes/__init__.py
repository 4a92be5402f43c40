#!/usr/bin/env python3
"""
Theme Data Store
================
Loads per-theme lexical fragments and composition templates from YAML.

Usage:
    from namegen.themes import load_builtin_theme, load_theme_file
    from namegen.enums import Theme, EntityType

    elves = load_builtin_theme(Theme.ELVES)
    pools = elves.fragments_for(EntityType.CITY)
    template = elves.template_for(EntityType.CITY)

Every built-in theme lives in its own YAML file next to this module and must
provide non-empty pools for every entity category, every gender and every
building type. Loaded data is frozen (tuples, read-only mappings) and cached,
so one copy is shared by all generator instances.
"""

import logging
import string
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import yaml

from ..enums import BuildingType, EntityType, Gender, Theme
from ..exceptions import ThemeDataError

logger = logging.getLogger(__name__)

# Theme YAML directory
THEMES_DIR = Path(__file__).parent

Pool = Tuple[str, ...]


# =============================================================================
# Layout
# =============================================================================

# Placeholders each template must use, in draw order.
PLACEHOLDERS: Dict[str, Tuple[str, ...]] = {
    'npc': ('prefix', 'core', 'suffix'),
    'building': ('prefix', 'descriptor', 'suffix'),
    'building_generic': ('prefix', 'suffix'),
    'city': ('prefix', 'core', 'suffix'),
    'district': ('descriptor', 'location_type'),
    'street': ('prefix', 'core', 'street_suffix'),
    'faction': ('prefix', 'core', 'suffix'),
}

DEFAULT_TEMPLATES: Dict[str, str] = {
    'npc': '{prefix}{core}{suffix}',
    'building': '{prefix} {descriptor}{suffix}',
    'building_generic': '{prefix}{suffix}',
    'city': '{prefix}{core}{suffix}',
    'district': '{descriptor} {location_type}',
    'street': '{prefix}{core} {street_suffix}',
    'faction': '{prefix} {core}{suffix}',
}

# Pool names per simple section. The first field listed in PRIMARY_POOLS may
# not hold empty strings, so every composed name has visible text.
SECTION_POOLS: Dict[str, Tuple[str, ...]] = {
    'city_names': ('prefixes', 'cores', 'suffixes'),
    'district_names': ('descriptors', 'location_types'),
    'street_names': ('prefixes', 'cores', 'street_suffixes'),
    'faction_names': ('prefixes', 'cores', 'suffixes'),
}
GENDER_POOLS = ('prefixes', 'cores', 'suffixes')
BUILDING_TYPE_POOLS = ('prefixes', 'descriptors', 'suffixes')
GENERIC_BUILDING_POOLS = ('generic_prefixes', 'generic_suffixes')
PRIMARY_POOLS = {'cores', 'descriptors', 'generic_prefixes'}


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class GenderNameData:
    """NPC fragments for one gender."""
    prefixes: Pool = ()
    cores: Pool = ()
    suffixes: Pool = ()


@dataclass(frozen=True)
class NpcNameData:
    male: GenderNameData = field(default_factory=GenderNameData)
    female: GenderNameData = field(default_factory=GenderNameData)
    neutral: GenderNameData = field(default_factory=GenderNameData)

    def for_gender(self, gender: Gender) -> GenderNameData:
        return getattr(self, gender.value)


@dataclass(frozen=True)
class BuildingTypeData:
    """Fragments for one BuildingType."""
    prefixes: Pool = ()
    descriptors: Pool = ()
    suffixes: Pool = ()


@dataclass(frozen=True)
class BuildingNameData:
    generic_prefixes: Pool = ()
    generic_suffixes: Pool = ()
    types: Mapping[BuildingType, BuildingTypeData] = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True)
class CityNameData:
    prefixes: Pool = ()
    cores: Pool = ()
    suffixes: Pool = ()


@dataclass(frozen=True)
class DistrictNameData:
    descriptors: Pool = ()
    location_types: Pool = ()


@dataclass(frozen=True)
class StreetNameData:
    prefixes: Pool = ()
    cores: Pool = ()
    street_suffixes: Pool = ()


@dataclass(frozen=True)
class FactionNameData:
    prefixes: Pool = ()
    cores: Pool = ()
    suffixes: Pool = ()


@dataclass(frozen=True)
class ThemeData:
    """All fragment pools and templates of one theme."""
    name: str
    npc_names: NpcNameData = field(default_factory=NpcNameData)
    building_names: BuildingNameData = field(default_factory=BuildingNameData)
    city_names: CityNameData = field(default_factory=CityNameData)
    district_names: DistrictNameData = field(default_factory=DistrictNameData)
    street_names: StreetNameData = field(default_factory=StreetNameData)
    faction_names: FactionNameData = field(default_factory=FactionNameData)
    templates: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_TEMPLATES))
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], name: Optional[str] = None) -> 'ThemeData':
        """
        Build and validate a complete theme from a mapping.

        The mapping uses the same layout as the bundled YAML files.

        Raises
        ------
        ThemeDataError
            Listing every problem found, not just the first.
        """
        label = name or _label_of(data)
        errors = validate_theme_dict(data, label)
        if errors:
            raise ThemeDataError(label, errors)
        return _build_theme(data, label)

    def fragments_for(self, entity_type: EntityType, modifier=None) -> Tuple[Pool, ...]:
        """
        Fragment pools for a category, in draw order.

        modifier is a Gender for NPCs (required) and an optional BuildingType
        for buildings; other categories ignore it.
        """
        if entity_type is EntityType.NPC:
            data = self.npc_names.for_gender(modifier)
            return (data.prefixes, data.cores, data.suffixes)
        if entity_type is EntityType.BUILDING:
            if modifier is None:
                b = self.building_names
                return (b.generic_prefixes, b.generic_suffixes)
            t = self.building_names.types[modifier]
            return (t.prefixes, t.descriptors, t.suffixes)
        if entity_type is EntityType.CITY:
            c = self.city_names
            return (c.prefixes, c.cores, c.suffixes)
        if entity_type is EntityType.DISTRICT:
            d = self.district_names
            return (d.descriptors, d.location_types)
        if entity_type is EntityType.STREET:
            s = self.street_names
            return (s.prefixes, s.cores, s.street_suffixes)
        if entity_type is EntityType.FACTION:
            f = self.faction_names
            return (f.prefixes, f.cores, f.suffixes)
        raise ValueError(f"Unknown entity type: {entity_type}")

    def template_for(self, entity_type: EntityType, modifier=None) -> str:
        return self.templates[template_key(entity_type, modifier)]


def template_key(entity_type: EntityType, modifier=None) -> str:
    """Template name for a category; untyped buildings use the generic one."""
    if entity_type is EntityType.BUILDING and modifier is None:
        return 'building_generic'
    return entity_type.value


# =============================================================================
# Validation
# =============================================================================

def _label_of(data: Any) -> str:
    if isinstance(data, Mapping) and isinstance(data.get('theme'), str):
        return data['theme']
    return '<custom>'


def _check_pool(value: Any, context: str, errors: List[str],
                required: bool = True, primary: bool = False):
    """Validate one fragment list, appending problems to errors."""
    if value is None:
        if required:
            errors.append(f"{context} is missing")
        return
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        errors.append(f"{context} must be a list of strings")
        return
    if not value:
        if required:
            errors.append(f"{context} is empty")
        return

    invalid = []
    for i, entry in enumerate(value):
        if not isinstance(entry, str):
            invalid.append(f"index {i} (not a string: {entry!r})")
        elif entry and not entry.strip():
            invalid.append(f"index {i} (whitespace-only: '{entry}')")
        elif not entry and primary:
            invalid.append(f"index {i} (empty)")
    if invalid:
        errors.append(f"{context} contains invalid entries at {', '.join(invalid)}")


def _check_section(section: Any, context: str, pools: Tuple[str, ...],
                   errors: List[str], partial: bool):
    if section is None:
        if not partial:
            errors.append(f"{context} is missing")
        return
    if not isinstance(section, Mapping):
        errors.append(f"{context} must be a mapping")
        return
    for pool in pools:
        _check_pool(section.get(pool), f"{context}.{pool}", errors,
                    required=not partial, primary=pool in PRIMARY_POOLS)


def _check_templates(templates: Any, errors: List[str]):
    if templates is None:
        return
    if not isinstance(templates, Mapping):
        errors.append("templates must be a mapping")
        return
    formatter = string.Formatter()
    for key, template in templates.items():
        if key not in PLACEHOLDERS:
            errors.append(f"templates.{key} is not a known template "
                          f"(expected one of: {', '.join(PLACEHOLDERS)})")
            continue
        if not isinstance(template, str):
            errors.append(f"templates.{key} must be a string")
            continue
        try:
            fields = [f for _, f, _, _ in formatter.parse(template) if f is not None]
        except ValueError as e:
            errors.append(f"templates.{key} is malformed: {e}")
            continue
        expected = PLACEHOLDERS[key]
        if sorted(fields) != sorted(expected):
            errors.append(
                f"templates.{key} must use each of {{{'}, {'.join(expected)}}} exactly once, "
                f"got {template!r}"
            )


def validate_theme_dict(data: Any, label: str = '<custom>', partial: bool = False) -> List[str]:
    """
    Check raw theme data and return a list of problems (empty when valid).

    With partial=True (extensions) every section and pool is optional, but
    whatever is present must be well-formed.
    """
    errors: List[str] = []
    if not isinstance(data, Mapping):
        return [f"theme data for '{label}' must be a mapping, got {type(data).__name__}"]

    npc = data.get('npc_names')
    if npc is None:
        if not partial:
            errors.append("npc_names is missing")
    elif not isinstance(npc, Mapping):
        errors.append("npc_names must be a mapping")
    else:
        for gender in Gender:
            _check_section(npc.get(gender.value), f"npc_names.{gender.value}",
                           GENDER_POOLS, errors, partial)

    building = data.get('building_names')
    if building is None:
        if not partial:
            errors.append("building_names is missing")
    elif not isinstance(building, Mapping):
        errors.append("building_names must be a mapping")
    else:
        for pool in GENERIC_BUILDING_POOLS:
            _check_pool(building.get(pool), f"building_names.{pool}", errors,
                        required=not partial, primary=pool in PRIMARY_POOLS)
        types = building.get('types')
        if types is None:
            if not partial:
                errors.append("building_names.types is missing")
        elif not isinstance(types, Mapping):
            errors.append("building_names.types must be a mapping")
        else:
            known = {bt.value for bt in BuildingType}
            for key in types:
                if str(key).lower() not in known:
                    errors.append(f"building_names.types.{key} is not a known building type")
            lowered = {str(k).lower(): v for k, v in types.items()}
            for bt in BuildingType:
                section = lowered.get(bt.value)
                if section is None and partial:
                    continue
                _check_section(section, f"building_names.types.{bt.value}",
                               BUILDING_TYPE_POOLS, errors, partial)

    for section, pools in SECTION_POOLS.items():
        _check_section(data.get(section), section, pools, errors, partial)

    _check_templates(data.get('templates'), errors)
    return errors


# =============================================================================
# Construction
# =============================================================================

def _pool(section: Optional[Mapping], key: str) -> Pool:
    if not section:
        return ()
    return tuple(section.get(key) or ())


def _build_theme(data: Mapping[str, Any], label: str) -> ThemeData:
    """Freeze validated raw data into a ThemeData. Missing pools become empty."""
    npc = data.get('npc_names') or {}
    genders = {}
    for gender in Gender:
        section = npc.get(gender.value)
        genders[gender.value] = GenderNameData(
            *(_pool(section, p) for p in GENDER_POOLS)
        )

    building = data.get('building_names') or {}
    raw_types = {str(k).lower(): v for k, v in (building.get('types') or {}).items()}
    types = {}
    for bt in BuildingType:
        if bt.value in raw_types:
            types[bt] = BuildingTypeData(
                *(_pool(raw_types[bt.value], p) for p in BUILDING_TYPE_POOLS)
            )

    templates = dict(DEFAULT_TEMPLATES)
    templates.update(data.get('templates') or {})

    def section(name, cls):
        raw = data.get(name)
        return cls(*(_pool(raw, p) for p in SECTION_POOLS[name]))

    return ThemeData(
        name=label,
        npc_names=NpcNameData(**genders),
        building_names=BuildingNameData(
            generic_prefixes=_pool(building, 'generic_prefixes'),
            generic_suffixes=_pool(building, 'generic_suffixes'),
            types=MappingProxyType(types),
        ),
        city_names=section('city_names', CityNameData),
        district_names=section('district_names', DistrictNameData),
        street_names=section('street_names', StreetNameData),
        faction_names=section('faction_names', FactionNameData),
        templates=MappingProxyType(templates),
    )


def build_partial_theme(data: Mapping[str, Any], label: str) -> ThemeData:
    """Validate and freeze extension data, where every pool is optional."""
    errors = validate_theme_dict(data, label, partial=True)
    if errors:
        raise ThemeDataError(label, errors)
    return _build_theme(data, label)


def theme_to_dict(theme_data: ThemeData) -> Dict[str, Any]:
    """Raw mapping for a ThemeData, in the layout of the bundled YAML files."""
    def pools(obj, names):
        raw = {}
        for n in names:
            value = getattr(obj, n)
            raw[n] = list(value) if isinstance(value, (list, tuple)) else value
        return raw

    building = theme_data.building_names
    return {
        'theme': theme_data.name,
        'npc_names': {
            g.value: pools(theme_data.npc_names.for_gender(g), GENDER_POOLS) for g in Gender
        },
        'building_names': {
            **pools(building, GENERIC_BUILDING_POOLS),
            'types': {
                (bt.value if isinstance(bt, BuildingType) else repr(bt)):
                    pools(data, BUILDING_TYPE_POOLS)
                for bt, data in building.types.items()
            },
        },
        **{section: pools(getattr(theme_data, section), names)
           for section, names in SECTION_POOLS.items()},
        'templates': (dict(theme_data.templates)
                      if isinstance(theme_data.templates, Mapping) else theme_data.templates),
    }


def validate_theme_data(theme_data: Any, partial: bool = False) -> List[str]:
    """
    Check an already built ThemeData and return a list of problems.

    Applies the same rules as validate_theme_dict. A complete theme must
    also carry a template for every category.
    """
    if not isinstance(theme_data, ThemeData):
        return [f"expected ThemeData, got {type(theme_data).__name__}"]
    try:
        raw = theme_to_dict(theme_data)
    except (AttributeError, TypeError) as e:
        return [f"theme data is malformed: {e}"]

    errors = validate_theme_dict(raw, theme_data.name, partial=partial)
    if not partial and isinstance(raw['templates'], Mapping):
        missing = [key for key in PLACEHOLDERS if key not in raw['templates']]
        if missing:
            errors.append(f"templates is missing: {', '.join(missing)}")
    return errors


def check_theme_data(theme_data: Any, partial: bool = False) -> ThemeData:
    """Return theme_data unchanged, or raise ThemeDataError listing every problem."""
    errors = validate_theme_data(theme_data, partial=partial)
    if errors:
        raise ThemeDataError(getattr(theme_data, 'name', '<custom>'), errors)
    return theme_data


# =============================================================================
# Loaders
# =============================================================================

def _read_yaml(path: Path, label: str) -> Any:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ThemeDataError(label, [f"theme file not found: {path}"]) from e
    except OSError as e:
        raise ThemeDataError(label, [f"unable to read theme file {path}: {e}"]) from e
    except yaml.YAMLError as e:
        raise ThemeDataError(label, [f"invalid YAML in {path}: {e}"]) from e


def load_theme_file(path: Union[str, Path], name: Optional[str] = None) -> ThemeData:
    """
    Load a complete theme from a YAML (or JSON) file.

    Raises
    ------
    ThemeDataError
        If the file is missing, unparsable or incomplete.
    """
    path = Path(path)
    label = name or path.stem
    data = _read_yaml(path, label)
    if data is None:
        raise ThemeDataError(label, [f"theme file is empty: {path}"])
    if name is None and isinstance(data, Mapping) and isinstance(data.get('theme'), str):
        label = data['theme']
    return ThemeData.from_dict(data, name=label)


@lru_cache(maxsize=None)
def load_builtin_theme(theme: Theme) -> ThemeData:
    """Load one bundled theme. Cached, so every caller shares one copy."""
    path = THEMES_DIR / f'{theme.value}.yaml'
    data = _read_yaml(path, theme.label)
    theme_data = ThemeData.from_dict(data if data is not None else {}, name=theme.label)
    logger.debug("Loaded %s theme from %s", theme.label, path.name)
    return theme_data


@lru_cache(maxsize=1)
def load_builtin_themes() -> Mapping[Theme, ThemeData]:
    """Load and validate every bundled theme."""
    return MappingProxyType({theme: load_builtin_theme(theme) for theme in Theme})


def fragments_for(theme: Theme, entity_type: EntityType, modifier=None) -> Tuple[Pool, ...]:
    """Fragment pools of a built-in theme, in draw order."""
    return load_builtin_theme(theme).fragments_for(entity_type, modifier)


__all__ = [
    'ThemeData',
    'GenderNameData',
    'NpcNameData',
    'BuildingTypeData',
    'BuildingNameData',
    'CityNameData',
    'DistrictNameData',
    'StreetNameData',
    'FactionNameData',
    'PLACEHOLDERS',
    'DEFAULT_TEMPLATES',
    'THEMES_DIR',
    'template_key',
    'validate_theme_dict',
    'build_partial_theme',
    'theme_to_dict',
    'validate_theme_data',
    'check_theme_data',
    'load_theme_file',
    'load_builtin_theme',
    'load_builtin_themes',
    'fragments_for',
]
