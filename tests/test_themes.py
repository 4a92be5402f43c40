"""
Tests for the Theme Data Store
==============================
Bundled theme completeness, validation messages and file loading.
"""

import json
import pytest
import sys
from dataclasses import replace
from pathlib import Path

import yaml

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namegen.enums import BuildingType, EntityType, Gender, Theme
from namegen.exceptions import ThemeDataError
from namegen.themes import (
    DEFAULT_TEMPLATES,
    CityNameData,
    ThemeData,
    fragments_for,
    load_builtin_theme,
    load_builtin_themes,
    load_theme_file,
    theme_to_dict,
    validate_theme_data,
    validate_theme_dict,
)
from conftest import single_name_theme


class TestBuiltinThemes:
    """Every bundled theme is complete."""

    def test_all_themes_load(self):
        themes = load_builtin_themes()
        assert set(themes) == set(Theme)

    def test_loader_is_cached(self):
        """One shared copy per theme."""
        assert load_builtin_theme(Theme.ELVES) is load_builtin_theme(Theme.ELVES)

    @pytest.mark.parametrize('theme', list(Theme))
    def test_every_gender_has_pools(self, theme):
        data = load_builtin_theme(theme)
        for gender in Gender:
            pools = data.fragments_for(EntityType.NPC, gender)
            assert len(pools) == 3
            assert all(len(pool) > 0 for pool in pools)

    @pytest.mark.parametrize('theme', list(Theme))
    def test_every_building_type_has_pools(self, theme):
        data = load_builtin_theme(theme)
        for bt in BuildingType:
            pools = data.fragments_for(EntityType.BUILDING, bt)
            assert all(len(pool) > 0 for pool in pools)
        generic = data.fragments_for(EntityType.BUILDING)
        assert len(generic) == 2
        assert all(len(pool) > 0 for pool in generic)

    @pytest.mark.parametrize('theme', list(Theme))
    @pytest.mark.parametrize('entity_type', [
        EntityType.CITY, EntityType.DISTRICT, EntityType.STREET, EntityType.FACTION,
    ])
    def test_simple_categories_have_pools(self, theme, entity_type):
        pools = fragments_for(theme, entity_type)
        assert pools
        assert all(len(pool) > 0 for pool in pools)

    @pytest.mark.parametrize('theme', list(Theme))
    def test_pools_are_immutable(self, theme):
        data = load_builtin_theme(theme)
        assert isinstance(data.city_names.cores, tuple)
        with pytest.raises(Exception):
            data.city_names = None

    def test_templates_present(self):
        for theme in Theme:
            data = load_builtin_theme(theme)
            assert set(data.templates) == set(DEFAULT_TEMPLATES)

    def test_reserved_yaml_words_stay_strings(self):
        suffixes = load_builtin_theme(Theme.CYBERPUNK).npc_names.neutral.suffixes
        assert 'Null' in suffixes
        for theme in Theme:
            raw = theme_to_dict(load_builtin_theme(theme))
            assert validate_theme_data(load_builtin_theme(theme)) == []
            assert raw['theme'] == theme.label

    def test_bundled_files_validate_cleanly(self):
        themes_dir = ROOT / 'namegen' / 'themes'
        for theme in Theme:
            raw = yaml.safe_load((themes_dir / f'{theme.value}.yaml').read_text(encoding='utf-8'))
            assert validate_theme_dict(raw, theme.label) == []


class TestValidation:
    """Validation collects every problem."""

    def test_empty_mapping_reports_all_sections(self):
        errors = validate_theme_dict({})
        for section in ('npc_names', 'building_names', 'city_names',
                        'district_names', 'street_names', 'faction_names'):
            assert f"{section} is missing" in errors

    def test_not_a_mapping(self):
        errors = validate_theme_dict(['a', 'b'], 'broken')
        assert len(errors) == 1
        assert 'must be a mapping' in errors[0]

    def test_valid_minimal_theme(self):
        assert validate_theme_dict(single_name_theme()) == []

    def test_missing_gender(self):
        data = single_name_theme()
        del data['npc_names']['neutral']
        assert "npc_names.neutral is missing" in validate_theme_dict(data)

    def test_missing_building_type(self):
        data = single_name_theme()
        del data['building_names']['types']['medical']
        assert "building_names.types.medical is missing" in validate_theme_dict(data)

    def test_unknown_building_type(self):
        data = single_name_theme()
        data['building_names']['types']['spaceport'] = {
            'prefixes': ['A'], 'descriptors': ['B'], 'suffixes': ['C'],
        }
        errors = validate_theme_dict(data)
        assert any('spaceport' in e for e in errors)

    def test_empty_pool(self):
        data = single_name_theme()
        data['city_names']['cores'] = []
        assert "city_names.cores is empty" in validate_theme_dict(data)

    def test_whitespace_only_entry(self):
        data = single_name_theme()
        data['street_names']['street_suffixes'] = ['Way', '   ']
        errors = validate_theme_dict(data)
        assert any('whitespace-only' in e and 'index 1' in e for e in errors)

    def test_empty_string_in_primary_pool(self):
        data = single_name_theme()
        data['faction_names']['cores'] = ['Order', '']
        errors = validate_theme_dict(data)
        assert any('faction_names.cores' in e and '(empty)' in e for e in errors)

    def test_empty_string_allowed_in_affix_pool(self):
        data = single_name_theme()
        data['city_names']['suffixes'] = ['', 'ton']
        assert validate_theme_dict(data) == []

    def test_non_string_entry(self):
        data = single_name_theme()
        data['district_names']['descriptors'] = ['Old', 7]
        errors = validate_theme_dict(data)
        assert any('not a string' in e for e in errors)

    def test_pool_must_be_list(self):
        data = single_name_theme()
        data['city_names']['prefixes'] = 'Neo'
        errors = validate_theme_dict(data)
        assert "city_names.prefixes must be a list of strings" in errors

    def test_template_with_wrong_placeholders(self):
        data = single_name_theme()
        data['templates'] = {'city': '{prefix}{suffix}'}
        errors = validate_theme_dict(data)
        assert any(e.startswith('templates.city') for e in errors)

    def test_unknown_template(self):
        data = single_name_theme()
        data['templates'] = {'planet': '{prefix}'}
        errors = validate_theme_dict(data)
        assert any('templates.planet' in e for e in errors)

    def test_malformed_template(self):
        data = single_name_theme()
        data['templates'] = {'district': '{descriptor {location_type}'}
        errors = validate_theme_dict(data)
        assert any('templates.district' in e for e in errors)

    def test_from_dict_raises_with_all_errors(self):
        data = single_name_theme()
        data['city_names']['cores'] = []
        data['street_names']['cores'] = []
        with pytest.raises(ThemeDataError) as exc_info:
            ThemeData.from_dict(data, name='broken')
        err = exc_info.value
        assert err.theme == 'broken'
        assert len(err.errors) == 2
        assert "city_names.cores is empty" in str(err)
        assert "street_names.cores is empty" in str(err)

    def test_partial_allows_missing_sections(self):
        assert validate_theme_dict({'city_names': {'prefixes': ['Neo']}}, partial=True) == []

    def test_partial_still_checks_entries(self):
        errors = validate_theme_dict({'city_names': {'prefixes': [' ']}}, partial=True)
        assert errors


class TestThemeData:

    def test_template_override(self):
        data = single_name_theme()
        data['templates'] = {'city': '{core}-{prefix}{suffix}'}
        theme = ThemeData.from_dict(data)
        assert theme.template_for(EntityType.CITY) == '{core}-{prefix}{suffix}'
        assert theme.template_for(EntityType.STREET) == DEFAULT_TEMPLATES['street']

    def test_generic_building_template(self):
        theme = ThemeData.from_dict(single_name_theme())
        assert theme.template_for(EntityType.BUILDING) == DEFAULT_TEMPLATES['building_generic']
        assert theme.template_for(EntityType.BUILDING, BuildingType.MEDICAL) == DEFAULT_TEMPLATES['building']

    def test_name_from_theme_key(self):
        assert ThemeData.from_dict(single_name_theme()).name == 'Single'

    def test_building_type_keys_case_insensitive(self):
        data = single_name_theme()
        types = data['building_names']['types']
        data['building_names']['types'] = {k.capitalize(): v for k, v in types.items()}
        theme = ThemeData.from_dict(data)
        assert set(theme.building_names.types) == set(BuildingType)


class TestValidateThemeData:
    """Already built ThemeData objects go through the same checks."""

    def test_complete_theme(self, single_theme_data):
        assert validate_theme_data(ThemeData.from_dict(single_theme_data)) == []

    def test_empty_theme(self):
        errors = validate_theme_data(ThemeData(name='hollow'))
        assert 'city_names.cores is empty' in errors
        assert 'npc_names.male.prefixes is empty' in errors
        assert 'building_names.types.medical is missing' in errors

    def test_empty_theme_partial(self):
        assert validate_theme_data(ThemeData(name='hollow'), partial=True) == []

    def test_missing_building_type(self, single_theme_data):
        theme = ThemeData.from_dict(single_theme_data)
        types = {bt: data for bt, data in theme.building_names.types.items()
                 if bt is not BuildingType.MEDICAL}
        broken = replace(theme, building_names=replace(theme.building_names, types=types))
        assert validate_theme_data(broken) == ['building_names.types.medical is missing']

    def test_string_building_type_key(self, single_theme_data):
        theme = ThemeData.from_dict(single_theme_data)
        types = {bt.value: data for bt, data in theme.building_names.types.items()}
        broken = replace(theme, building_names=replace(theme.building_names, types=types))
        assert validate_theme_data(broken)

    def test_bad_entries(self, single_theme_data):
        theme = ThemeData.from_dict(single_theme_data)
        broken = replace(theme, city_names=CityNameData(prefixes=('',), cores=('',), suffixes=(' ',)))
        errors = validate_theme_data(broken)
        assert len(errors) == 2
        assert errors[0].startswith('city_names.cores contains invalid entries')
        assert 'whitespace-only' in errors[1]

    def test_string_pool(self, single_theme_data):
        theme = ThemeData.from_dict(single_theme_data)
        broken = replace(theme, city_names=CityNameData(prefixes=('',), cores='Onlyton', suffixes=('',)))
        assert validate_theme_data(broken) == ['city_names.cores must be a list of strings']

    def test_missing_template(self, single_theme_data):
        theme = ThemeData.from_dict(single_theme_data)
        templates = {k: v for k, v in theme.templates.items() if k != 'street'}
        errors = validate_theme_data(replace(theme, templates=templates))
        assert errors == ['templates is missing: street']

    def test_not_theme_data(self):
        assert validate_theme_data({'theme': 'x'}) == ['expected ThemeData, got dict']


class TestLoadThemeFile:

    def test_load_yaml(self, tmp_path):
        path = tmp_path / 'single.yaml'
        path.write_text(yaml.safe_dump(single_name_theme()), encoding='utf-8')
        theme = load_theme_file(path)
        assert theme.name == 'Single'
        assert theme.city_names.cores == ('Onlyton',)

    def test_load_json(self, tmp_path):
        path = tmp_path / 'single.json'
        path.write_text(json.dumps(single_name_theme()), encoding='utf-8')
        theme = load_theme_file(path, name='jsonic')
        assert theme.name == 'jsonic'

    def test_missing_file(self, tmp_path):
        with pytest.raises(ThemeDataError) as exc_info:
            load_theme_file(tmp_path / 'nope.yaml')
        assert 'not found' in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / 'bad.yaml'
        path.write_text("npc_names: [unclosed\n", encoding='utf-8')
        with pytest.raises(ThemeDataError) as exc_info:
            load_theme_file(path)
        assert isinstance(exc_info.value.__cause__, yaml.YAMLError)

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text('', encoding='utf-8')
        with pytest.raises(ThemeDataError):
            load_theme_file(path)

    def test_incomplete_file(self, tmp_path):
        data = single_name_theme()
        del data['faction_names']
        path = tmp_path / 'partial.yaml'
        path.write_text(yaml.safe_dump(data), encoding='utf-8')
        with pytest.raises(ThemeDataError) as exc_info:
            load_theme_file(path)
        assert "faction_names is missing" in exc_info.value.errors
