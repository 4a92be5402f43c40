"""Shared fixtures for namegen tests."""

import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namegen.enums import BuildingType


def single_name_theme(npc='Solo', building='Hut', city='Onlyton',
                      district='Lone Ward', street='Single Way', faction='Sole Order'):
    """Theme data where every category can produce exactly one name."""
    gender = {'prefixes': [''], 'cores': [npc], 'suffixes': ['']}
    first, _, second = district.partition(' ')
    s_core, _, s_suffix = street.partition(' ')
    f_prefix, _, f_core = faction.partition(' ')
    return {
        'theme': 'Single',
        'npc_names': {'male': gender, 'female': gender, 'neutral': gender},
        'building_names': {
            'generic_prefixes': [building],
            'generic_suffixes': [''],
            'types': {
                bt.value: {'prefixes': [building], 'descriptors': [bt.label], 'suffixes': ['']}
                for bt in BuildingType
            },
        },
        'city_names': {'prefixes': [''], 'cores': [city], 'suffixes': ['']},
        'district_names': {'descriptors': [first], 'location_types': [second]},
        'street_names': {'prefixes': [''], 'cores': [s_core], 'street_suffixes': [s_suffix]},
        'faction_names': {'prefixes': [f_prefix], 'cores': [f_core], 'suffixes': ['']},
    }


@pytest.fixture
def single_theme_data():
    return single_name_theme()
