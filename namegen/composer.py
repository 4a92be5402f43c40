#!/usr/bin/env python3
"""
Name Composer
=============
Turns one draw per fragment pool into a candidate name.

Every category follows the same recipe: fetch the ordered pools for
(theme, category, modifier), draw one fragment from each with a single
rng.next_index() call, substitute the fragments into the theme's template and
normalize whitespace. Uniqueness is not checked here; see NameGenerator.
"""

from typing import Optional

from .enums import EntityType, Gender
from .random_sequence import RandomSequence
from .themes import PLACEHOLDERS, template_key

# Order used when a gender has to be drawn.
GENDERS = tuple(Gender)


def draw_gender(rng: RandomSequence) -> Gender:
    """Seeded three-way pick over Male, Female, Neutral."""
    return GENDERS[rng.next_index(len(GENDERS))]


def normalize(name: str) -> str:
    """Strip the ends and collapse runs of whitespace to one space."""
    return ' '.join(name.split())


class Composer:
    """
    Synthesizes candidate names from a theme store.

    The store is anything with get_theme(theme) -> ThemeData; normally a
    ThemeRegistry.
    """

    def __init__(self, store):
        self.store = store

    def synthesize(self, theme, entity_type: EntityType, modifier=None,
                   rng: Optional[RandomSequence] = None) -> str:
        """
        Build one candidate name.

        Parameters
        ----------
        theme : Theme or str
            Theme reference understood by the store.
        entity_type : EntityType
            Category to name.
        modifier : Gender or BuildingType, optional
            NPCs without a gender draw one; buildings without a type use the
            generic pools.
        rng : RandomSequence
            Source of every draw.
        """
        if rng is None:
            raise ValueError("rng is required")
        theme_data = self.store.get_theme(theme)

        if entity_type is EntityType.NPC and modifier is None:
            modifier = draw_gender(rng)
        elif entity_type not in (EntityType.NPC, EntityType.BUILDING):
            modifier = None

        pools = theme_data.fragments_for(entity_type, modifier)
        fields = PLACEHOLDERS[template_key(entity_type, modifier)]
        parts = {name: rng.choice(pool) for name, pool in zip(fields, pools)}

        return normalize(theme_data.template_for(entity_type, modifier).format(**parts))


__all__ = ['Composer', 'draw_gender', 'normalize', 'GENDERS']
