"""Read-only catalog of entity definitions and fusion recipes.

The catalog is static configuration built once at start-up by
:func:`make_catalog` and injected into every :class:`~kanji_universe.state.State`.
Derived indexes (noun -> object definition, display glyphs) are computed at
construction instead of being re-derived ad hoc during a turn.

Unknown definition ids are configuration errors: :meth:`Catalog.get` raises
:class:`UnknownDefinitionError` at the first dereference and never substitutes
a default.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from pyrsistent import pmap, pvector
from pyrsistent.typing import PMap, PVector

from kanji_universe.catalog.definition import EntityDef
from kanji_universe.catalog.recipe import FusionRecipe
from kanji_universe.types import NounKey, PropertyKey, TextRole

logger = logging.getLogger(__name__)


class UnknownDefinitionError(KeyError):
    """A placement, recipe or transform referenced a definition id not in the catalog."""

    def __init__(self, def_id: str) -> None:
        super().__init__(def_id)
        self.def_id = def_id

    def __str__(self) -> str:
        return f"Unknown entity definition: {self.def_id}"


@dataclass(frozen=True)
class Catalog:
    """Immutable definition/recipe lookup.

    Attributes:
        definitions: Definition id -> definition, in declaration order.
        recipes: Fusion recipes, searched in declaration order.
        object_def_by_noun: Noun -> id of the world-object definition for it.
        noun_glyphs: Noun -> display glyph.
        property_glyphs: Property -> display glyph of its text tile.
    """

    definitions: PMap[str, EntityDef]
    recipes: PVector[FusionRecipe]
    object_def_by_noun: PMap[NounKey, str]
    noun_glyphs: PMap[NounKey, str]
    property_glyphs: PMap[PropertyKey, str]
    def_order: PVector[str] = pvector()

    def get(self, def_id: str) -> EntityDef:
        definition = self.definitions.get(def_id)
        if definition is None:
            raise UnknownDefinitionError(def_id)
        return definition

    def __contains__(self, def_id: object) -> bool:
        return def_id in self.definitions

    def __iter__(self) -> Iterator[EntityDef]:
        return (self.definitions[def_id] for def_id in self.def_order)

    def __len__(self) -> int:
        return len(self.def_order)

    def object_def_for(self, noun: NounKey) -> Optional[EntityDef]:
        """World-object definition for ``noun`` or ``None`` if the noun has none."""
        def_id = self.object_def_by_noun.get(noun)
        return self.get(def_id) if def_id is not None else None

    def find_recipe(self, first: NounKey, second: NounKey) -> Optional[FusionRecipe]:
        for recipe in self.recipes:
            if recipe.matches(first, second):
                return recipe
        return None

    def noun_glyph(self, noun: NounKey) -> str:
        return self.noun_glyphs.get(noun, noun)

    def property_glyph(self, prop: PropertyKey) -> str:
        return self.property_glyphs.get(prop, prop.value.upper())


def make_catalog(
    definitions: Iterable[EntityDef], recipes: Iterable[FusionRecipe] = ()
) -> Catalog:
    """Build a :class:`Catalog` and its derived indexes.

    Args:
        definitions: Definitions; ids must be unique.
        recipes: Fusion recipes; every output must name a known definition.

    Returns:
        Catalog: The immutable catalog.

    Raises:
        ValueError: If two definitions share an id.
        UnknownDefinitionError: If a recipe outputs an unknown definition.
    """
    by_id: Dict[str, EntityDef] = {}
    object_by_noun: Dict[NounKey, str] = {}
    noun_glyphs: Dict[NounKey, str] = {}
    property_glyphs: Dict[PropertyKey, str] = {}

    for definition in definitions:
        if definition.id in by_id:
            raise ValueError(f"Duplicate entity definition: {definition.id}")
        by_id[definition.id] = definition
        if definition.is_object and definition.noun_key is not None:
            object_by_noun.setdefault(definition.noun_key, definition.id)
            noun_glyphs[definition.noun_key] = definition.glyph
        elif definition.text_role == TextRole.NOUN and definition.noun_key is not None:
            noun_glyphs.setdefault(definition.noun_key, definition.glyph)
        elif definition.property_key is not None:
            property_glyphs.setdefault(definition.property_key, definition.glyph)

    recipe_list = list(recipes)
    for recipe in recipe_list:
        if recipe.output_def_id not in by_id:
            raise UnknownDefinitionError(recipe.output_def_id)

    logger.debug(
        "Built catalog with %d definitions and %d recipes", len(by_id), len(recipe_list)
    )
    return Catalog(
        definitions=pmap(by_id),
        recipes=pvector(recipe_list),
        object_def_by_noun=pmap(object_by_noun),
        noun_glyphs=pmap(noun_glyphs),
        property_glyphs=pmap(property_glyphs),
        def_order=pvector(by_id.keys()),
    )
