"""The catalog shipped with the game: built-in definitions plus recipes."""

from kanji_universe.catalog import Catalog, make_catalog
from kanji_universe.content.fusion_recipes import FUSION_RECIPES
from kanji_universe.content.kanji_defs import ENTITY_DEFS

DEFAULT_CATALOG: Catalog = make_catalog(ENTITY_DEFS, FUSION_RECIPES)
