"""Entity catalog: definitions, fusion recipes and the indexed lookup built from them."""

from .catalog import Catalog, UnknownDefinitionError, make_catalog
from .definition import EntityDef
from .recipe import FusionRecipe

__all__ = [
    "Catalog",
    "EntityDef",
    "FusionRecipe",
    "UnknownDefinitionError",
    "make_catalog",
]
