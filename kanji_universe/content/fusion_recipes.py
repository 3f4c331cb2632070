from typing import List

from kanji_universe.catalog import FusionRecipe

FUSION_RECIPES: List[FusionRecipe] = [
    FusionRecipe(
        id="fire-mountain-volcano",
        inputs=("fire", "mountain"),
        output_def_id="obj-volcano",
    ),
    FusionRecipe(
        id="water-fire-hotspring",
        inputs=("water", "fire"),
        output_def_id="obj-hotspring",
    ),
    FusionRecipe(
        id="tree-fire-charcoal",
        inputs=("tree", "fire"),
        output_def_id="obj-charcoal",
    ),
]
