from dataclasses import dataclass
from typing import Tuple

from kanji_universe.types import NounKey


@dataclass(frozen=True)
class FusionRecipe:
    """Two adjacent nouns that combine into a new object.

    Attributes:
        id: Recipe identifier.
        inputs: The two input nouns.
        output_def_id: Definition id spawned in place of the pair.
        ordered: If True ``inputs`` must appear in reading order (first noun
            left of / above the second); otherwise either order matches.
    """

    id: str
    inputs: Tuple[NounKey, NounKey]
    output_def_id: str
    ordered: bool = False

    def matches(self, first: NounKey, second: NounKey) -> bool:
        a, b = self.inputs
        if self.ordered:
            return first == a and second == b
        return (first == a and second == b) or (first == b and second == a)
