"""Rule accumulator.

Folds the parsed rule list into the two active semantics maps. Properties
are additive (a noun may be YOU, PUSH and HOT at once); a transform is a
single destiny per noun, so the first transform rule for a source noun wins
and later ones are ignored.

Evaluators are looked up by :class:`~kanji_universe.rules.RuleKind` so adding
a rule variant means adding one function and one registry entry.
"""

from typing import Callable, Dict, Iterable, Set, Tuple

from pyrsistent import pmap, pset
from pyrsistent.typing import PMap, PSet

from kanji_universe.rules import ParsedRule, PropertyRule, RuleKind, TransformRule
from kanji_universe.types import NounKey, PropertyKey

PropertyAccumulator = Dict[NounKey, Set[PropertyKey]]
TransformAccumulator = Dict[NounKey, NounKey]
RuleEvaluator = Callable[[ParsedRule, PropertyAccumulator, TransformAccumulator], None]


def _evaluate_property(
    rule: PropertyRule,
    properties: PropertyAccumulator,
    transforms: TransformAccumulator,
) -> None:
    properties.setdefault(rule.noun, set()).add(rule.property)


def _evaluate_transform(
    rule: TransformRule,
    properties: PropertyAccumulator,
    transforms: TransformAccumulator,
) -> None:
    transforms.setdefault(rule.noun, rule.target_noun)


RULE_EVALUATOR_REGISTRY: Dict[RuleKind, RuleEvaluator] = {
    RuleKind.PROPERTY: _evaluate_property,
    RuleKind.TRANSFORM: _evaluate_transform,
}


def accumulate_rules(
    rules: Iterable[ParsedRule],
) -> Tuple[PMap[NounKey, PSet[PropertyKey]], PMap[NounKey, NounKey]]:
    """Build ``(active_properties, active_transforms)`` from ``rules``.

    Args:
        rules (Iterable[ParsedRule]): Rules in scan order.

    Returns:
        Tuple[PMap, PMap]: Noun -> property set and noun -> transform target.
    """
    properties: PropertyAccumulator = {}
    transforms: TransformAccumulator = {}
    for rule in rules:
        RULE_EVALUATOR_REGISTRY[rule.kind](rule, properties, transforms)
    return (
        pmap({noun: pset(props) for noun, props in properties.items()}),
        pmap(transforms),
    )
