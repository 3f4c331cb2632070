from pyrsistent import pmap, pset

from kanji_universe.accumulator import RULE_EVALUATOR_REGISTRY, accumulate_rules
from kanji_universe.rules import PropertyRule, RuleKind, TransformRule
from kanji_universe.types import Axis, PropertyKey

CELLS = ((0, 0), (1, 0), (2, 0))


def prop(noun: str, p: PropertyKey) -> PropertyRule:
    return PropertyRule(noun=noun, property=p, axis=Axis.HORIZONTAL, cells=CELLS)


def transform(noun: str, target: str) -> TransformRule:
    return TransformRule(noun=noun, target_noun=target, axis=Axis.HORIZONTAL, cells=CELLS)


def test_every_rule_kind_has_an_evaluator() -> None:
    assert set(RULE_EVALUATOR_REGISTRY) == set(RuleKind)


def test_properties_are_additive() -> None:
    properties, transforms = accumulate_rules(
        [
            prop("human", PropertyKey.YOU),
            prop("human", PropertyKey.PUSH),
            prop("fire", PropertyKey.HOT),
        ]
    )
    assert properties == pmap(
        {
            "human": pset([PropertyKey.YOU, PropertyKey.PUSH]),
            "fire": pset([PropertyKey.HOT]),
        }
    )
    assert transforms == pmap()


def test_first_transform_for_a_noun_wins() -> None:
    _, transforms = accumulate_rules(
        [
            transform("fire", "mountain"),
            transform("fire", "tree"),
            transform("water", "fire"),
        ]
    )
    assert transforms == pmap({"fire": "mountain", "water": "fire"})


def test_empty_rule_list() -> None:
    assert accumulate_rules([]) == (pmap(), pmap())
