from kanji_universe.content.default import DEFAULT_CATALOG
from kanji_universe.levels.convert import to_state
from kanji_universe.parser.parser import parse_rules_from_state
from kanji_universe.rules import PropertyRule, TransformRule, rule_key, rules_signature
from kanji_universe.types import Axis, PropertyKey
from tests.test_utils import make_level, sentence


def parse(placements, width: int = 12, height: int = 8):
    state = to_state(make_level(placements, width, height), DEFAULT_CATALOG)
    return parse_rules_from_state(state)


def test_horizontal_property_rule() -> None:
    rules = parse(sentence(1, 1, "txt-human", "txt-topic", "txt-you"))
    assert rules == [
        PropertyRule(
            noun="human",
            property=PropertyKey.YOU,
            axis=Axis.HORIZONTAL,
            cells=((1, 1), (2, 1), (3, 1)),
        )
    ]
    assert rules[0].signature == "p:human:you"


def test_vertical_property_rule() -> None:
    rules = parse(sentence(4, 2, "txt-rock", "txt-topic", "txt-stop", vertical=True))
    assert len(rules) == 1
    assert rules[0].axis == Axis.VERTICAL
    assert rules[0].cells == ((4, 2), (4, 3), (4, 4))


def test_transform_rule() -> None:
    rules = parse(sentence(0, 0, "txt-fire", "txt-topic", "txt-mountain"))
    assert rules == [
        TransformRule(
            noun="fire",
            target_noun="mountain",
            axis=Axis.HORIZONTAL,
            cells=((0, 0), (1, 0), (2, 0)),
        )
    ]
    assert rules[0].signature == "n:fire:mountain"


def test_and_chain_gives_each_term_its_own_provenance() -> None:
    rules = parse(
        sentence(6, 1, "txt-gate", "txt-topic", "txt-win", "txt-and", "txt-stop"),
        width=16,
    )
    assert [(r.signature, r.cells) for r in rules] == [
        ("p:gate:win", ((6, 1), (7, 1), (8, 1))),
        ("p:gate:stop", ((6, 1), (7, 1), (10, 1))),
    ]


def test_chain_needs_and_operator() -> None:
    rules = parse(sentence(0, 0, "txt-tree", "txt-topic", "txt-push", "txt-stop"))
    assert [r.signature for r in rules] == ["p:tree:push"]


def test_chain_stops_at_termless_slot() -> None:
    rules = parse(sentence(0, 0, "txt-tree", "txt-topic", "txt-and", "txt-push"))
    assert rules == []


def test_missing_topic_means_no_rule() -> None:
    rules = parse(sentence(0, 0, "txt-tree", "txt-and", "txt-push"))
    assert rules == []


def test_duplicate_spellings_are_emitted_once() -> None:
    placements = sentence(0, 0, "txt-tree", "txt-topic", "txt-push") + sentence(
        5, 4, "txt-tree", "txt-topic", "txt-push"
    )
    rules = parse(placements)
    assert len(rules) == 1
    # First spelling in scan order keeps its cells.
    assert rules[0].cells == ((0, 0), (1, 0), (2, 0))


def test_world_object_anchors_a_rule() -> None:
    rules = parse([("obj-tree", 3, 3), ("txt-topic", 4, 3), ("txt-push", 5, 3)])
    assert [r.signature for r in rules] == ["p:tree:push"]


def test_world_object_as_transform_target() -> None:
    rules = parse([("txt-fire", 0, 0), ("txt-topic", 1, 0), ("obj-tree", 2, 0)])
    assert [r.signature for r in rules] == ["n:fire:tree"]


def test_term_cell_properties_before_nouns() -> None:
    rules = parse(
        sentence(0, 0, "txt-fire", "txt-topic", "txt-tree") + [("txt-hot", 2, 0)]
    )
    assert [r.signature for r in rules] == ["p:fire:hot", "n:fire:tree"]


def test_horizontal_before_vertical_at_same_origin() -> None:
    placements = sentence(0, 0, "txt-human", "txt-topic", "txt-you") + [
        ("txt-topic", 0, 1),
        ("txt-push", 0, 2),
    ]
    rules = parse(placements)
    assert [(r.signature, r.axis) for r in rules] == [
        ("p:human:you", Axis.HORIZONTAL),
        ("p:human:push", Axis.VERTICAL),
    ]


def test_board_too_narrow_for_a_sentence() -> None:
    rules = parse(
        [("txt-tree", 0, 0), ("txt-topic", 1, 0)], width=2, height=1
    )
    assert rules == []


def test_rule_key_and_set_signature() -> None:
    rules = parse(
        sentence(0, 0, "txt-tree", "txt-topic", "txt-push")
        + sentence(0, 2, "txt-fire", "txt-topic", "txt-hot")
    )
    assert rule_key(rules[0]) == "p:tree:push:0,0;1,0;2,0"
    assert rules_signature(rules) == "p:fire:hot|p:tree:push"
    assert rules_signature(reversed(rules)) == rules_signature(rules)
