from kanji_universe.components import Position
from kanji_universe.events import EventType
from kanji_universe.systems.fusion import fusion_system
from tests.test_utils import event_messages, event_types, ids_of, make_state


def test_horizontal_pair_fuses_at_right_cell() -> None:
    state = make_state([("obj-fire", 5, 5), ("obj-mountain", 6, 5)])
    fused = fusion_system(state)
    assert ids_of(fused, "obj-fire") == []
    assert ids_of(fused, "obj-mountain") == []
    assert ids_of(fused, "obj-volcano") == [3]
    assert fused.position[3] == Position(6, 5)
    assert fused.next_entity_id == 4
    assert event_types(fused) == [EventType.FUSION]
    assert event_messages(fused) == ["火 + 山 → 火山"]
    assert fused.events[0].cells == ((6, 5),)


def test_vertical_pair_fuses_at_lower_cell() -> None:
    state = make_state([("obj-water", 5, 4), ("obj-fire", 5, 5)])
    fused = fusion_system(state)
    hotspring = ids_of(fused, "obj-hotspring")
    assert len(hotspring) == 1
    assert fused.position[hotspring[0]] == Position(5, 5)
    assert event_messages(fused) == ["水 + 火 → 湯"]


def test_pair_is_found_from_either_side() -> None:
    # The fire (lower id) sits to the right, so the mountain finds it.
    state = make_state([("obj-fire", 5, 5), ("obj-mountain", 4, 5)])
    fused = fusion_system(state)
    volcano = ids_of(fused, "obj-volcano")
    assert fused.position[volcano[0]] == Position(5, 5)


def test_entity_is_consumed_once() -> None:
    state = make_state(
        [("obj-fire", 5, 5), ("obj-mountain", 6, 5), ("obj-tree", 5, 6)]
    )
    fused = fusion_system(state)
    assert len(ids_of(fused, "obj-volcano")) == 1
    assert ids_of(fused, "obj-tree") == [3]
    assert ids_of(fused, "obj-charcoal") == []
    assert len(fused.events) == 1


def test_two_independent_fusions_allocate_ids_in_order() -> None:
    state = make_state(
        [
            ("obj-fire", 1, 1),
            ("obj-mountain", 2, 1),
            ("obj-tree", 1, 4),
            ("obj-fire", 2, 4),
        ]
    )
    fused = fusion_system(state)
    assert fused.definition[5] == "obj-volcano"
    assert fused.definition[6] == "obj-charcoal"
    assert event_types(fused) == [EventType.FUSION, EventType.FUSION]


def test_text_does_not_fuse() -> None:
    state = make_state([("txt-fire", 5, 5), ("obj-mountain", 6, 5)])
    assert fusion_system(state) is state


def test_pair_without_recipe_is_untouched() -> None:
    state = make_state([("obj-tree", 5, 5), ("obj-rock", 6, 5)])
    assert fusion_system(state) is state
