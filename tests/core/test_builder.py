"""
Tests for DiagramBuilder: model construction and metadata side channels
"""

import os

from statemachine_diagram.core.builder import DiagramBuilder, to_callback_reference
from statemachine_diagram.core.machine import MachineDefinition
from statemachine_diagram.core.model import (
    ConditionMetadata,
    ExecutableCallback,
    NamedCallback,
    RichStateDescriptor,
)


def build(config, options=None):
    builder = DiagramBuilder(MachineDefinition.from_config(config), options)
    return builder, builder.build()


def test_states_are_rich_and_ordered(character_config):
    _, diagram = build(character_config)

    assert [s.id for s in diagram.states] == ['idle', 'combat', 'casting', 'resting', 'stunned', 'dead']
    assert all(isinstance(s, RichStateDescriptor) for s in diagram.states)


def test_initial_then_events_then_final(character_config):
    _, diagram = build(character_config)
    first, second, last = diagram.transitions[0], diagram.transitions[1], diagram.transitions[-1]

    assert (first.source_state_id, first.target_state_id, first.label) == ('*', 'idle', '')
    assert (second.source_state_id, second.target_state_id, second.label) == ('idle', 'combat', 'engage')
    assert (last.source_state_id, last.target_state_id, last.label) == ('dead', '*', '')


def test_pseudo_edges_can_be_disabled(character_config):
    _, diagram = build(character_config, {'show_initial': False, 'show_final': False})

    assert all('*' not in (t.source_state_id, t.target_state_id) for t in diagram.transitions)


def test_transition_ids_unique_per_edge():
    config = {
        'states': ['a', 'b'],
        'transitions': [
            {'from': 'a', 'to': 'b', 'event': 'go'},
            {'from': 'a', 'to': 'b', 'event': 'go', 'if': 'ready?'},
        ],
    }
    builder, diagram = build(config)

    ids = [t.transition_id for t in diagram.transitions]
    assert ids == ['t0', 't1']
    assert [r.transition_id for r in builder.transition_metadata] == ids
    assert builder.transition_metadata[1].conditions == ConditionMetadata(if_=('ready?',))


def test_metadata_only_for_event_edges(character_config):
    builder, diagram = build(character_config)

    joined = {r.transition_id for r in builder.transition_metadata}
    pseudo = [t for t in diagram.transitions if '*' in (t.source_state_id, t.target_state_id)]

    assert len(pseudo) == 2
    assert all(t.transition_id not in joined for t in pseudo)
    assert len(builder.transition_metadata) == len(diagram.transitions) - 2


def test_callbacks_collected_by_filter(character_config):
    builder, diagram = build(character_config)
    by_id = {r.transition_id: r for r in builder.transition_metadata}

    callbacks = {}
    for t in diagram.transitions:
        if t.transition_id in by_id:
            callbacks[(t.source_state_id, t.target_state_id, t.label)] = by_id[t.transition_id].callbacks

    assert callbacks[('idle', 'casting', 'cast_spell')] == {'before': [NamedCallback('deduct_mana')]}
    assert callbacks[('combat', 'resting', 'rest')] == {'after': [NamedCallback('start_regeneration')]}
    assert callbacks[('casting', 'dead', 'die')] == {
        'around': [NamedCallback('drop_items'), NamedCallback('notify_party')],
    }
    assert callbacks[('idle', 'combat', 'engage')] == {}


def test_callback_types_keep_first_seen_order():
    config = {
        'states': ['a', 'b'],
        'transitions': [{'from': 'a', 'to': 'b', 'event': 'go'}],
        'callbacks': [
            {'type': 'after', 'do': 'log'},
            {'type': 'before', 'do': 'check'},
            {'type': 'after', 'do': 'notify'},
        ],
    }
    builder, _ = build(config)
    callbacks = builder.transition_metadata[0].callbacks

    assert list(callbacks) == ['after', 'before']
    assert callbacks['after'] == [NamedCallback('log'), NamedCallback('notify')]


def test_state_metadata(character_config):
    builder, _ = build(character_config)

    assert builder.state_metadata[0] == {'state': 'idle', 'label': 'idle', 'initial': True, 'final': False}
    assert builder.state_metadata[-1]['final'] is True


def test_rebuild_resets_ids_and_metadata(dragon_config):
    builder = DiagramBuilder(MachineDefinition.from_config(dragon_config))

    first = builder.build()
    second = builder.build()

    assert first == second
    assert len(builder.transition_metadata) == 3


def test_callable_becomes_executable_reference():
    handler = lambda: None  # noqa: E731

    ref = to_callback_reference(handler)

    assert isinstance(ref, ExecutableCallback)
    filename, line = ref.location
    assert os.path.basename(filename) == os.path.basename(__file__)
    assert line == handler.__code__.co_firstlineno


def test_string_becomes_named_reference():
    assert to_callback_reference('roar') == NamedCallback('roar')
