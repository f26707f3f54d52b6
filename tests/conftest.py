"""
Shared fixtures for diagram tests.

These fixtures provide common machine definitions:
- Config dicts in the YAML definition format
- The same configs written to temporary YAML files
- Hand-built diagram models for renderer tests
"""

import pytest
import yaml

from statemachine_diagram.core.model import (
    ConditionMetadata,
    DiagramModel,
    NamedCallback,
    RichStateDescriptor,
    TransitionDescriptor,
    TransitionMetadataRecord,
)


@pytest.fixture
def character_config():
    """Character status machine with guards and callbacks."""
    return {
        'metadata': {'machine_name': 'character_status'},
        'initial_state': 'idle',
        'final_states': ['dead'],
        'states': ['idle', 'combat', 'casting', 'resting', 'stunned', 'dead'],
        'events': ['engage', 'cast_spell', 'rest', 'stun', 'recover', 'die', 'resurrect'],
        'transitions': [
            {'from': 'idle', 'to': 'combat', 'event': 'engage', 'if': 'can_fight?'},
            {'from': 'resting', 'to': 'combat', 'event': 'engage', 'if': 'interrupt_rest?'},
            {'from': 'casting', 'to': 'combat', 'event': 'engage', 'unless': 'spell_locked?'},
            {'from': ['idle', 'combat'], 'to': 'casting', 'event': 'cast_spell', 'if': 'has_mana?'},
            {'from': ['idle', 'combat'], 'to': 'resting', 'event': 'rest', 'unless': 'in_danger?'},
            {'from': ['idle', 'combat', 'casting'], 'to': 'stunned', 'event': 'stun'},
            {'from': 'stunned', 'to': 'idle', 'event': 'recover', 'if': 'stun_expired?'},
            {'from': '*', 'to': 'dead', 'event': 'die'},
            {'from': 'dead', 'to': 'idle', 'event': 'resurrect', 'if': 'can_resurrect?'},
        ],
        'callbacks': [
            {'type': 'before', 'on': 'cast_spell', 'do': 'deduct_mana'},
            {'type': 'after', 'to': 'resting', 'do': 'start_regeneration'},
            {'type': 'around', 'on': 'die', 'do': ['drop_items', 'notify_party']},
        ],
    }


@pytest.fixture
def dragon_config():
    """Dragon mood machine, no final states."""
    return {
        'metadata': {'machine_name': 'dragon_mood'},
        'initial_state': 'sleeping',
        'states': ['sleeping', 'hunting', 'hoarding'],
        'transitions': [
            {'from': 'sleeping', 'to': 'hunting', 'event': 'wake_up', 'if': 'hungry?'},
            {'from': 'hunting', 'to': 'hoarding', 'event': 'find_treasure'},
            {'from': 'hoarding', 'to': 'hoarding', 'event': 'find_treasure'},
        ],
        'callbacks': [
            {'type': 'before', 'on': 'wake_up', 'do': 'roar'},
        ],
    }


@pytest.fixture
def character_yaml(tmp_path, character_config):
    """Character config written to a temporary YAML file."""
    path = tmp_path / 'character.yaml'
    path.write_text(yaml.safe_dump(character_config, sort_keys=False))
    return path


@pytest.fixture
def wake_up_model():
    """sleeping --> hunting : wake_up, joined to metadata by transition id."""
    model = DiagramModel(
        states=(RichStateDescriptor('sleeping'), RichStateDescriptor('hunting')),
        transitions=(
            TransitionDescriptor('sleeping', 'hunting', 'wake_up', transition_id='t1'),
        ),
    )
    metadata = [
        TransitionMetadataRecord(
            transition_id='t1',
            conditions=ConditionMetadata(if_=('hungry?',)),
            callbacks={'before': [NamedCallback('roar')]},
        )
    ]
    return model, metadata
