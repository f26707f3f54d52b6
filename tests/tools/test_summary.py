"""
Tests for the tabulated transition summary
"""

from statemachine_diagram.core.machine import MachineDefinition
from statemachine_diagram.tools.summary import HEADERS, generate_summary, summary_rows


def test_rows_follow_diagram_order(dragon_config):
    rows = summary_rows(MachineDefinition.from_config(dragon_config))

    assert rows == [
        ['[*]', 'sleeping', '', '', ''],
        ['sleeping', 'hunting', 'wake_up', 'if hungry?', 'before roar'],
        ['hunting', 'hoarding', 'find_treasure', '', ''],
        ['hoarding', 'hoarding', 'find_treasure', '', ''],
    ]


def test_multiple_tokens_one_per_line(character_config):
    rows = summary_rows(MachineDefinition.from_config(character_config), {'show_initial': False})
    die = [row for row in rows if row[:3] == ['idle', 'dead', 'die']][0]

    assert die[4] == 'around drop_items\naround notify_party'


def test_grid_table(dragon_config):
    table = generate_summary(MachineDefinition.from_config(dragon_config))

    for header in HEADERS:
        assert header in table
    assert 'if hungry?' in table
    assert table.startswith('+')
