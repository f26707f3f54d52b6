"""Transition Summary - tabulated view of edges with guards and callbacks

Same DiagramBuilder output as the renderer, shown as a grid table:

    +--------+---------+---------+-------------------+------------------+
    | From   | To      | Event   | Guards            | Callbacks        |
    +========+=========+=========+===================+==================+
    | idle   | combat  | engage  | if can_fight?     | before roar      |
    +--------+---------+---------+-------------------+------------------+
"""

from typing import Any, Dict, List

from tabulate import tabulate

from ..core.builder import DiagramBuilder
from ..core.machine import MachineDefinition
from ..core.syntax import format_node_id
from ..render.session import RenderSession
from ..render.tokens import build_callback_tokens, build_condition_tokens

HEADERS = ['From', 'To', 'Event', 'Guards', 'Callbacks']


def summary_rows(machine: MachineDefinition, options: Dict[str, Any] = None) -> List[List[str]]:
    builder = DiagramBuilder(machine, options)
    diagram = builder.build()
    session = RenderSession(transition_metadata=builder.transition_metadata)

    rows = []
    for transition in diagram.transitions:
        metadata = session.lookup(transition)
        guards = build_condition_tokens(metadata.conditions) if metadata else []
        callbacks = build_callback_tokens(metadata.callbacks) if metadata else []
        rows.append([
            format_node_id(transition.source_state_id),
            format_node_id(transition.target_state_id),
            transition.label,
            '\n'.join(guards),
            '\n'.join(callbacks),
        ])
    return rows


def generate_summary(machine: MachineDefinition, options: Dict[str, Any] = None) -> str:
    """Grid table of every transition in the machine."""
    return tabulate(summary_rows(machine, options), headers=HEADERS, tablefmt='grid')
