"""Plain Mermaid Syntax - stateDiagram-v2 emission without annotations

Used directly when no transition metadata is available, and as the source of
the header/indent constants shared with the annotated renderer.

MERMAID SYNTAX:
    stateDiagram-v2
      idle : idle
      [*] --> idle
      idle --> combat : engage
      dead --> [*]
"""

from typing import Optional

from .model import PSEUDO_NODE, DiagramModel, RichRenderable, StateDescriptor, TransitionDescriptor

HEADER = 'stateDiagram-v2'
INDENT = '  '


def format_node_id(node_id: str) -> str:
    """'*' becomes [*]; every other id is returned unchanged (no escaping)."""
    return '[*]' if node_id == PSEUDO_NODE else node_id


def state_fragment(state: StateDescriptor) -> Optional[str]:
    """Text for a state line, or None when there is nothing to emit."""
    if isinstance(state, RichRenderable):
        fragment = state.to_fragment()
    else:
        fragment = state.id
    return fragment or None


def transition_line(transition: TransitionDescriptor) -> str:
    line = f"{format_node_id(transition.source_state_id)} --> {format_node_id(transition.target_state_id)}"
    if transition.label:
        line = f"{line} : {transition.label}"
    return line


def to_mermaid(model: DiagramModel) -> str:
    """Render a diagram model as plain Mermaid text."""
    lines = [HEADER]

    for state in model.states:
        fragment = state_fragment(state)
        if fragment:
            lines.append(f"{INDENT}{fragment}")

    for transition in model.transitions:
        lines.append(f"{INDENT}{transition_line(transition)}")

    return '\n'.join(lines)
