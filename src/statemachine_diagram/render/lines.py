"""Line Renderer - one Mermaid line per state and per transition

LABEL COMPOSITION (fixed order, space-joined, trimmed):
    1. base    transition label, if non-empty
    2. guard   condition tokens, if show_conditions and metadata exist
    3. action  callback tokens, if show_callbacks and metadata exist

    sleeping --> hunting : wake_up [if hungry?] / before roar
    sleeping --> hunting : wake_up (if: hungry?) (action: before: roar)
    sleeping --> hunting                          (nothing to show)

NODE IDS:
    '*' renders as [*]; every other id is emitted unchanged (no escaping).
"""

from typing import List, Optional

from ..core.model import StateDescriptor, TransitionDescriptor, TransitionMetadataRecord
from ..core.syntax import format_node_id, state_fragment
from ..tools.config import LabelStyle, RenderOptions
from .tokens import build_callback_tokens, build_condition_tokens


def guard_fragment(tokens: List[str], style: LabelStyle) -> str:
    if not tokens:
        return ''
    joined = ' && '.join(tokens)
    if style == LabelStyle.PAREN:
        return f"(if: {joined})"
    return f"[{joined}]"


def action_fragment(tokens: List[str], style: LabelStyle) -> str:
    if not tokens:
        return ''
    joined = ', '.join(tokens)
    if style == LabelStyle.PAREN:
        return f"(action: {joined})"
    return f"/ {joined}"


def render_state_line(state: StateDescriptor) -> Optional[str]:
    """State fragment, or None when the state renders to nothing."""
    return state_fragment(state)


def compose_label(transition: TransitionDescriptor,
                  metadata: Optional[TransitionMetadataRecord],
                  options: RenderOptions) -> str:
    parts = []

    if transition.label:
        parts.append(transition.label)

    if options.show_conditions and metadata is not None:
        tokens = build_condition_tokens(getattr(metadata, 'conditions', None), options.label_style)
        fragment = guard_fragment(tokens, options.label_style)
        if fragment:
            parts.append(fragment)

    if options.show_callbacks and metadata is not None:
        tokens = build_callback_tokens(getattr(metadata, 'callbacks', None), options.label_style)
        fragment = action_fragment(tokens, options.label_style)
        if fragment:
            parts.append(fragment)

    return ' '.join(parts).strip()


def render_transition_line(transition: TransitionDescriptor,
                           metadata: Optional[TransitionMetadataRecord],
                           options: RenderOptions) -> str:
    from_node = format_node_id(transition.source_state_id)
    to_node = format_node_id(transition.target_state_id)

    label = compose_label(transition, metadata, options)
    if label:
        return f"{from_node} --> {to_node} : {label}"
    return f"{from_node} --> {to_node}"
