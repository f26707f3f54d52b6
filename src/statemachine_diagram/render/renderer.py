"""Mermaid Renderer - DiagramModel + metadata -> stateDiagram-v2 text

Orchestrates the builder, the per-call RenderSession, the line renderer and
the view filter.

KEY FUNCTIONS:
- render_full_diagram(model, state_md, transition_md, options) - Whole diagram
- render_scoped_to_state(..., state_name)   - Full render + state view filter
- render_scoped_to_event(..., event_name)   - Full render + event view filter
- MermaidRenderer.draw_machine(machine, io, **options)
- MermaidRenderer.draw_state(state, io, **options)
- MermaidRenderer.draw_event(event, io, **options)

FLOW:
    DiagramBuilder.build() -> {diagram, state_metadata, transition_metadata}
    RenderSession(options, metadata)       (fresh per call, index built lazily)
    header -> state lines -> transition lines, joined with '\\n'

FALLBACK:
    No transition metadata (None or empty) -> syntax.to_mermaid(model)
    verbatim; there is nothing to annotate.

The draw_* entry points write the text (plus newline) to `io` and return it.
Builder errors such as MachineDefinitionError propagate unchanged.
"""

import logging
import sys
from typing import Any, Dict, Iterable, Optional, TextIO, Tuple

from ..core.builder import DiagramBuilder
from ..core.machine import EventHandle, MachineDefinition, StateHandle
from ..core.model import DiagramModel, TransitionMetadataRecord
from ..core.syntax import HEADER, INDENT, to_mermaid
from ..tools.config import RenderOptions
from .filters import filter_for_event, filter_for_state
from .lines import render_state_line, render_transition_line
from .session import RenderSession

logger = logging.getLogger(__name__)


def _render(model: DiagramModel, session: RenderSession) -> str:
    if not session.has_metadata:
        logger.debug("No transition metadata, using plain Mermaid emission")
        return to_mermaid(model)

    lines = [HEADER]

    for state in model.states:
        fragment = render_state_line(state)
        if fragment:
            lines.append(f"{INDENT}{fragment}")

    for transition in model.transitions:
        metadata = session.lookup(transition)
        lines.append(f"{INDENT}{render_transition_line(transition, metadata, session.options)}")

    return '\n'.join(lines)


def render_full_diagram(model: DiagramModel, state_metadata: Any = None,
                        transition_metadata: Optional[Iterable[TransitionMetadataRecord]] = None,
                        options: RenderOptions = None) -> str:
    """Render every state and transition of a diagram model."""
    session = RenderSession(options, state_metadata, transition_metadata)
    return _render(model, session)


def render_scoped_to_state(model: DiagramModel, state_metadata: Any = None,
                           transition_metadata: Optional[Iterable[TransitionMetadataRecord]] = None,
                           options: RenderOptions = None, state_name: str = '') -> str:
    text = render_full_diagram(model, state_metadata, transition_metadata, options)
    return filter_for_state(text, state_name)


def render_scoped_to_event(model: DiagramModel, state_metadata: Any = None,
                           transition_metadata: Optional[Iterable[TransitionMetadataRecord]] = None,
                           options: RenderOptions = None, event_name: str = '') -> str:
    text = render_full_diagram(model, state_metadata, transition_metadata, options)
    return filter_for_event(text, event_name)


class MermaidRenderer:
    """Machine/state/event entry points writing Mermaid text to a sink

    The renderer keeps no per-render state; every draw_* call builds its own
    diagram and RenderSession.
    """

    def __init__(self, builder_class=DiagramBuilder):
        self.builder_class = builder_class

    def build(self, machine: MachineDefinition,
              options: Dict[str, Any]) -> Tuple[DiagramModel, RenderSession]:
        render_options, builder_options = RenderOptions.from_options(options)
        builder = self.builder_class(machine, builder_options)
        diagram = builder.build()
        session = RenderSession(render_options, builder.state_metadata, builder.transition_metadata)
        return diagram, session

    def _emit(self, text: str, io: Optional[TextIO]) -> str:
        if io is None:
            io = sys.stdout
        io.write(text + '\n')
        return text

    def draw_machine(self, machine: MachineDefinition, io: TextIO = None, **options) -> str:
        diagram, session = self.build(machine, options)
        logger.debug(f"[{machine.name}] Rendering full diagram")
        return self._emit(_render(diagram, session), io)

    def draw_state(self, state: StateHandle, io: TextIO = None, **options) -> str:
        diagram, session = self.build(state.machine, options)
        logger.debug(f"[{state.machine.name}] Rendering view for state: {state.name}")
        return self._emit(filter_for_state(_render(diagram, session), state.name), io)

    def draw_event(self, event: EventHandle, io: TextIO = None, **options) -> str:
        diagram, session = self.build(event.machine, options)
        logger.debug(f"[{event.machine.name}] Rendering view for event: {event.name}")
        return self._emit(filter_for_event(_render(diagram, session), event.name), io)


_default_renderer = MermaidRenderer()


def draw_machine(machine: MachineDefinition, io: TextIO = None, **options) -> str:
    return _default_renderer.draw_machine(machine, io, **options)


def draw_state(state: StateHandle, io: TextIO = None, **options) -> str:
    return _default_renderer.draw_state(state, io, **options)


def draw_event(event: EventHandle, io: TextIO = None, **options) -> str:
    return _default_renderer.draw_event(event, io, **options)
