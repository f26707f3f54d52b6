"""State Machine Diagram - Mermaid stateDiagram-v2 rendering for state machines"""

__version__ = "1.0.0"

from .core.machine import MachineDefinition, MachineDefinitionError, load_machine
from .core.builder import DiagramBuilder
from .render.renderer import (
    MermaidRenderer,
    draw_event,
    draw_machine,
    draw_state,
    render_full_diagram,
    render_scoped_to_event,
    render_scoped_to_state,
)
from .tools.config import LabelStyle, RenderOptions

__all__ = [
    "MachineDefinition",
    "MachineDefinitionError",
    "load_machine",
    "DiagramBuilder",
    "MermaidRenderer",
    "draw_machine",
    "draw_state",
    "draw_event",
    "render_full_diagram",
    "render_scoped_to_state",
    "render_scoped_to_event",
    "LabelStyle",
    "RenderOptions",
]
