"""Annotated Mermaid rendering and scoped views."""

from .renderer import MermaidRenderer, render_full_diagram, render_scoped_to_event, render_scoped_to_state

__all__ = ['MermaidRenderer', 'render_full_diagram', 'render_scoped_to_event', 'render_scoped_to_state']
