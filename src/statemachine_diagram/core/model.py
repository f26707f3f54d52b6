"""Diagram Model - Abstract state/transition graph handed to the renderers

The builder produces these objects fresh on every render call; they are
immutable afterwards. Output order follows tuple order.

TYPES:
- StateDescriptor          - Plain state, renders as its bare id
- RichStateDescriptor      - State that renders its own "<id> : <label>" fragment
- TransitionDescriptor     - Edge with builder-assigned transition_id
- DiagramModel             - Ordered states + ordered transitions
- ConditionMetadata        - if/unless guard names
- NamedCallback            - Callback referenced by name
- ExecutableCallback       - Callback given as code, optional (filename, line)
- TransitionMetadataRecord - Guards + callbacks keyed by transition_id

callable_location(func) gives the (filename, line) of a Python callable and is
shared by the builder and the callback reference formatter.

PSEUDO NODE:
    PSEUDO_NODE = '*' marks the implicit start/end of the diagram and is
    rendered as [*] by the line renderer.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

PSEUDO_NODE = '*'


@runtime_checkable
class RichRenderable(Protocol):
    """Capability of a state that knows its own Mermaid fragment"""

    def to_fragment(self) -> str:
        ...


@dataclass(frozen=True)
class StateDescriptor:
    id: str
    label: str = ''

    def __post_init__(self):
        if not self.label:
            object.__setattr__(self, 'label', self.id)


@dataclass(frozen=True)
class RichStateDescriptor(StateDescriptor):
    """State rendered as ``<id> : <label>``"""

    def to_fragment(self) -> str:
        return f"{self.id} : {self.label}"


@dataclass(frozen=True)
class TransitionDescriptor:
    source_state_id: str
    target_state_id: str
    label: str = ''
    transition_id: Optional[str] = None


@dataclass(frozen=True)
class DiagramModel:
    states: Tuple[StateDescriptor, ...] = ()
    transitions: Tuple[TransitionDescriptor, ...] = ()


@dataclass(frozen=True)
class ConditionMetadata:
    if_: Tuple[Optional[str], ...] = ()
    unless: Tuple[Optional[str], ...] = ()


@dataclass(frozen=True)
class NamedCallback:
    name: str


@dataclass(frozen=True)
class ExecutableCallback:
    """Callback given as code; location is (filename, line) when known"""
    location: Optional[Tuple[str, int]] = None


def callable_location(func: Any) -> Optional[Tuple[str, int]]:
    """(filename, first line) of a Python callable, or None."""
    code = getattr(func, '__code__', None)
    if code is None:
        try:
            filename = inspect.getsourcefile(func)
            _, line = inspect.getsourcelines(func)
        except (OSError, TypeError):
            return None
        return (filename, line) if filename else None
    return (code.co_filename, code.co_firstlineno)


CallbackReference = Union[NamedCallback, ExecutableCallback]
CallbackMetadata = Dict[str, Sequence[Any]]


@dataclass(frozen=True)
class TransitionMetadataRecord:
    transition_id: Optional[str]
    conditions: ConditionMetadata = field(default_factory=ConditionMetadata)
    callbacks: CallbackMetadata = field(default_factory=dict)
