"""Diagram Builder - MachineDefinition -> DiagramModel + metadata

Produces the abstract diagram consumed by the renderers, plus two side
channels populated by build():

- state_metadata:      [{'state', 'label', 'initial', 'final'}, ...]
- transition_metadata: [TransitionMetadataRecord, ...] keyed by transition_id

EDGE EXPANSION:
  1. [*] --> initial_state                   (show_initial, no metadata)
  2. one edge per (source, target) in definition order, label = event
  3. final_state --> [*] for each final state (show_final, no metadata)

  Every edge gets a fresh transition_id ("t0", "t1", ...), so two edges with
  the same source/target/label are still distinct.

CALLBACK COLLECTION:
  For each event edge, every CallbackDefinition whose on/from/to filters
  match contributes its callbacks under its type. Types keep first-seen order.
  Strings become NamedCallback, Python callables become ExecutableCallback
  with their (filename, line) when available.

USAGE:
    builder = DiagramBuilder(machine, {'show_initial': True})
    diagram = builder.build()
    records = builder.transition_metadata
"""

import logging
from typing import Any, Dict, List

from .machine import MachineDefinition
from .model import (
    PSEUDO_NODE,
    ConditionMetadata,
    DiagramModel,
    ExecutableCallback,
    NamedCallback,
    RichStateDescriptor,
    TransitionDescriptor,
    TransitionMetadataRecord,
    callable_location,
)

logger = logging.getLogger(__name__)


def to_callback_reference(callback: Any):
    if callable(callback):
        return ExecutableCallback(location=callable_location(callback))
    return NamedCallback(name=str(callback))


class DiagramBuilder:
    """Builds a DiagramModel from a MachineDefinition"""

    def __init__(self, machine: MachineDefinition, options: Dict[str, Any] = None):
        self.machine = machine
        self.options = dict(options or {})
        self.state_metadata: List[Dict[str, Any]] = []
        self.transition_metadata: List[TransitionMetadataRecord] = []
        self._next_id = 0

    def _new_transition_id(self) -> str:
        transition_id = f"t{self._next_id}"
        self._next_id += 1
        return transition_id

    def build(self) -> DiagramModel:
        machine = self.machine
        self._next_id = 0
        self.state_metadata = []
        self.transition_metadata = []

        states = []
        for state in machine.states:
            states.append(RichStateDescriptor(id=state.name, label=state.label))
            self.state_metadata.append({
                'state': state.name,
                'label': state.label or state.name,
                'initial': state.name == machine.initial_state,
                'final': state.name in machine.final_states,
            })

        transitions = []

        if self.options.get('show_initial', True) and machine.initial_state:
            transitions.append(TransitionDescriptor(
                source_state_id=PSEUDO_NODE,
                target_state_id=machine.initial_state,
                transition_id=self._new_transition_id(),
            ))

        for definition in machine.transitions:
            for source in definition.sources:
                descriptor = TransitionDescriptor(
                    source_state_id=source,
                    target_state_id=definition.target,
                    label=definition.event,
                    transition_id=self._new_transition_id(),
                )
                transitions.append(descriptor)
                self.transition_metadata.append(TransitionMetadataRecord(
                    transition_id=descriptor.transition_id,
                    conditions=ConditionMetadata(if_=definition.if_, unless=definition.unless),
                    callbacks=self._collect_callbacks(definition.event, source, definition.target),
                ))

        if self.options.get('show_final', True):
            for state in machine.final_states:
                transitions.append(TransitionDescriptor(
                    source_state_id=state,
                    target_state_id=PSEUDO_NODE,
                    transition_id=self._new_transition_id(),
                ))

        logger.debug(f"[{machine.name}] Built diagram: {len(states)} states, {len(transitions)} transitions")
        return DiagramModel(states=tuple(states), transitions=tuple(transitions))

    def _collect_callbacks(self, event: str, source: str, target: str) -> Dict[str, list]:
        callbacks: Dict[str, list] = {}
        for definition in self.machine.callbacks:
            if not definition.matches(event, source, target):
                continue
            refs = callbacks.setdefault(definition.type, [])
            refs.extend(to_callback_reference(cb) for cb in definition.callbacks if cb is not None)
        return callbacks
