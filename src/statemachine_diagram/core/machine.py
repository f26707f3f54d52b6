"""Machine Definitions - YAML/dict state machine descriptions

Normalises a state machine configuration into immutable definitions that the
DiagramBuilder turns into a DiagramModel.

CONFIG FORMAT:
    metadata:
      machine_name: character_status
    initial_state: idle
    final_states: [dead]
    states:
      - idle
      - name: combat
        label: In Combat
    events: [engage, die]
    transitions:
      - from: idle              # str, list, or '*' (every state except target)
        to: combat
        event: engage
        if: can_fight?          # str or list
        unless: [spell_locked?]
    callbacks:
      - type: before
        do: roar                # str, callable, or list of either
        on: engage              # optional filters: on / from / to
        from: idle
        to: combat

KEY FUNCTIONS:
- load_machine(path)                 - Load YAML file into MachineDefinition
- MachineDefinition.from_config(cfg) - Normalise config dict
- MachineDefinition.state(name)      - StateHandle for draw_state()
- MachineDefinition.event(name)      - EventHandle for draw_event()

Invalid configurations raise MachineDefinitionError.
"""

import logging
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..tools.config import load_yaml

logger = logging.getLogger(__name__)

WILDCARD = '*'


class MachineDefinitionError(ValueError):
    """Raised when a machine configuration cannot be interpreted"""


@dataclass(frozen=True)
class StateDefinition:
    name: str
    label: str = ''


@dataclass(frozen=True)
class TransitionDefinition:
    sources: Tuple[str, ...]
    target: str
    event: str = ''
    if_: Tuple[str, ...] = ()
    unless: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CallbackDefinition:
    type: str
    callbacks: Tuple[Any, ...]
    on: Tuple[str, ...] = ()
    sources: Tuple[str, ...] = ()
    targets: Tuple[str, ...] = ()

    def matches(self, event: str, source: str, target: str) -> bool:
        """True if this callback applies to the given edge"""
        if self.on and event not in self.on:
            return False
        if self.sources and source not in self.sources:
            return False
        if self.targets and target not in self.targets:
            return False
        return True


def _as_tuple(value: Any) -> Tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def _as_names(value: Any) -> Tuple[str, ...]:
    return tuple(str(item) for item in _as_tuple(value) if item is not None)


def _expand_sources(sources: Tuple[str, ...], state_names: List[str], target: str) -> Tuple[str, ...]:
    """Replace '*' with every known state except target, dropping duplicates"""
    expanded = []
    for source in sources:
        candidates = [s for s in state_names if s != target] if source == WILDCARD else [source]
        for candidate in candidates:
            if candidate not in expanded:
                expanded.append(candidate)
    return tuple(expanded)


class MachineDefinition:
    """Immutable, normalised state machine description"""

    def __init__(self, name: str, states: List[StateDefinition],
                 transitions: List[TransitionDefinition],
                 callbacks: List[CallbackDefinition] = None,
                 initial_state: Optional[str] = None,
                 final_states: Tuple[str, ...] = (),
                 events: Tuple[str, ...] = ()):
        self.name = name
        self.states = tuple(states)
        self.transitions = tuple(transitions)
        self.callbacks = tuple(callbacks or ())
        self.initial_state = initial_state
        self.final_states = tuple(final_states)
        self.events = tuple(events)

    def __repr__(self) -> str:
        return f"MachineDefinition(name={self.name!r}, states={len(self.states)}, transitions={len(self.transitions)})"

    @property
    def state_names(self) -> Tuple[str, ...]:
        return tuple(state.name for state in self.states)

    def state(self, name: str) -> 'StateHandle':
        if name not in self.state_names:
            raise MachineDefinitionError(f"Unknown state '{name}' in machine '{self.name}'")
        return StateHandle(machine=self, name=name)

    def event(self, name: str) -> 'EventHandle':
        known = set(self.events) | {t.event for t in self.transitions}
        if name not in known:
            raise MachineDefinitionError(f"Unknown event '{name}' in machine '{self.name}'")
        return EventHandle(machine=self, name=name)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'MachineDefinition':
        """Build a definition from a parsed configuration mapping"""
        if not isinstance(config, dict):
            raise MachineDefinitionError("Machine configuration must be a mapping")

        metadata = config.get('metadata') or {}
        if not isinstance(metadata, dict):
            raise MachineDefinitionError(f"'metadata' must be a mapping, got: {metadata!r}")
        name = metadata.get('machine_name', config.get('name', 'unknown'))

        raw_states = config.get('states')
        if not raw_states:
            raise MachineDefinitionError(f"Machine '{name}' declares no states")
        for key in ('states', 'transitions', 'callbacks'):
            if config.get(key) is not None and not isinstance(config[key], list):
                raise MachineDefinitionError(f"'{key}' in machine '{name}' must be a list, got: {config[key]!r}")

        states = []
        for entry in raw_states:
            if isinstance(entry, dict):
                if not entry.get('name'):
                    raise MachineDefinitionError(f"State entry without name in machine '{name}': {entry}")
                states.append(StateDefinition(name=str(entry['name']), label=str(entry.get('label') or '')))
            elif entry is not None:
                states.append(StateDefinition(name=str(entry)))
        state_names = [state.name for state in states]
        if WILDCARD in state_names:
            raise MachineDefinitionError(f"'{WILDCARD}' is reserved and cannot name a state in machine '{name}'")

        transitions = []
        for entry in config.get('transitions') or []:
            if not isinstance(entry, dict):
                raise MachineDefinitionError(f"Transition entry must be a mapping, got: {entry!r}")
            target = entry.get('to')
            if target is None:
                raise MachineDefinitionError(f"Transition without 'to' in machine '{name}': {entry}")
            target = str(target)
            if target == WILDCARD:
                raise MachineDefinitionError(f"Transition target cannot be '{WILDCARD}' in machine '{name}': {entry}")

            sources = _as_names(entry.get('from'))
            if not sources:
                raise MachineDefinitionError(f"Transition without 'from' in machine '{name}': {entry}")
            sources = _expand_sources(sources, state_names, target)

            # States only referenced by transitions are registered implicitly
            for state in sources + (target,):
                if state not in state_names:
                    logger.debug(f"[{name}] Registering implicit state: {state}")
                    states.append(StateDefinition(name=state))
                    state_names.append(state)

            transitions.append(TransitionDefinition(
                sources=sources,
                target=target,
                event=str(entry.get('event') or ''),
                if_=_as_names(entry.get('if')),
                unless=_as_names(entry.get('unless')),
            ))

        callbacks = []
        for entry in config.get('callbacks') or []:
            if not isinstance(entry, dict):
                raise MachineDefinitionError(f"Callback entry must be a mapping, got: {entry!r}")
            callback_type = entry.get('type')
            if not callback_type:
                raise MachineDefinitionError(f"Callback without 'type' in machine '{name}': {entry}")
            callbacks.append(CallbackDefinition(
                type=str(callback_type),
                callbacks=_as_tuple(entry.get('do')),
                on=_as_names(entry.get('on')),
                sources=_as_names(entry.get('from')),
                targets=_as_names(entry.get('to')),
            ))

        initial_state = config.get('initial_state')
        if initial_state is not None and str(initial_state) not in state_names:
            raise MachineDefinitionError(f"Initial state '{initial_state}' is not a declared state")

        final_states = _as_names(config.get('final_states'))
        for state in final_states:
            if state not in state_names:
                raise MachineDefinitionError(f"Final state '{state}' is not a declared state")

        machine = cls(
            name=str(name),
            states=states,
            transitions=transitions,
            callbacks=callbacks,
            initial_state=str(initial_state) if initial_state is not None else None,
            final_states=final_states,
            events=_as_names(config.get('events')),
        )
        logger.debug(f"[{machine.name}] Loaded {len(machine.states)} states, "
                     f"{len(machine.transitions)} transitions, {len(machine.callbacks)} callbacks")
        return machine


@dataclass(frozen=True)
class StateHandle:
    machine: MachineDefinition
    name: str


@dataclass(frozen=True)
class EventHandle:
    machine: MachineDefinition
    name: str


def load_machine(yaml_path: str) -> MachineDefinition:
    """Load a machine definition from a YAML file"""
    config_path = Path(yaml_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

    try:
        config = load_yaml(str(config_path))
    except yaml.YAMLError as e:
        raise MachineDefinitionError(f"YAML parse error in {yaml_path}: {e}") from e

    return MachineDefinition.from_config(config)
