"""Token Builders - guard/callback metadata -> display tokens

Pure functions; malformed input contributes nothing instead of raising.

CONDITION TOKENS (if tokens always precede unless tokens):
    bracket: ['if hungry?', 'unless tired?']
    paren:   ['hungry?', '!tired?']

CALLBACK TOKENS (types in insertion order, references in order):
    bracket: ['before roar', 'after lambda@dragon.py:12']
    paren:   ['before: roar', 'after: lambda@dragon.py:12']

CALLBACK REFERENCES:
    NamedCallback('cast_spell') / 'cast_spell'   -> cast_spell
    ExecutableCallback(('mage.rb', 42))          -> lambda@mage.rb:42
    ExecutableCallback(None)                     -> lambda
    Python function / lambda                     -> lambda@<file>:<line>
    anything else                                -> str(ref), or its type name
                                                    when __str__ fails
"""

import os
from collections.abc import Mapping
from typing import Any, List

from ..core.model import ConditionMetadata, ExecutableCallback, NamedCallback, callable_location
from ..tools.config import LabelStyle

EXECUTABLE_NAME = 'lambda'


def _names(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _is_blank(value: Any) -> bool:
    if isinstance(value, NamedCallback):
        return not value.name
    return value is None or (isinstance(value, str) and value == '')


def _format_location(location: Any) -> str:
    try:
        filename, line = location
    except (TypeError, ValueError):
        return EXECUTABLE_NAME
    if not filename or line is None or str(line) == '':
        return EXECUTABLE_NAME
    return f"{EXECUTABLE_NAME}@{os.path.basename(str(filename))}:{line}"


def format_callback_reference(ref: Any) -> str:
    """Display name for a callback reference. Never raises."""
    if isinstance(ref, NamedCallback):
        return ref.name
    if isinstance(ref, str):
        return ref
    if isinstance(ref, ExecutableCallback):
        return _format_location(ref.location)
    if callable(ref):
        return _format_location(callable_location(ref))
    try:
        return str(ref)
    except Exception:
        return type(ref).__name__


def build_condition_tokens(conditions: Any, style: LabelStyle = LabelStyle.BRACKET) -> List[str]:
    if isinstance(conditions, ConditionMetadata):
        if_names, unless_names = conditions.if_, conditions.unless
    elif isinstance(conditions, Mapping):
        if_names = conditions.get('if', conditions.get('if_'))
        unless_names = conditions.get('unless')
    else:
        return []

    tokens = []
    for name in _names(if_names):
        if _is_blank(name):
            continue
        tokens.append(f"if {name}" if style == LabelStyle.BRACKET else str(name))
    for name in _names(unless_names):
        if _is_blank(name):
            continue
        tokens.append(f"unless {name}" if style == LabelStyle.BRACKET else f"!{name}")
    return tokens


def build_callback_tokens(callbacks: Any, style: LabelStyle = LabelStyle.BRACKET) -> List[str]:
    if not isinstance(callbacks, Mapping):
        return []

    separator = ' ' if style == LabelStyle.BRACKET else ': '
    tokens = []
    for callback_type, refs in callbacks.items():
        for ref in _names(refs):
            if _is_blank(ref):
                continue
            tokens.append(f"{callback_type}{separator}{format_callback_reference(ref)}")
    return tokens
