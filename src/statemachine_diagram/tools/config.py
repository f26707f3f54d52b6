"""Diagram Configuration - YAML loading and render options

FUNCTIONS:
- load_yaml(file_path) -> Dict: Load YAML with yaml.safe_load
- RenderOptions.from_options(mapping) -> (RenderOptions, passthrough)

RENDER OPTIONS:
    show_conditions  include guard fragment on transition labels
    show_callbacks   include action fragment on transition labels
    label_style      punctuation convention for both fragments

LABEL STYLES (one per render, never mixed):
    bracket   wake_up [if hungry? && unless tired?] / before roar, after count
    paren     wake_up (if: hungry? && !tired?) (action: before: roar, after: count)

Every other option key is returned untouched in `passthrough` so callers can
hand it to the DiagramBuilder.

USAGE:
    config = load_yaml('config/machine.yaml')
    options, builder_options = RenderOptions.from_options({'show_conditions': True})
"""

import logging
import yaml
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Tuple

logger = logging.getLogger(__name__)


def load_yaml(file_path: str) -> Dict[str, Any]:
    """Load YAML configuration file."""
    try:
        with open(file_path, 'r') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Error loading YAML file {file_path}: {e}")
        raise


class LabelStyle(str, Enum):
    BRACKET = 'bracket'
    PAREN = 'paren'


@dataclass(frozen=True)
class RenderOptions:
    show_conditions: bool = False
    show_callbacks: bool = False
    label_style: LabelStyle = LabelStyle.BRACKET

    KEYS = ('show_conditions', 'show_callbacks', 'label_style')

    @classmethod
    def from_options(cls, options: Mapping[str, Any] = None) -> Tuple['RenderOptions', Dict[str, Any]]:
        """Split caller options into render options and builder passthrough"""
        options = dict(options or {})
        passthrough = {k: v for k, v in options.items() if k not in cls.KEYS}

        label_style = options.get('label_style') or LabelStyle.BRACKET
        try:
            label_style = LabelStyle(label_style)
        except ValueError:
            valid = ', '.join(style.value for style in LabelStyle)
            raise ValueError(f"Invalid label_style '{label_style}' (expected one of: {valid})") from None

        render_options = cls(
            show_conditions=bool(options.get('show_conditions', False)),
            show_callbacks=bool(options.get('show_callbacks', False)),
            label_style=label_style,
        )
        return render_options, passthrough
