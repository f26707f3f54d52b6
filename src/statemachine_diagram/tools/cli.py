#!/usr/bin/env python3
"""State Machine Diagram CLI

Renders a YAML state machine definition as Mermaid stateDiagram-v2 text.

ARGUMENTS:
    yaml_file           YAML machine definition
    output_file         (Optional) Write output here instead of stdout
    --state NAME        Scoped view: lines mentioning one state
    --event NAME        Scoped view: lines mentioning one event
    --show-conditions   Annotate transitions with if/unless guards
    --show-callbacks    Annotate transitions with callbacks
    --label-style       bracket (default) or paren
    --markdown          Wrap output in a ```mermaid fence
    --summary           Print a transition table instead of a diagram
    --no-initial        Omit the [*] --> initial_state edge
    --no-final          Omit the final_state --> [*] edges
    --debug             Enable debug logging

USAGE:
    statemachine-diagram config/character.yaml --show-conditions --show-callbacks
    statemachine-diagram config/character.yaml docs/character.mermaid --state idle

EXIT CODES:
    0 - Diagram written
    1 - Missing file, invalid definition, unknown state or event
"""

import argparse
import logging
import sys
from io import StringIO
from pathlib import Path

from ..core.machine import MachineDefinitionError, load_machine
from ..render.renderer import MermaidRenderer
from .config import LabelStyle
from .summary import generate_summary

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Generate Mermaid state diagrams from YAML state machine definitions')
    parser.add_argument('yaml_file', help='Path to YAML machine definition')
    parser.add_argument('output_file', nargs='?', help='Output file (default: stdout)')

    scope = parser.add_mutually_exclusive_group()
    scope.add_argument('--state', help='Only show lines relevant to this state')
    scope.add_argument('--event', help='Only show lines relevant to this event')

    parser.add_argument('--show-conditions', action='store_true', help='Include if/unless guards in labels')
    parser.add_argument('--show-callbacks', action='store_true', help='Include callbacks in labels')
    parser.add_argument('--label-style', choices=[style.value for style in LabelStyle],
                        default=LabelStyle.BRACKET.value,
                        help='Guard/callback punctuation (default: bracket)')
    parser.add_argument('--markdown', action='store_true', help='Wrap the diagram in a ```mermaid block')
    parser.add_argument('--summary', action='store_true', help='Print a transition table instead of a diagram')
    parser.add_argument('--no-initial', action='store_true', help='Omit the [*] --> initial_state edge')
    parser.add_argument('--no-final', action='store_true', help='Omit final_state --> [*] edges')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser


def run(args: argparse.Namespace) -> int:
    try:
        machine = load_machine(args.yaml_file)
    except (FileNotFoundError, MachineDefinitionError) as e:
        logger.error(str(e))
        return 1

    options = {
        'show_conditions': args.show_conditions,
        'show_callbacks': args.show_callbacks,
        'label_style': args.label_style,
        'show_initial': not args.no_initial,
        'show_final': not args.no_final,
    }

    if args.summary:
        output = generate_summary(machine, options)
    else:
        renderer = MermaidRenderer()
        sink = StringIO()
        try:
            if args.state:
                output = renderer.draw_state(machine.state(args.state), io=sink, **options)
            elif args.event:
                output = renderer.draw_event(machine.event(args.event), io=sink, **options)
            else:
                output = renderer.draw_machine(machine, io=sink, **options)
        except MachineDefinitionError as e:
            logger.error(str(e))
            return 1

        if args.markdown:
            output = f"```mermaid\n{output}\n```"

    if args.output_file:
        output_path = Path(args.output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output + '\n')
        logger.info(f"Wrote diagram for '{machine.name}' to {output_path}")
    else:
        print(output)

    return 0


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    sys.exit(run(args))


if __name__ == '__main__':
    main()
