"""View Filter - scoped views of rendered diagram text

Keeps the header plus every line that contains the target name as a plain
substring. There is no word-boundary matching: filtering on "idle" also
keeps a line mentioning "idle_timeout". Scoped views are best-effort.
"""

from ..core.syntax import HEADER


def filter_lines(mermaid_syntax: str, name: str) -> str:
    lines = mermaid_syntax.split('\n')
    relevant_lines = [line for line in lines if name in line or line.startswith(HEADER)]
    return '\n'.join(relevant_lines)


def filter_for_state(mermaid_syntax: str, state_name: str) -> str:
    """Lines relevant to one state."""
    return filter_lines(mermaid_syntax, state_name)


def filter_for_event(mermaid_syntax: str, event_name: str) -> str:
    """Lines relevant to transitions triggered by one event."""
    return filter_lines(mermaid_syntax, event_name)
