"""Render Session - per-call context and transition metadata index

A RenderSession is created at the start of every top-level render and
discarded when it returns. It carries the render options, the metadata
produced by the builder, and the MetadataIndex derived from it. Nothing here
is module-level state, so renders never see metadata from a previous call.

INDEX RULES:
- key = record.transition_id
- records without a usable (hashable) transition_id are dropped
- built lazily on first lookup, at most once per session
- lookup() returns None for "no metadata", which is distinct from an empty
  record
"""

import logging
from typing import Any, Dict, Iterable, Optional

from ..core.model import TransitionDescriptor, TransitionMetadataRecord
from ..tools.config import RenderOptions

logger = logging.getLogger(__name__)

MetadataIndex = Dict[str, TransitionMetadataRecord]


def build_metadata_index(records: Optional[Iterable[Any]]) -> MetadataIndex:
    """Map transition_id -> metadata record, skipping unjoinable records."""
    index: MetadataIndex = {}
    for record in records or ():
        transition_id = getattr(record, 'transition_id', None)
        if transition_id is None:
            logger.debug(f"Dropping metadata record without transition id: {record!r}")
            continue
        try:
            index[transition_id] = record
        except TypeError:
            logger.debug(f"Dropping metadata record with unhashable transition id: {record!r}")
    return index


class RenderSession:
    """Context for a single render call"""

    def __init__(self, options: RenderOptions = None, state_metadata: Any = None,
                 transition_metadata: Optional[Iterable[TransitionMetadataRecord]] = None):
        self.options = options or RenderOptions()
        self.state_metadata = state_metadata
        self.transition_metadata = list(transition_metadata) if transition_metadata is not None else None
        self._index: Optional[MetadataIndex] = None

    @property
    def has_metadata(self) -> bool:
        return bool(self.transition_metadata)

    @property
    def index(self) -> MetadataIndex:
        if self._index is None:
            self._index = build_metadata_index(self.transition_metadata)
            logger.debug(f"Built metadata index: {len(self._index)} records")
        return self._index

    def lookup(self, transition: TransitionDescriptor) -> Optional[TransitionMetadataRecord]:
        if transition.transition_id is None:
            return None
        return self.index.get(transition.transition_id)
