"""StoreContext — environment handed to a service's ``init``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class StoreContext:
    """Session-scoped information about where a store service is used.

    The registry passes this through to every service unchanged; only the
    backend decides what (if anything) to do with it.

    Attributes:
        session_id:  Identifier of the owning session, if any.
        shard_index: Index of the shard this session serves.
        shard_count: Total number of shards.
        hints:       Free-form backend-relevant settings.
    """

    session_id: str = ""
    shard_index: int = 0
    shard_count: int = 1
    hints: dict[str, Any] = field(default_factory=dict)
