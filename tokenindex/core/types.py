"""
Core types for tokenindex.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.utils import get_current_time, parse_iso_timestamp

# Redis TTL replies
TTL_MISSING = -2
TTL_PERSISTENT = -1


@dataclass
class Record:
    """
    Value stored under a token's primary key.

    The payload is opaque to tokenindex; it only has to survive the
    configured serializer.
    """

    owner: Optional[str] = None
    payload: Any = None
    created_at: datetime = field(default_factory=get_current_time)

    def to_dict(self, iso_timestamps: bool = False) -> Dict[str, Any]:
        """
        Convert the record to a plain dictionary.

        Args:
            iso_timestamps: Render ``created_at`` as an ISO 8601 string

        Returns:
            Dictionary representation
        """
        created_at = self.created_at
        if iso_timestamps:
            created_at = created_at.isoformat()

        return {
            "created_at": created_at,
            "owner": self.owner,
            "payload": self.payload,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Record':
        """
        Create a Record from a dictionary produced by ``to_dict``.

        Raises:
            KeyError: If ``created_at`` is missing
            ValueError: If ``created_at`` is not a valid timestamp
        """
        created_at = data["created_at"]
        if isinstance(created_at, str):
            created_at = parse_iso_timestamp(created_at)

        return cls(
            owner=data.get("owner"),
            payload=data.get("payload"),
            created_at=created_at,
        )
