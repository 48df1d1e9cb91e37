from collections import deque
from typing import Deque, Dict, Iterator, List

from signaling_server.models import CommandRecord

COMMAND_LOG_CAPACITY = 100


class CommandLog:
    """In-memory, bounded history of issued commands. Oldest entries are evicted first."""

    def __init__(self, capacity: int = COMMAND_LOG_CAPACITY):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._records: Deque[CommandRecord] = deque(maxlen=capacity)

    def insert(self, record: CommandRecord) -> None:
        self._records.append(record)

    def recent(self, limit: int) -> List[CommandRecord]:
        """Return the most recent ``limit`` records, oldest first."""
        if limit <= 0:
            return []
        records = list(self._records)
        return records[-limit:]

    def since(self, since_ms: int) -> List[CommandRecord]:
        return [record for record in self._records if record.timestamp > since_ms]

    def count_by_command(self, since_ms: int) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for record in self.since(since_ms):
            counts[record.command] = counts.get(record.command, 0) + 1
        return counts

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CommandRecord]:
        return iter(list(self._records))
