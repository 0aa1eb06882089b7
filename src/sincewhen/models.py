from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, List, Optional

@dataclass(frozen=True)
class Event:
    id: str
    name: str
    occurrences: FrozenSet[date] = field(default_factory=frozenset)   # calendar days

    def sorted_occurrences(self) -> List[date]:
        return sorted(self.occurrences)

    @property
    def last_occurrence(self) -> Optional[date]:
        return max(self.occurrences) if self.occurrences else None
