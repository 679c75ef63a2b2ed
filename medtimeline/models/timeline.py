"""
Timeline Models - Interval bounds, sweep events and concurrency segments
"""
import enum
import functools
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, Optional, Tuple

from .medication import MedicationRecord


class BoundKind(enum.IntEnum):
    NEGATIVE_INFINITY = 0
    BOUNDED = 1
    POSITIVE_INFINITY = 2


@functools.total_ordering
@dataclass(frozen=True)
class Bound:
    """
    Interval bound: a calendar day or one of the two infinities.
    
    Comparisons are total (-inf < every day < +inf), so the sweep never
    has to special-case missing dates.
    """
    kind: BoundKind
    day: Optional[date] = None
    
    @classmethod
    def at(cls, day: date) -> "Bound":
        return cls(BoundKind.BOUNDED, day)
    
    @property
    def is_finite(self) -> bool:
        return self.kind is BoundKind.BOUNDED
    
    def _key(self) -> Tuple[int, date]:
        return (int(self.kind), self.day or date.min)
    
    def __lt__(self, other: "Bound") -> bool:
        if not isinstance(other, Bound):
            return NotImplemented
        return self._key() < other._key()
    
    def shift(self, days: int) -> "Bound":
        """Move a bounded day by whole days; infinities absorb the shift"""
        if not self.is_finite:
            return self
        if days > 0 and (date.max - self.day).days < days:
            return POSITIVE_INFINITY
        if days < 0 and (self.day - date.min).days < -days:
            return NEGATIVE_INFINITY
        return Bound.at(self.day + timedelta(days=days))
    
    def isoformat(self) -> Optional[str]:
        return self.day.isoformat() if self.is_finite else None
    
    def __repr__(self):
        if self.kind is BoundKind.NEGATIVE_INFINITY:
            return "Bound(-inf)"
        if self.kind is BoundKind.POSITIVE_INFINITY:
            return "Bound(+inf)"
        return f"Bound({self.day.isoformat()})"


NEGATIVE_INFINITY = Bound(BoundKind.NEGATIVE_INFINITY)
POSITIVE_INFINITY = Bound(BoundKind.POSITIVE_INFINITY)


@dataclass(frozen=True)
class CanonicalInterval:
    """Inclusive [start, end] range during which a medication counts as administered"""
    start: Bound
    end: Bound
    repaired: bool = False
    
    @property
    def exclusive_end(self) -> Bound:
        return self.end.shift(1)
    
    def contains(self, day: date) -> bool:
        return self.start <= Bound.at(day) <= self.end
    
    def shares_day_with(self, other: "CanonicalInterval") -> bool:
        return max(self.start, other.start) <= min(self.end, other.end)


class EventKind(enum.IntEnum):
    # END sorts before START on the same day: a drug ending on day D and
    # another starting on day D + 1 share no day.
    END = 0
    START = 1


@dataclass(frozen=True)
class TimelineEvent:
    """Start or end boundary of one medication, used only during the sweep"""
    at: Bound
    kind: EventKind
    medication: MedicationRecord
    rank: int  # position of the medication in canonical order
    
    def sort_key(self):
        return (self.at, self.kind, self.rank)


@dataclass(frozen=True)
class Segment:
    """Maximal span during which exactly these medications (two or more) were co-active"""
    start: Bound
    end: Bound
    label: str
    medications: Tuple[MedicationRecord, ...]
    
    @property
    def drug_names(self) -> Tuple[str, ...]:
        return tuple(m.drug_name for m in self.medications)
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "range": {
                "start": self.start.isoformat(),
                "end": self.end.isoformat(),
            },
            "rangeLabel": self.label,
            "medications": [m.to_dict() for m in self.medications],
        }
