"""
Timeline Segmentation Service - Group medications by concurrent use

Plane sweep over calendar days: every medication contributes a start and an
end event, and each stretch of days with a constant active set of two or
more drugs becomes one segment.
"""
import itertools
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from medtimeline.config import settings
from medtimeline.dates import format_day
from medtimeline.models import (
    Bound, CanonicalInterval, EventKind, MedicationRecord, Segment, TimelineEvent,
    NEGATIVE_INFINITY, POSITIVE_INFINITY
)
from medtimeline.models.medication import coerce_medications

logger = logging.getLogger(__name__)

UNKNOWN_DATE_LABEL = "Ngày không rõ"


def canonical_interval(med: MedicationRecord) -> CanonicalInterval:
    """
    Inclusive usage window of a medication.

    Missing start -> -inf (already active), missing end -> +inf (still
    active). A reversed pair is swapped and flagged as repaired.
    """
    start = med.usage_start_date
    end = med.usage_end_date

    if start is not None and end is not None and end < start:
        return CanonicalInterval(start=Bound.at(end), end=Bound.at(start), repaired=True)

    return CanonicalInterval(
        start=Bound.at(start) if start is not None else NEGATIVE_INFINITY,
        end=Bound.at(end) if end is not None else POSITIVE_INFINITY,
    )


class TimelineSegmentationService:
    """
    Sweep-line segmentation of a case's medication list

    Features:
    - Half-open event boundaries (end date + 1 day)
    - Inclusive end dates (ending on D, starting on D + 1 is no overlap)
    - Reversed dates repaired instead of dropped
    - Undated medications joined to every segment
    - Output independent of input order
    """

    def __init__(self, date_format: Optional[str] = None):
        self.date_format = date_format or settings.DATE_LABEL_FORMAT

    def segment(self, medications: Iterable) -> List[Segment]:
        """
        Split the case timeline into maximal co-administration segments.

        Args:
            medications: MedicationRecord objects or extraction dicts

        Returns:
            Segments in chronological order, each with two or more medications
        """
        records = sorted(coerce_medications(medications), key=MedicationRecord.sort_key)

        dated = [m for m in records if m.is_dated]
        undated = [m for m in records if not m.is_dated]

        if not dated:
            if len(undated) >= 2:
                return [Segment(
                    start=NEGATIVE_INFINITY,
                    end=POSITIVE_INFINITY,
                    label=UNKNOWN_DATE_LABEL,
                    medications=tuple(undated)
                )]
            return []

        events = self._build_events(dated)
        segments = []

        for start, end, active in self._sweep(events):
            segments.append(Segment(
                start=start,
                end=end,
                label=self.format_range_label(start, end),
                medications=tuple(active) + tuple(undated)
            ))

        logger.debug(
            f"Segmented {len(records)} medications ({len(undated)} undated) "
            f"into {len(segments)} segments"
        )
        return segments

    def _build_events(self, dated: Sequence[MedicationRecord]) -> List[TimelineEvent]:
        """One start and one (exclusive) end event per medication"""
        events = []

        for rank, med in enumerate(dated):
            interval = canonical_interval(med)
            if interval.repaired:
                logger.warning(
                    f"Medication {med.drug_name}: end date {med.usage_end_date} precedes "
                    f"start date {med.usage_start_date}, using {interval.start.isoformat()} "
                    f"to {interval.end.isoformat()}"
                )

            events.append(TimelineEvent(at=interval.start, kind=EventKind.START, medication=med, rank=rank))
            events.append(TimelineEvent(at=interval.exclusive_end, kind=EventKind.END, medication=med, rank=rank))

        # -inf starts first, +inf ends last, END before START on the same day
        events.sort(key=TimelineEvent.sort_key)
        return events

    def _sweep(self, events: List[TimelineEvent]) -> List[Tuple[Bound, Bound, List[MedicationRecord]]]:
        """Walk boundaries left to right, closing a span whenever the active set changes"""
        spans = []
        active: Dict[int, MedicationRecord] = {}
        segment_start: Optional[Bound] = None

        for boundary, group in itertools.groupby(events, key=lambda e: e.at):
            if segment_start is not None and len(active) >= 2:
                end = boundary.shift(-1) if boundary.is_finite else POSITIVE_INFINITY
                spans.append((segment_start, end, [active[rank] for rank in sorted(active)]))

            for event in group:
                if event.kind is EventKind.START:
                    active[event.rank] = event.medication
                else:
                    active.pop(event.rank, None)

            segment_start = boundary

        return spans

    def format_range_label(self, start: Bound, end: Bound) -> str:
        """Vietnamese range label: "a - b", "Từ a", "Đến b" or unknown"""
        if not start.is_finite and not end.is_finite:
            return UNKNOWN_DATE_LABEL

        if not start.is_finite:
            return f"Đến {format_day(end.day, self.date_format)}"

        if not end.is_finite:
            return f"Từ {format_day(start.day, self.date_format)}"

        return f"{format_day(start.day, self.date_format)} - {format_day(end.day, self.date_format)}"
