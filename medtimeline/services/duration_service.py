"""
Duration Estimator - Infer a medication's end date from quantity, dose and frequency
"""
import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Optional

from medtimeline.config import settings
from medtimeline.dates import add_days, coerce_date, format_day
from medtimeline.exceptions import InvalidInputError
from medtimeline.models import (
    Bound, CanonicalInterval, DurationEstimate, MedicationRecord, MedicationStatus
)
from medtimeline.models.medication import coerce_quantity

from .frequency_parser import parse_dose, parse_frequency

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MedicationDurationView:
    """A medication together with its derived usage window and status"""
    medication: MedicationRecord
    estimate: Optional[DurationEstimate]
    status: Optional[MedicationStatus]

    def to_dict(self):
        data = self.medication.to_dict()
        data["estimatedDays"] = self.estimate.estimated_days if self.estimate else None
        data["durationIsEstimated"] = self.estimate.is_estimated if self.estimate else None
        data["medicationStatus"] = self.status.value if self.status else None
        return data


class DurationService:
    """
    Medication duration estimation

    Decision policy (first match wins):
    1. No quantity, frequency parses to > 0 -> chronic default, estimated
    2. No quantity, frequency unparseable -> single day, not an estimate
    3. Quantity, but dose/frequency unparseable -> quantity read as days, estimated
    4. Everything parses -> ceil(quantity / daily dose) days, exact
    """

    def __init__(self, chronic_default_days: Optional[int] = None):
        if chronic_default_days is None:
            chronic_default_days = settings.CHRONIC_DEFAULT_DAYS
        self.chronic_default_days = chronic_default_days

    def estimate(self, quantity: Any, dose: Optional[str], frequency: Optional[str],
                 start_date: Any) -> DurationEstimate:
        """
        Estimate the usage window of one medication.

        Args:
            quantity: total units dispensed, or None
            dose: free-text dose per administration, e.g. "1 viên"
            frequency: free-text frequency, e.g. "2 lần/ngày"
            start_date: first day of use (date or date string)

        Returns:
            DurationEstimate with an inclusive end date
        """
        start = coerce_date(start_date, "start_date")
        if start is None:
            raise InvalidInputError("start_date", "a start date is required to estimate a duration")

        quantity = self._coerce_quantity(quantity)
        frequency_per_day = parse_frequency(frequency)

        if quantity is None:
            if frequency_per_day:
                return self._build(start, self.chronic_default_days, is_estimated=True)
            # Single administration, an explicit assumption rather than an estimate
            return DurationEstimate(start_date=start, end_date=start, estimated_days=0, is_estimated=False)

        dose_per_admin = parse_dose(dose)
        daily_dose = (dose_per_admin or 0) * (frequency_per_day or 0)

        if daily_dose <= 0:
            logger.debug(f"Dose {dose!r} / frequency {frequency!r} not parseable, reading quantity as days")
            return self._build(start, math.ceil(quantity), is_estimated=True)

        return self._build(start, math.ceil(quantity / daily_dose), is_estimated=False)

    def _build(self, start: date, days: int, is_estimated: bool) -> DurationEstimate:
        return DurationEstimate(
            start_date=start,
            end_date=add_days(start, days),
            estimated_days=days,
            is_estimated=is_estimated
        )

    def _coerce_quantity(self, quantity: Any) -> Optional[float]:
        """None and non-positive quantities both mean 'not dispensed'"""
        quantity = coerce_quantity(quantity)
        if quantity is None or quantity <= 0 or math.isinf(quantity):
            return None
        return float(quantity)

    # ==================== Status & Display ====================

    def medication_status(self, start_date: Any, end_date: Any,
                          today: Optional[date] = None) -> MedicationStatus:
        """Where today falls relative to an inclusive usage window"""
        start = coerce_date(start_date, "start_date")
        end = coerce_date(end_date, "end_date")
        if start is None or end is None:
            raise InvalidInputError("usage dates", "both start and end dates are required for a status")

        current = today or date.today()
        window = CanonicalInterval(start=Bound.at(start), end=Bound.at(end))
        if window.contains(current):
            return MedicationStatus.ACTIVE
        return MedicationStatus.UPCOMING if current < start else MedicationStatus.COMPLETED

    def format_duration(self, start_date: Any, end_date: Any, estimated_days: int,
                        is_estimated: bool) -> str:
        """Human-readable usage window for reports"""
        start = coerce_date(start_date, "start_date")
        end = coerce_date(end_date, "end_date")

        if start == end:
            return f"Ngày {format_day(start)} (liều đơn)"

        prefix = 'Dự kiến' if is_estimated else 'Thời gian'
        return f"{prefix}: {format_day(start)} → {format_day(end)} ({estimated_days} ngày)"

    # ==================== Batch ====================

    def apply_durations(self, medications: Iterable[MedicationRecord],
                        today: Optional[date] = None) -> List[MedicationDurationView]:
        """
        Fill in missing end dates for a case's medication list.

        Records with an explicit end date different from the start date are
        kept as-is; records without a start date are passed through
        untouched. Inputs are never modified.
        """
        views = []

        for med in medications:
            if med.usage_start_date is None:
                views.append(MedicationDurationView(medication=med, estimate=None, status=None))
                continue

            if med.usage_end_date and med.usage_end_date != med.usage_start_date:
                status = None
                if med.usage_end_date > med.usage_start_date:
                    status = self.medication_status(med.usage_start_date, med.usage_end_date, today)
                views.append(MedicationDurationView(medication=med, estimate=None, status=status))
                continue

            estimate = self.estimate(
                med.quantity,
                med.prescribed_dose,
                med.prescribed_frequency,
                med.usage_start_date
            )
            views.append(MedicationDurationView(
                medication=med.with_dates(estimate.start_date, estimate.end_date),
                estimate=estimate,
                status=self.medication_status(estimate.start_date, estimate.end_date, today)
            ))

        return views
