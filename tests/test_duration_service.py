"""Tests for the duration estimator and its status/display helpers."""

from __future__ import annotations

from datetime import date

import pytest

from medtimeline.exceptions import InvalidInputError
from medtimeline.models import MedicationRecord, MedicationStatus
from medtimeline.services.duration_service import DurationService


@pytest.fixture
def service() -> DurationService:
    return DurationService(chronic_default_days=30)


# --- estimate: policy branches ---


def test_estimate_exact_from_quantity_dose_and_frequency(service: DurationService) -> None:
    """14 tablets, 1 tablet twice a day -> 7 days."""
    result = service.estimate(14, "1 viên", "2 lần/ngày", "2025-11-16")
    assert result.end_date == date(2025, 11, 23)
    assert result.estimated_days == 7
    assert result.is_estimated is False
    assert result.to_dict() == {
        "usageStartDate": "2025-11-16",
        "usageEndDate": "2025-11-23",
        "estimatedDays": 7,
        "isEstimated": False,
    }


def test_estimate_rounds_partial_days_up(service: DurationService) -> None:
    result = service.estimate(15, "1 viên", "2 lần/ngày", "2025-11-16")
    assert result.estimated_days == 8
    assert result.end_date == date(2025, 11, 24)


def test_estimate_with_fractional_dose(service: DurationService) -> None:
    result = service.estimate(15, "1/2 viên", "sáng tối", date(2025, 1, 1))
    assert result.estimated_days == 15
    assert result.is_estimated is False


def test_estimate_no_quantity_with_frequency_uses_chronic_default(service: DurationService) -> None:
    result = service.estimate(None, "1 viên", "2 lần/ngày", "2025-11-16")
    assert result.estimated_days == 30
    assert result.end_date == date(2025, 12, 16)
    assert result.is_estimated is True


def test_estimate_chronic_default_is_configurable() -> None:
    result = DurationService(chronic_default_days=90).estimate(None, None, "sáng", "2025-01-01")
    assert result.estimated_days == 90


@pytest.mark.parametrize("quantity", [None, 0, -3])
def test_estimate_no_quantity_no_frequency_is_single_day(service: DurationService, quantity) -> None:
    """A single administration is an explicit assumption, not an estimate."""
    result = service.estimate(quantity, "1 viên", "khi đau", "2025-11-16")
    assert result.end_date == date(2025, 11, 16)
    assert result.estimated_days == 0
    assert result.is_estimated is False


def test_estimate_unparseable_dose_reads_quantity_as_days(service: DurationService) -> None:
    result = service.estimate(10, "10mg", "2 lần/ngày", "2025-11-16")
    assert result.estimated_days == 10
    assert result.end_date == date(2025, 11, 26)
    assert result.is_estimated is True


def test_estimate_unparseable_frequency_rounds_quantity_up(service: DurationService) -> None:
    result = service.estimate(10.5, "1 viên", "theo chỉ định", "2025-11-16")
    assert result.estimated_days == 11
    assert result.is_estimated is True


def test_estimate_zero_daily_dose_falls_back(service: DurationService) -> None:
    """A parsed daily dose of 0 is treated like a parser failure."""
    result = service.estimate(6, "1 viên", "0 lần/ngày", "2025-11-16")
    assert result.estimated_days == 6
    assert result.is_estimated is True


def test_estimate_accepts_numeric_string_quantity(service: DurationService) -> None:
    result = service.estimate("14", "1 viên", "2 lần/ngày", "16/11/2025")
    assert result.estimated_days == 7
    assert result.start_date == date(2025, 11, 16)


# --- estimate: invalid input ---


@pytest.mark.parametrize("start", [None, ""])
def test_estimate_requires_start_date(service: DurationService, start) -> None:
    with pytest.raises(InvalidInputError):
        service.estimate(14, "1 viên", "2 lần/ngày", start)


def test_estimate_rejects_non_date_start(service: DurationService) -> None:
    with pytest.raises(InvalidInputError) as exc:
        service.estimate(14, "1 viên", "2 lần/ngày", 20251116)
    assert exc.value.field == "start_date"


@pytest.mark.parametrize("quantity", ["nhiều", [14], True])
def test_estimate_rejects_non_numeric_quantity(service: DurationService, quantity) -> None:
    with pytest.raises(InvalidInputError):
        service.estimate(quantity, "1 viên", "2 lần/ngày", "2025-11-16")


# --- status and display ---


@pytest.mark.parametrize(
    "today, expected",
    [
        (date(2025, 11, 1), MedicationStatus.UPCOMING),
        (date(2025, 11, 16), MedicationStatus.ACTIVE),
        (date(2025, 11, 23), MedicationStatus.ACTIVE),
        (date(2025, 11, 24), MedicationStatus.COMPLETED),
    ],
)
def test_medication_status(service: DurationService, today: date, expected: MedicationStatus) -> None:
    assert service.medication_status("2025-11-16", "2025-11-23", today=today) is expected


def test_format_duration_single_dose(service: DurationService) -> None:
    assert service.format_duration("2025-11-16", "2025-11-16", 0, False) == "Ngày 16/11/2025 (liều đơn)"


def test_format_duration_prefix_depends_on_estimation(service: DurationService) -> None:
    assert service.format_duration("2025-11-16", "2025-11-23", 7, False) == (
        "Thời gian: 16/11/2025 → 23/11/2025 (7 ngày)"
    )
    assert service.format_duration("2025-11-16", "2025-12-16", 30, True) == (
        "Dự kiến: 16/11/2025 → 16/12/2025 (30 ngày)"
    )


# --- apply_durations ---


def test_apply_durations_fills_missing_end_dates(service: DurationService, make_med) -> None:
    explicit = make_med("Aspirin", "2025-11-01", "2025-11-10")
    open_ended = make_med("Metformin", "2025-11-16", None, dose="1 viên", frequency="2 lần/ngày", quantity=14)
    undated = make_med("Paracetamol")

    views = service.apply_durations([explicit, open_ended, undated], today=date(2025, 11, 20))

    assert views[0].medication is explicit
    assert views[0].estimate is None
    assert views[0].status is MedicationStatus.COMPLETED

    assert views[1].medication.usage_end_date == date(2025, 11, 23)
    assert views[1].estimate.estimated_days == 7
    assert views[1].status is MedicationStatus.ACTIVE
    assert views[1].to_dict()["durationIsEstimated"] is False

    assert views[2].medication is undated
    assert views[2].status is None


def test_apply_durations_accepts_numeric_string_quantity(service: DurationService) -> None:
    """Extraction sends quantities as text; records and estimates read them alike."""
    med = MedicationRecord.from_dict({
        "drugName": "Metformin",
        "usageStartDate": "2025-11-16",
        "prescribedDose": "1 viên",
        "prescribedFrequency": "2 lần/ngày",
        "quantity": "14",
    })
    assert med.quantity == 14.0

    view = service.apply_durations([med], today=date(2025, 11, 20))[0]
    assert view.estimate.estimated_days == 7
    assert view.estimate.is_estimated is False


@pytest.mark.parametrize("quantity", ["nhiều", True, float("nan")])
def test_record_rejects_non_numeric_quantity(make_med, quantity) -> None:
    with pytest.raises(InvalidInputError):
        make_med("Metformin", "2025-11-16", None, quantity=quantity)


def test_apply_durations_does_not_mutate_input(service: DurationService, make_med) -> None:
    med = make_med("Metformin", "2025-11-16", None, frequency="2 lần/ngày")
    service.apply_durations([med])
    assert med.usage_end_date is None


def test_apply_durations_reestimates_same_day_range(service: DurationService, make_med) -> None:
    """An end date equal to the start date is treated as missing."""
    med = make_med("Metformin", "2025-11-16", "2025-11-16", frequency="sáng tối")
    view = service.apply_durations([med], today=date(2025, 11, 16))[0]
    assert view.estimate.is_estimated is True
    assert view.medication.usage_end_date == date(2025, 12, 16)
