"""Shared fixtures: medication factories and the reference switching cases.

Dates are ISO strings the way the extraction step delivers them; the
records coerce them to calendar days.
"""

from __future__ import annotations

from typing import Callable, Optional

import pytest

from medtimeline.models import MedicationRecord


def _make(
    name: str,
    start: Optional[str] = None,
    end: Optional[str] = None,
    dose: str = "1 viên",
    frequency: str = "Sáng 1 viên",
    **extra,
) -> MedicationRecord:
    return MedicationRecord(
        drug_name=name,
        prescribed_dose=dose,
        prescribed_frequency=frequency,
        usage_start_date=start,
        usage_end_date=end,
        **extra,
    )


@pytest.fixture
def make_med() -> Callable[..., MedicationRecord]:
    """Factory: make_med("Aspirin", "2025-10-23", "2025-11-04")."""
    return _make


@pytest.fixture
def lovastatin() -> MedicationRecord:
    return _make("Lovastatin DWP 10mg", "2025-10-23", "2025-10-27", dose="10mg", frequency="Tối 1 viên")


@pytest.fixture
def atorvastatin() -> MedicationRecord:
    return _make("Atorvastatin TP 10mg", "2025-10-28", "2025-11-04", dose="20mg", frequency="Tối 2 viên")


@pytest.fixture
def aspirin() -> MedicationRecord:
    return _make("Aspirin 75mg", "2025-10-23", "2025-11-04", dose="75mg")


@pytest.fixture
def plavix() -> MedicationRecord:
    return _make("Plavix 75mg", "2025-10-25", "2025-11-01", dose="75mg")


@pytest.fixture
def ceftazidime() -> MedicationRecord:
    return _make("Ceftazidime 1000mg", "2025-10-27", "2025-11-03", dose="1g", frequency="8h-20h")


@pytest.fixture
def ceftriaxone() -> MedicationRecord:
    return _make("Ceftriaxone 1g", "2025-11-04", "2025-11-10", dose="1g", frequency="Ngày 1 lần")
