"""Tests for the analyzer call planner built on top of segmentation."""

from __future__ import annotations

from medtimeline.services.interaction_planner import (
    SEQUENTIAL_CATCH_ALL_LABEL,
    UNDATED_CATCH_ALL_LABEL,
    UNDATED_WARNING_LABEL,
    plan_interaction_checks,
)


def test_overlapping_medications_use_segments(aspirin, plavix) -> None:
    plan = plan_interaction_checks([aspirin, plavix])

    assert len(plan.groups) == 1
    assert plan.groups[0].label == "25/10/2025 - 01/11/2025"
    assert plan.undated == []
    assert plan.undated_warning is None


def test_sequential_medications_get_a_catch_all_group(lovastatin, atorvastatin) -> None:
    plan = plan_interaction_checks([atorvastatin, lovastatin])

    assert len(plan.groups) == 1
    assert plan.groups[0].label == SEQUENTIAL_CATCH_ALL_LABEL
    assert [m.drug_name for m in plan.groups[0].medications] == [
        "Atorvastatin TP 10mg",
        "Lovastatin DWP 10mg",
    ]


def test_undated_medication_with_one_dated_gets_undated_catch_all(make_med, aspirin) -> None:
    paracetamol = make_med("Paracetamol 500mg")
    plan = plan_interaction_checks([aspirin, paracetamol])

    assert [g.label for g in plan.groups] == [UNDATED_CATCH_ALL_LABEL]
    assert plan.undated == [paracetamol]
    assert plan.undated_warning == UNDATED_WARNING_LABEL


def test_undated_medication_joins_segments_and_raises_warning(make_med, aspirin, plavix) -> None:
    paracetamol = make_med("Paracetamol 500mg")
    plan = plan_interaction_checks([aspirin, plavix, paracetamol])

    assert len(plan.groups) == 1
    assert paracetamol in plan.groups[0].medications
    assert plan.undated_warning == UNDATED_WARNING_LABEL


def test_single_medication_plans_nothing(aspirin) -> None:
    plan = plan_interaction_checks([aspirin])
    assert plan.groups == []
    assert plan.to_dict() == {"groups": [], "undated": [], "undatedWarning": None}
