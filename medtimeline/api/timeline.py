"""
Timeline API Routes
Segmentation, duration and relationship endpoints for the report pipeline
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from medtimeline.config import settings
from medtimeline.exceptions import InvalidInputError
from medtimeline.models import coerce_medications
from medtimeline.services import (
    DurationService,
    InteractionPlanner,
    RelationshipClassifier,
    TimelineSegmentationService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/timeline", tags=["Medication Timeline"])


# ==================== Request Models ====================

class MedicationListInput(BaseModel):
    medications: List[Dict[str, Any]]


class PairInput(BaseModel):
    medication_a: Dict[str, Any]
    medication_b: Dict[str, Any]
    switch_gap_days: Optional[int] = None


class InteractionValidationInput(PairInput):
    claim_text: str = ""


class DurationInput(BaseModel):
    quantity: Optional[float] = None
    dose: Optional[str] = None
    frequency: Optional[str] = None
    start_date: str


class ApplyDurationsInput(BaseModel):
    medications: List[Dict[str, Any]]
    today: Optional[date] = None


class ClaimFilterInput(BaseModel):
    medications: List[Dict[str, Any]]
    claims: List[Dict[str, Any]]
    switch_gap_days: Optional[int] = None


def _check_size(medications: List[Dict[str, Any]]):
    """Reject implausibly large medication lists"""
    limit = settings.MAX_MEDICATIONS_PER_REQUEST
    if len(medications) > limit:
        logger.warning(f"Rejected request with {len(medications)} medications (limit {limit})")
        raise HTTPException(
            status_code=413,
            detail=f"Too many medications: {len(medications)} (limit {limit})"
        )


def _invalid(e: InvalidInputError) -> HTTPException:
    logger.info(f"Invalid input: {e}")
    return HTTPException(status_code=422, detail=str(e))


# ==================== Segmentation ====================

@router.post("/segments")
async def segment_medications(input_data: MedicationListInput):
    """
    Group medications into co-administration segments
    - Only segments with two or more concurrent drugs are returned
    - Undated medications join every segment
    """
    _check_size(input_data.medications)
    try:
        segments = TimelineSegmentationService().segment(input_data.medications)
    except InvalidInputError as e:
        raise _invalid(e)

    return {
        "segments": [s.to_dict() for s in segments],
        "count": len(segments)
    }


@router.post("/plan")
async def plan_interaction_checks(input_data: MedicationListInput):
    """
    Medication groups to send to the interaction analyzer
    - Falls back to one catch-all group when nothing overlaps
    """
    _check_size(input_data.medications)
    try:
        plan = InteractionPlanner().plan(input_data.medications)
    except InvalidInputError as e:
        raise _invalid(e)

    return plan.to_dict()


# ==================== Relationships ====================

@router.post("/relationship")
async def classify_relationship(input_data: PairInput):
    """Overlap / switching verdict for two medications"""
    try:
        classifier = RelationshipClassifier(switch_gap_days=input_data.switch_gap_days)
        verdict = classifier.classify(input_data.medication_a, input_data.medication_b)
    except InvalidInputError as e:
        raise _invalid(e)

    return verdict.to_dict()


@router.post("/validate-interaction")
async def validate_interaction(input_data: InteractionValidationInput):
    """
    Sanity-check an AI-claimed interaction against the timeline
    - isValid false means the claim describes a sequential switch
    """
    try:
        classifier = RelationshipClassifier(switch_gap_days=input_data.switch_gap_days)
        result = classifier.validate_interaction(
            input_data.medication_a,
            input_data.medication_b,
            input_data.claim_text
        )
    except InvalidInputError as e:
        raise _invalid(e)

    return result.to_dict()


@router.post("/claims/filter")
async def filter_claims(input_data: ClaimFilterInput):
    """Split a batch of AI interaction claims into kept and suppressed"""
    _check_size(input_data.medications)
    try:
        classifier = RelationshipClassifier(switch_gap_days=input_data.switch_gap_days)
        kept, suppressed = classifier.filter_claims(input_data.medications, input_data.claims)
    except InvalidInputError as e:
        raise _invalid(e)

    return {
        "kept": [c.to_dict() for c in kept],
        "suppressed": [c.to_dict() for c in suppressed],
        "summary": {
            "kept_count": len(kept),
            "suppressed_count": len(suppressed)
        }
    }


# ==================== Durations ====================

@router.post("/duration")
async def estimate_duration(input_data: DurationInput):
    """Estimate an end date from quantity, dose and frequency"""
    service = DurationService()
    try:
        estimate = service.estimate(
            input_data.quantity,
            input_data.dose,
            input_data.frequency,
            input_data.start_date
        )
    except InvalidInputError as e:
        raise _invalid(e)

    result = estimate.to_dict()
    result["label"] = service.format_duration(
        estimate.start_date, estimate.end_date, estimate.estimated_days, estimate.is_estimated
    )
    return result


@router.post("/durations/apply")
async def apply_durations(input_data: ApplyDurationsInput):
    """Fill in missing end dates and statuses for a case's medications"""
    _check_size(input_data.medications)
    try:
        views = DurationService().apply_durations(
            coerce_medications(input_data.medications),
            today=input_data.today
        )
    except InvalidInputError as e:
        raise _invalid(e)

    return {"medications": [v.to_dict() for v in views]}
