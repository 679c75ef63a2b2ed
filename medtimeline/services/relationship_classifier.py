"""
Relationship Classifier - Overlap, switching and interaction validity for drug pairs

Used on its own and to sanity-check interaction claims produced by the AI
analyzer before they reach the clinician-facing report.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from medtimeline.config import settings
from medtimeline.exceptions import InvalidInputError
from medtimeline.models import (
    ClaimAssessment, InteractionValidation, MedicationRecord, RelationshipVerdict
)
from medtimeline.models.medication import coerce_medications

from .drug_classes import resolve_generic
from .relatedness import RelatednessCapability, default_relatedness
from .timeline_segmentation_service import canonical_interval

logger = logging.getLogger(__name__)

REASON_CONCURRENT = "Real concurrent use"
REASON_SWITCH = "Sequential switch, not concurrent use; interaction suppressed"
REASON_NO_EVIDENCE = "Insufficient temporal evidence to suppress"
REASON_OVERLAP_DESPITE_CLASS = "Real overlap despite class similarity"


def _as_record(med: Any) -> MedicationRecord:
    if isinstance(med, MedicationRecord):
        return med
    return MedicationRecord.from_dict(med)


class RelationshipClassifier:
    """
    Pairwise temporal relationship checks

    Decision table for a claimed interaction:
    - overlap, no switch    -> valid (real concurrent use)
    - no overlap, switch    -> invalid (sequential switch, suppressed)
    - no overlap, no switch -> valid (not enough evidence to suppress)
    - overlap and switch    -> valid (real overlap despite class similarity)
    """

    def __init__(self, relatedness: Optional[RelatednessCapability] = None,
                 switch_gap_days: Optional[int] = None):
        if switch_gap_days is None:
            switch_gap_days = settings.SWITCH_GAP_DAYS
        if switch_gap_days < 0:
            raise InvalidInputError("switch_gap_days", "must not be negative")

        self.relatedness = relatedness or default_relatedness()
        self.switch_gap_days = switch_gap_days

    def overlaps(self, med_a: Any, med_b: Any) -> bool:
        """True when both canonical intervals share at least one calendar day"""
        a, b = _as_record(med_a), _as_record(med_b)
        return canonical_interval(a).shares_day_with(canonical_interval(b))

    def is_switching(self, med_a: Any, med_b: Any) -> bool:
        """
        True when one drug stops and a related one starts right after.

        The gap between the earlier drug's last day and the later drug's
        first day must be between 1 and ``switch_gap_days`` days; open-ended
        windows never count as adjacent.
        """
        a, b = _as_record(med_a), _as_record(med_b)
        interval_a = canonical_interval(a)
        interval_b = canonical_interval(b)

        if interval_a.shares_day_with(interval_b):
            return False

        earlier, later = (interval_a, interval_b) if interval_a.end < interval_b.start else (interval_b, interval_a)
        if not (earlier.end.is_finite and later.start.is_finite):
            return False

        gap = (later.start.day - earlier.end.day).days
        if not 1 <= gap <= self.switch_gap_days:
            return False

        return self.relatedness.are_related(a.drug_name, b.drug_name)

    def classify(self, med_a: Any, med_b: Any) -> RelationshipVerdict:
        """Full verdict for a pair"""
        a, b = _as_record(med_a), _as_record(med_b)
        overlap = self.overlaps(a, b)
        switching = self.is_switching(a, b)
        is_valid, reason = self._decide(overlap, switching)

        return RelationshipVerdict(
            pair=(a.drug_name, b.drug_name),
            overlap=overlap,
            switching=switching,
            interaction_valid=is_valid,
            reason=reason
        )

    def validate_interaction(self, med_a: Any, med_b: Any, claim_text: str = "") -> InteractionValidation:
        """
        Check a claimed interaction against the timeline.

        Args:
            med_a, med_b: the two medications named by the claim
            claim_text: the claim as produced by the analyzer, kept for the audit log

        Returns:
            InteractionValidation; ``is_valid`` False means the claim should be suppressed
        """
        verdict = self.classify(med_a, med_b)

        if not verdict.interaction_valid:
            logger.warning(
                f"Suppressing interaction claim for {verdict.pair[0]} + {verdict.pair[1]}: "
                f"{verdict.reason} (claim: {claim_text!r})"
            )

        return InteractionValidation(is_valid=verdict.interaction_valid, reason=verdict.reason)

    def _decide(self, overlap: bool, switching: bool) -> Tuple[bool, str]:
        if overlap and switching:
            return True, REASON_OVERLAP_DESPITE_CLASS
        if overlap:
            return True, REASON_CONCURRENT
        if switching:
            return False, REASON_SWITCH
        # TODO: confirm the default-to-valid policy with the clinical pharmacist reviewers
        return True, REASON_NO_EVIDENCE

    # ==================== Claim Filtering ====================

    def filter_claims(self, medications: Iterable,
                      claims: Iterable[Dict[str, Any]]) -> Tuple[List[ClaimAssessment], List[ClaimAssessment]]:
        """
        Split AI interaction claims into kept and suppressed.

        Each claim is a dict with ``drugs`` (two names) and ``text``; the
        analyzer's ``drug1``/``drug2``/``description`` spelling is accepted
        too. Claims naming a drug absent from the case are kept.
        """
        records = coerce_medications(medications)
        kept, suppressed = [], []

        for claim in claims:
            drugs, text = self._claim_parts(claim)
            med_a = self._find_medication(records, drugs[0])
            med_b = self._find_medication(records, drugs[1])

            if med_a is None or med_b is None:
                missing = drugs[0] if med_a is None else drugs[1]
                kept.append(ClaimAssessment(
                    drugs=drugs,
                    text=text,
                    validation=InteractionValidation(
                        is_valid=True,
                        reason=f"{missing} not found in the medication list; kept for review"
                    )
                ))
                continue

            verdict = self.classify(med_a, med_b)
            assessment = ClaimAssessment(
                drugs=drugs,
                text=text,
                validation=InteractionValidation(is_valid=verdict.interaction_valid, reason=verdict.reason),
                verdict=verdict
            )

            if verdict.interaction_valid:
                kept.append(assessment)
            else:
                logger.warning(f"Suppressing claim {drugs[0]} + {drugs[1]}: {verdict.reason}")
                suppressed.append(assessment)

        return kept, suppressed

    def _claim_parts(self, claim: Dict[str, Any]) -> Tuple[Tuple[str, str], str]:
        if not isinstance(claim, dict):
            raise InvalidInputError("claim", f"expected an object, got {type(claim).__name__}")

        drugs = claim.get('drugs') or [claim.get('drug1'), claim.get('drug2')]
        if len(drugs) != 2 or not all(isinstance(d, str) and d.strip() for d in drugs):
            raise InvalidInputError("claim.drugs", "a claim must name exactly two drugs")

        text = claim.get('text') or claim.get('description') or ""
        return (drugs[0], drugs[1]), text

    def _find_medication(self, records: List[MedicationRecord], name: str) -> Optional[MedicationRecord]:
        """Exact name, then same generic, then substring match"""
        wanted = name.lower().strip()
        for med in records:
            if med.drug_name.lower().strip() == wanted:
                return med

        generic = resolve_generic(name)
        for med in records:
            if resolve_generic(med.drug_name) == generic:
                return med

        for med in records:
            candidate = med.drug_name.lower()
            if wanted in candidate or candidate in wanted:
                return med

        return None
