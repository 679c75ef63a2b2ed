"""
Verdict Models - Results of pairwise relationship checks
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class InteractionValidation:
    """Whether a claimed interaction survives the timeline facts"""
    is_valid: bool
    reason: str
    
    def to_dict(self) -> Dict[str, Any]:
        return {"isValid": self.is_valid, "reason": self.reason}


@dataclass(frozen=True)
class RelationshipVerdict:
    """Temporal relationship between two medications"""
    pair: Tuple[str, str]
    overlap: bool
    switching: bool
    interaction_valid: bool
    reason: str
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "pair": list(self.pair),
            "overlap": self.overlap,
            "switching": self.switching,
            "interactionValid": self.interaction_valid,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class DurationEstimate:
    """Usage window inferred from quantity, dose and frequency"""
    start_date: date
    end_date: date
    estimated_days: int
    is_estimated: bool
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "usageStartDate": self.start_date.isoformat(),
            "usageEndDate": self.end_date.isoformat(),
            "estimatedDays": self.estimated_days,
            "isEstimated": self.is_estimated,
        }


@dataclass(frozen=True)
class ClaimAssessment:
    """An externally generated interaction claim and the timeline's view of it"""
    drugs: Tuple[str, str]
    text: str
    validation: InteractionValidation
    verdict: Optional[RelationshipVerdict] = None
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "drugs": list(self.drugs),
            "text": self.text,
            "isValid": self.validation.is_valid,
            "reason": self.validation.reason,
            "verdict": self.verdict.to_dict() if self.verdict else None,
        }
