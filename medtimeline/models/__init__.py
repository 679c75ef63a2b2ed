# Domain Models
from .medication import MedicationRecord, MedicationStatus, coerce_medications
from .timeline import (
    Bound, BoundKind, NEGATIVE_INFINITY, POSITIVE_INFINITY,
    CanonicalInterval, EventKind, TimelineEvent, Segment
)
from .verdict import InteractionValidation, RelationshipVerdict, DurationEstimate, ClaimAssessment
