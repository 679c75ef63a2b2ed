# Services Package
from .frequency_parser import ParsedRegimen, parse_dose, parse_frequency, parse_prescription
from .duration_service import DurationService, MedicationDurationView
from .timeline_segmentation_service import TimelineSegmentationService, canonical_interval
from .relatedness import (
    RelatednessCapability,
    DrugClassRelatedness,
    NameSimilarityRelatedness,
    OntologyRelatedness,
    AnyOfRelatedness,
    default_relatedness,
)
from .relationship_classifier import RelationshipClassifier
from .interaction_planner import InteractionPlan, InteractionPlanner, plan_interaction_checks

__all__ = [
    'ParsedRegimen',
    'parse_dose',
    'parse_frequency',
    'parse_prescription',
    'DurationService',
    'MedicationDurationView',
    'TimelineSegmentationService',
    'canonical_interval',
    'RelatednessCapability',
    'DrugClassRelatedness',
    'NameSimilarityRelatedness',
    'OntologyRelatedness',
    'AnyOfRelatedness',
    'default_relatedness',
    'RelationshipClassifier',
    'InteractionPlan',
    'InteractionPlanner',
    'plan_interaction_checks',
]
