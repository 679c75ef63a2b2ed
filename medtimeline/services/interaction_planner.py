"""
Interaction Planner - Decide which medication groups go to the interaction analyzer
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from medtimeline.models import MedicationRecord, Segment, NEGATIVE_INFINITY, POSITIVE_INFINITY
from medtimeline.models.medication import coerce_medications

from .timeline_segmentation_service import TimelineSegmentationService

logger = logging.getLogger(__name__)

UNDATED_CATCH_ALL_LABEL = "Ngày không rõ - kiểm tra tất cả tương tác"
SEQUENTIAL_CATCH_ALL_LABEL = "Thuốc dùng không chồng lấp - kiểm tra tương tác chung"
UNDATED_WARNING_LABEL = "CẢNH BÁO: Thuốc chưa có ngày sử dụng (cần cập nhật)"


@dataclass
class InteractionPlan:
    """Groups to analyze plus the medications whose dates need updating"""
    groups: List[Segment] = field(default_factory=list)
    undated: List[MedicationRecord] = field(default_factory=list)
    undated_warning: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "groups": [g.to_dict() for g in self.groups],
            "undated": [m.to_dict() for m in self.undated],
            "undatedWarning": self.undated_warning,
        }


class InteractionPlanner:
    """
    Turns a case's medication list into analyzer calls

    Segments from the timeline are used as-is. When the timeline yields no
    segment but the case still has two or more medications, one catch-all
    group with all of them is added so the analyzer still runs; the
    relationship classifier later suppresses claims on sequential switches.
    """

    def __init__(self, segmentation: Optional[TimelineSegmentationService] = None):
        self.segmentation = segmentation or TimelineSegmentationService()

    def plan(self, medications: Iterable) -> InteractionPlan:
        records = sorted(coerce_medications(medications), key=MedicationRecord.sort_key)
        undated = [m for m in records if not m.is_dated]

        groups = self.segmentation.segment(records)

        if not groups and len(records) >= 2:
            label = UNDATED_CATCH_ALL_LABEL if undated else SEQUENTIAL_CATCH_ALL_LABEL
            catch_all = Segment(
                start=NEGATIVE_INFINITY,
                end=POSITIVE_INFINITY,
                label=label,
                medications=tuple(records)
            )
            logger.info(f"No concurrent segment, catch-all group: {', '.join(catch_all.drug_names)}")
            groups = [catch_all]

        plan = InteractionPlan(groups=groups, undated=undated)
        if undated:
            plan.undated_warning = UNDATED_WARNING_LABEL
            logger.warning(
                f"{len(undated)} medication(s) without usage dates: "
                f"{', '.join(m.drug_name for m in undated)}"
            )
        return plan


def plan_interaction_checks(medications: Iterable) -> InteractionPlan:
    """Plan analyzer calls with the default segmentation settings"""
    return InteractionPlanner().plan(medications)
