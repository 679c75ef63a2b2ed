"""
Medication Models - Prescribed medication records as received from extraction
"""
import enum
import math
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from medtimeline.exceptions import InvalidInputError
from medtimeline.dates import coerce_date


class MedicationStatus(enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    UPCOMING = "upcoming"


def coerce_quantity(value: Any, field: str = "quantity") -> Optional[float]:
    """Numeric quantity from a number or numeric string ("14", "2,5"); blank is None"""
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidInputError(field, "expected a number, got bool")
    if isinstance(value, str):
        text = value.strip().replace(',', '.')
        if not text:
            return None
        try:
            value = float(text)
        except ValueError as e:
            raise InvalidInputError(field, f"expected a number, got {value!r}") from e
    if not isinstance(value, (int, float)) or math.isnan(value):
        raise InvalidInputError(field, f"expected a number, got {type(value).__name__}")
    return value


# Accepted key spellings, camelCase as sent by the extraction collaborator first
_FIELD_ALIASES = {
    'drug_name': ('drugName', 'drug_name', 'medication_name', 'name'),
    'prescribed_dose': ('prescribedDose', 'prescribed_dose', 'dose', 'dosage'),
    'prescribed_frequency': ('prescribedFrequency', 'prescribed_frequency', 'frequency'),
    'usage_start_date': ('usageStartDate', 'usage_start_date', 'start_date'),
    'usage_end_date': ('usageEndDate', 'usage_end_date', 'end_date'),
    'indication': ('indication',),
    'quantity': ('quantity',),
    'prescribed_route': ('prescribedRoute', 'prescribed_route', 'route'),
    'record_id': ('id', 'record_id'),
}


def _pick(data: Dict[str, Any], field: str) -> Any:
    for key in _FIELD_ALIASES[field]:
        if key in data:
            return data[key]
    return None


@dataclass(frozen=True)
class MedicationRecord:
    """One prescribed medication of a clinical case"""
    drug_name: str
    prescribed_dose: str = ""
    prescribed_frequency: str = ""
    usage_start_date: Optional[date] = None
    usage_end_date: Optional[date] = None
    indication: str = ""
    quantity: Optional[float] = None
    prescribed_route: Optional[str] = None
    record_id: Optional[str] = None
    
    def __post_init__(self):
        if not isinstance(self.drug_name, str) or not self.drug_name.strip():
            raise InvalidInputError("drug_name", "a non-empty drug name is required")
        
        object.__setattr__(self, 'usage_start_date', coerce_date(self.usage_start_date, "usage_start_date"))
        object.__setattr__(self, 'usage_end_date', coerce_date(self.usage_end_date, "usage_end_date"))
        
        object.__setattr__(self, 'quantity', coerce_quantity(self.quantity))
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MedicationRecord":
        """Build a record from an extraction payload (camelCase or snake_case keys)"""
        if not isinstance(data, dict):
            raise InvalidInputError("medication", f"expected an object, got {type(data).__name__}")
        
        record_id = _pick(data, 'record_id')
        return cls(
            drug_name=_pick(data, 'drug_name'),
            prescribed_dose=_pick(data, 'prescribed_dose') or "",
            prescribed_frequency=_pick(data, 'prescribed_frequency') or "",
            usage_start_date=_pick(data, 'usage_start_date'),
            usage_end_date=_pick(data, 'usage_end_date'),
            indication=_pick(data, 'indication') or "",
            quantity=_pick(data, 'quantity'),
            prescribed_route=_pick(data, 'prescribed_route'),
            record_id=str(record_id) if record_id is not None else None,
        )
    
    @property
    def is_dated(self) -> bool:
        return self.usage_start_date is not None or self.usage_end_date is not None
    
    def with_dates(self, start: Optional[date], end: Optional[date]) -> "MedicationRecord":
        """Copy of this record with different usage dates"""
        return replace(self, usage_start_date=start, usage_end_date=end)
    
    def sort_key(self):
        """Input-order independent ordering key"""
        return (
            self.drug_name.lower(),
            self.usage_start_date or date.min,
            self.usage_end_date or date.max,
            self.prescribed_dose,
            self.prescribed_frequency,
            self.indication,
            self.quantity if self.quantity is not None else float('-inf'),
            self.prescribed_route or "",
            self.record_id or "",
        )
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.record_id,
            "drugName": self.drug_name,
            "prescribedDose": self.prescribed_dose,
            "prescribedFrequency": self.prescribed_frequency,
            "prescribedRoute": self.prescribed_route,
            "usageStartDate": self.usage_start_date.isoformat() if self.usage_start_date else None,
            "usageEndDate": self.usage_end_date.isoformat() if self.usage_end_date else None,
            "indication": self.indication,
            "quantity": self.quantity,
        }


def coerce_medications(items: Iterable[Any]) -> List[MedicationRecord]:
    """Accept MedicationRecord objects or extraction dicts"""
    if items is None:
        return []
    if isinstance(items, (str, bytes, dict)):
        raise InvalidInputError("medications", "expected a list of medications")
    
    records = []
    for item in items:
        if isinstance(item, MedicationRecord):
            records.append(item)
        else:
            records.append(MedicationRecord.from_dict(item))
    return records
