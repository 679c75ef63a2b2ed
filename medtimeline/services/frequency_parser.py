"""
Frequency/Dose Parser - Free-text dose and frequency to numbers

Unparseable text yields None, never a default of 0 or 1; callers decide
what a missing value means.
"""
import re
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional


# Per-administration units seen on Vietnamese prescriptions
DOSE_UNITS = r'(?:viên|gói|ống|ml|g|nang|giọt|lọ|chai|tube|tab|tablet|cap|capsule)'

DOSE_FRACTION_PATTERN = re.compile(r'(\d+)\s*/\s*(\d+)')
DOSE_QUANTITY_PATTERN = re.compile(r'(\d+(?:[.,]\d+)?)\s*' + DOSE_UNITS + r'(?![a-zà-ỹ])', re.IGNORECASE)

# "ngày 3 lần", "2 lần/ngày", "4 viên/ngày"; a bare "5 ngày" is a course length
COUNT_PER_DAY_PATTERNS = [
    re.compile(r'ngày\s*(?:uống\s*)?(\d+)\s*(?:lần|viên|gói|ống)', re.IGNORECASE),
    re.compile(r'(\d+)\s*(?:(?:lần|viên|gói|ống)\s*/?|/)\s*(?:1\s*)?ngày', re.IGNORECASE),
]

# English shorthand, same vocabulary as the entity extractor
DOSE_PATTERN_4 = re.compile(r'\b(\d+)\s*-\s*(\d+)\s*-\s*(\d+)\s*-\s*(\d+)\b')
DOSE_PATTERN_3 = re.compile(r'\b(\d+)\s*-\s*(\d+)\s*-\s*(\d+)\b')
EVERY_N_HOURS_PATTERNS = [
    re.compile(r'\bevery\s*(\d+)\s*hours?\b', re.IGNORECASE),
    re.compile(r'\bq(\d+)h\b', re.IGNORECASE),
]
NAMED_FREQUENCY_PATTERNS = [
    (re.compile(r'\b(?:four\s*times?|4x|qds|qid)\s*(?:daily|a\s*day|per\s*day)?\b', re.IGNORECASE), 4),
    (re.compile(r'\b(?:thrice|3x|three\s*times?|tds|tid)\s*(?:daily|a\s*day|per\s*day)?\b', re.IGNORECASE), 3),
    (re.compile(r'\b(?:twice|2x|two\s*times?|bd|bid)\s*(?:daily|a\s*day|per\s*day)?\b', re.IGNORECASE), 2),
    (re.compile(r'\b(?:once|1x|one\s*time)\s*(?:daily|a\s*day|per\s*day)\b|\b(?:od|daily)\b', re.IGNORECASE), 1),
]

# Clock times of administration, e.g. "8h-20h"
CLOCK_TIME_PATTERN = re.compile(r'\b(\d{1,2})\s*h(?:\s*\d{2})?\b', re.IGNORECASE)

TIME_OF_DAY_TOKENS = ['sáng', 'trưa', 'chiều', 'tối', 'trước ngủ', 'khuya']


@dataclass(frozen=True)
class ParsedRegimen:
    """Numeric reading of a dose/frequency pair"""
    dose_per_admin: Optional[float]
    frequency_per_day: Optional[int]

    @property
    def daily_dose(self) -> Optional[float]:
        if self.dose_per_admin is None or self.frequency_per_day is None:
            return None
        return self.dose_per_admin * self.frequency_per_day


def parse_dose(dose: Optional[str]) -> Optional[float]:
    """
    Quantity taken per administration.

    "1 viên" -> 1.0, "5ml" -> 5.0, "1/2 viên" -> 0.5, "10mg" -> None
    """
    if not dose:
        return None

    text = dose.lower().strip()

    # Fractions first so "1/2 viên" is not read as "2 viên"
    fraction = DOSE_FRACTION_PATTERN.search(text)
    if fraction:
        denominator = int(fraction.group(2))
        if denominator == 0:
            return None
        return float(Fraction(int(fraction.group(1)), denominator))

    quantity = DOSE_QUANTITY_PATTERN.search(text)
    if quantity:
        return float(quantity.group(1).replace(',', '.'))

    return None


def parse_frequency(frequency: Optional[str]) -> Optional[int]:
    """
    Administrations per day.

    "2 lần/ngày" -> 2, "ngày 3 lần" -> 3, "sáng tối" -> 2, "8h-20h" -> 2
    """
    if not frequency:
        return None

    text = frequency.lower().strip()

    for pattern in COUNT_PER_DAY_PATTERNS:
        match = pattern.search(text)
        if match:
            return int(match.group(1))

    match = DOSE_PATTERN_4.search(text)
    if match:
        return sum(int(g) for g in match.groups())

    match = DOSE_PATTERN_3.search(text)
    if match:
        return sum(int(g) for g in match.groups())

    for pattern in EVERY_N_HOURS_PATTERNS:
        match = pattern.search(text)
        if match:
            hours = int(match.group(1))
            if hours <= 0:
                return None
            return max(24 // hours, 1)

    for pattern, times_per_day in NAMED_FREQUENCY_PATTERNS:
        if pattern.search(text):
            return times_per_day

    clock_hours = {int(h) for h in CLOCK_TIME_PATTERN.findall(text) if int(h) < 24}
    if clock_hours:
        return len(clock_hours)

    count = sum(1 for token in TIME_OF_DAY_TOKENS if token in text)
    if count > 0:
        return count

    return None


def parse_prescription(dose: Optional[str], frequency: Optional[str]) -> ParsedRegimen:
    """Parse both halves of a prescription line"""
    return ParsedRegimen(
        dose_per_admin=parse_dose(dose),
        frequency_per_day=parse_frequency(frequency),
    )
