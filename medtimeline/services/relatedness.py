"""
Relatedness Capabilities - Decide whether two drugs are pharmacologically related

The relationship classifier only asks "are these two related?"; how that is
answered is up to the injected capability.
"""
import logging
from abc import ABC, abstractmethod
from difflib import SequenceMatcher
from typing import Callable, Iterable, Optional, Set

from .drug_classes import BROAD_CLASSES, get_drug_classes, normalize_drug_name, resolve_generic

logger = logging.getLogger(__name__)


def _shared_run(a: str, b: str) -> int:
    """Number of leading characters the two strings have in common"""
    count = 0
    for char_a, char_b in zip(a, b):
        if char_a != char_b:
            break
        count += 1
    return count


class RelatednessCapability(ABC):
    """Judges whether two medications belong to the same therapeutic family"""

    @abstractmethod
    def are_related(self, drug_a: str, drug_b: str) -> bool:
        ...

    def __call__(self, drug_a: str, drug_b: str) -> bool:
        return self.are_related(drug_a, drug_b)


class DrugClassRelatedness(RelatednessCapability):
    """
    Exact class-table lookup.

    Two drugs are related when they share a class that is not one of the
    umbrella classes (antibiotic, antihypertensive, ...), unless
    ``include_broad`` is set. When either drug is missing from the table
    the optional ``fallback`` capability decides.
    """

    def __init__(self, include_broad: bool = False,
                 fallback: Optional[RelatednessCapability] = None):
        self.include_broad = include_broad
        self.fallback = fallback

    def classes_of(self, drug: str) -> Set[str]:
        classes = set(get_drug_classes(drug))
        if not self.include_broad:
            classes -= BROAD_CLASSES
        return classes

    def are_related(self, drug_a: str, drug_b: str) -> bool:
        if self.fallback is not None and not (get_drug_classes(drug_a) and get_drug_classes(drug_b)):
            return self.fallback.are_related(drug_a, drug_b)

        shared = self.classes_of(drug_a) & self.classes_of(drug_b)
        if shared:
            logger.debug(f"{drug_a} and {drug_b} share classes {sorted(shared)}")
        return bool(shared)


class NameSimilarityRelatedness(RelatednessCapability):
    """
    Name heuristic for drugs missing from the class table.

    Related when the generic names are similar overall or share a naming
    stem such as "-statin", "-pril" or "cef-".
    """

    def __init__(self, threshold: float = 0.8, min_affix: int = 4):
        self.threshold = threshold
        self.min_affix = min_affix

    def _stem(self, drug: str) -> str:
        generic = resolve_generic(drug)
        parts = generic.split()
        return parts[0] if parts else normalize_drug_name(drug)

    def are_related(self, drug_a: str, drug_b: str) -> bool:
        a = self._stem(drug_a)
        b = self._stem(drug_b)
        if not a or not b:
            return False
        if a == b:
            return True

        if SequenceMatcher(None, a, b).ratio() >= self.threshold:
            return True

        prefix = _shared_run(a, b)
        suffix = _shared_run(a[::-1], b[::-1])
        return prefix >= self.min_affix or suffix >= self.min_affix


class OntologyRelatedness(RelatednessCapability):
    """
    Delegates class lookup to an external ontology.

    ``lookup`` maps a drug name to its class identifiers (for example ATC
    codes); the drugs are related when the returned sets intersect.
    """

    def __init__(self, lookup: Callable[[str], Optional[Iterable[str]]]):
        self.lookup = lookup

    def are_related(self, drug_a: str, drug_b: str) -> bool:
        classes_a = set(self.lookup(drug_a) or ())
        classes_b = set(self.lookup(drug_b) or ())
        return bool(classes_a & classes_b)


class AnyOfRelatedness(RelatednessCapability):
    """Related if any of the wrapped capabilities says so"""

    def __init__(self, *capabilities: RelatednessCapability):
        if not capabilities:
            raise ValueError("AnyOfRelatedness needs at least one capability")
        self.capabilities = capabilities

    def are_related(self, drug_a: str, drug_b: str) -> bool:
        return any(c.are_related(drug_a, drug_b) for c in self.capabilities)


def default_relatedness() -> RelatednessCapability:
    """Class table, name heuristic for drugs it does not know"""
    return DrugClassRelatedness(fallback=NameSimilarityRelatedness())
