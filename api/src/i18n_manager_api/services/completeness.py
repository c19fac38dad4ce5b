"""Locale completeness over (key_path, language_code, value) triples.

Everything here is a pure function of the triple set. Duplicate triples
(e.g. from a join fan-out) collapse on (key_path, language_code).
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, NamedTuple, Optional, Set


class Triple(NamedTuple):
    key_path: str
    language_code: str
    value: str


@dataclass(frozen=True)
class KeyCoverage:
    key: str
    locales: List[str]
    locale_count: int


@dataclass(frozen=True)
class LocaleStats:
    locale: str
    count: int
    total: int
    missing: int
    percentage: float


@dataclass
class CompletenessReport:
    locale: str
    missing_keys: List[str]
    missing_count: int
    total_keys: int
    complete_keys: int
    completeness: str
    all_locales: List[str]
    key_completeness: List[KeyCoverage] = field(default_factory=list)


class CompletenessCalculator:
    def __init__(self, triples: Iterable[Triple]) -> None:
        self._locales_by_key: Dict[str, Set[str]] = {}
        for key_path, language_code, _value in triples:
            self._locales_by_key.setdefault(key_path, set()).add(language_code)

    def all_keys(self) -> Set[str]:
        return set(self._locales_by_key)

    def locales(self) -> Set[str]:
        found: Set[str] = set()
        for locales in self._locales_by_key.values():
            found |= locales
        return found

    def present_keys(self, locale: str) -> Set[str]:
        return {key for key, locales in self._locales_by_key.items() if locale in locales}

    def missing_keys(self, locale: str) -> Set[str]:
        return self.all_keys() - self.present_keys(locale)

    def completeness_ratio(self, locale: str) -> Decimal:
        """Percentage of keys present for ``locale``, two decimal places."""
        total = len(self._locales_by_key)
        if total == 0:
            return Decimal("0.00")
        ratio = Decimal(len(self.present_keys(locale)) * 100) / Decimal(total)
        return ratio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def per_key_coverage(self) -> List[KeyCoverage]:
        return [
            KeyCoverage(key=key, locales=sorted(locales), locale_count=len(locales))
            for key, locales in sorted(self._locales_by_key.items())
        ]

    def report(self, locale: str, known_locales: Optional[Iterable[str]] = None) -> CompletenessReport:
        missing = sorted(self.missing_keys(locale))
        all_locales = self.locales() | set(known_locales or ())
        return CompletenessReport(
            locale=locale,
            missing_keys=missing,
            missing_count=len(missing),
            total_keys=len(self._locales_by_key),
            complete_keys=len(self.present_keys(locale)),
            completeness=format_percentage(self.completeness_ratio(locale)),
            all_locales=sorted(all_locales),
            key_completeness=self.per_key_coverage(),
        )

    def locale_stats(self, known_locales: Optional[Iterable[str]] = None) -> List[LocaleStats]:
        total = len(self._locales_by_key)
        stats = []
        for locale in sorted(self.locales() | set(known_locales or ())):
            count = len(self.present_keys(locale))
            stats.append(
                LocaleStats(
                    locale=locale,
                    count=count,
                    total=total,
                    missing=total - count,
                    percentage=float(self.completeness_ratio(locale)),
                )
            )
        return stats


def format_percentage(value: Decimal) -> str:
    return f"{value:.2f}%"
