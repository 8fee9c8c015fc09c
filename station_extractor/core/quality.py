"""Data-quality checks over a finished ExtractionResult.

Nothing here changes the result. Model output is trusted for station codes
and parish IDs, so inconsistencies are reported for a human to look at:
- parish not in the canonical table
- parishId that disagrees with the parish name
- station code whose prefix belongs to another parish
- missing station code
- the same station code used twice (within a parish or across parishes)
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from station_extractor.core.parishes import PARISHES, Parish, parish_by_name, parish_prefixes
from station_extractor.pydantic_models.stations import ExtractionResult, PollingStationRecord


class QualityIssueType(str, Enum):
    UNKNOWN_PARISH = "unknown_parish"
    PARISH_ID_MISMATCH = "parish_id_mismatch"
    PREFIX_MISMATCH = "prefix_mismatch"
    MISSING_CODE = "missing_code"
    DUPLICATE_CODE = "duplicate_code"
    CROSS_PARISH_CODE = "cross_parish_code"


@dataclass
class QualityIssue:
    """One inconsistency found in the result."""

    issue_type: QualityIssueType
    parish: str
    station_code: str
    name: str
    detail: str = ""

    def __str__(self) -> str:
        code = self.station_code or "<no code>"
        return f"[{self.issue_type.value}] {self.parish} {code} '{self.name}': {self.detail}"


@dataclass
class QualityReport:
    """All issues found in one result."""

    issues: list[QualityIssue] = field(default_factory=list)

    @property
    def issue_count(self) -> int:
        return len(self.issues)

    @property
    def is_clean(self) -> bool:
        return not self.issues

    def by_type(self) -> dict[str, int]:
        """Issue count per issue type."""
        return dict(Counter(issue.issue_type.value for issue in self.issues))

    def to_dict(self) -> dict:
        return {
            "issue_count": self.issue_count,
            "by_type": self.by_type(),
            "issues": [
                {
                    "type": issue.issue_type.value,
                    "parish": issue.parish,
                    "station_code": issue.station_code,
                    "name": issue.name,
                    "detail": issue.detail,
                }
                for issue in self.issues
            ],
        }


def _record_issues(
    station: PollingStationRecord,
    parishes: tuple[Parish, ...],
    prefixes: dict[str, str],
) -> list[QualityIssue]:
    def issue(issue_type: QualityIssueType, detail: str) -> QualityIssue:
        return QualityIssue(issue_type, station.parish, station.station_code, station.name, detail)

    issues = []
    parish = parish_by_name(station.parish, parishes)
    if parish is None:
        issues.append(issue(QualityIssueType.UNKNOWN_PARISH, "parish not in canonical table"))
    elif station.parish_id != parish.parish_id:
        issues.append(issue(
            QualityIssueType.PARISH_ID_MISMATCH,
            f"parishId {station.parish_id}, expected {parish.parish_id}",
        ))

    if not station.station_code:
        issues.append(issue(QualityIssueType.MISSING_CODE, "no station code"))
    elif parish is not None and not station.station_code.startswith(parish.prefix):
        owner = prefixes.get(station.station_code[:len(parish.prefix)], "unknown parish")
        issues.append(issue(
            QualityIssueType.PREFIX_MISMATCH,
            f"expected prefix {parish.prefix}, code belongs to {owner}",
        ))
    return issues


def check_result_quality(
    result: ExtractionResult,
    parishes: tuple[Parish, ...] = PARISHES,
) -> QualityReport:
    """Inspect a result for parish and station-code inconsistencies.

    Args:
        result: Merged pipeline output.
        parishes: Canonical parish table to check against.

    Returns:
        QualityReport listing every issue found.
    """
    report = QualityReport()
    prefixes = parish_prefixes(parishes)
    code_parishes: dict[str, set[str]] = {}

    for group in result.parishes:
        codes_in_group = Counter(s.station_code for s in group.stations if s.station_code)
        reported: set[str] = set()

        for station in group.stations:
            report.issues.extend(_record_issues(station, parishes, prefixes))

            code = station.station_code
            if not code:
                continue
            code_parishes.setdefault(code, set()).add(group.name)
            if codes_in_group[code] > 1 and code not in reported:
                reported.add(code)
                report.issues.append(QualityIssue(
                    QualityIssueType.DUPLICATE_CODE, group.name, code, station.name,
                    f"code used by {codes_in_group[code]} stations in this parish",
                ))

    for code, names in sorted(code_parishes.items()):
        if len(names) > 1:
            report.issues.append(QualityIssue(
                QualityIssueType.CROSS_PARISH_CODE, ", ".join(sorted(names)), code, "",
                f"code used in {len(names)} parishes",
            ))

    return report
