"""Canonical parish table.

Jamaica's 14 parishes with the stable ID and the 3-letter station-code
prefix used across the pipeline. The table order is the parish ID order.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Parish:
    """One top-level administrative region."""

    name: str
    parish_id: int
    prefix: str
    constituencies: tuple[str, ...] = field(default_factory=tuple)

    def station_code(self, sequence: int, width: int = 3) -> str:
        """Build a station code like ``KIN007`` for a 1-based sequence."""
        return f"{self.prefix}{sequence:0{width}d}"


PARISHES: tuple[Parish, ...] = (
    Parish("Kingston", 1, "KIN", (
        "Kingston Central",
        "Kingston East",
        "Kingston West",
        "Kingston Eastern and Port Royal",
        "Kingston Western",
    )),
    Parish("St. Andrew", 2, "STA", (
        "St. Andrew Eastern",
        "St. Andrew North Central",
        "St. Andrew North Eastern",
        "St. Andrew North Western",
        "St. Andrew South",
        "St. Andrew South Central",
        "St. Andrew South Eastern",
        "St. Andrew South Western",
        "St. Andrew West Central",
        "St. Andrew Western",
    )),
    Parish("St. Catherine", 3, "STC", (
        "St. Catherine Central",
        "St. Catherine East Central",
        "St. Catherine Eastern",
        "St. Catherine North Central",
        "St. Catherine North Eastern",
        "St. Catherine North Western",
        "St. Catherine South Central",
        "St. Catherine South Eastern",
        "St. Catherine South Western",
    )),
    Parish("Clarendon", 4, "CLA", (
        "Clarendon Central",
        "Clarendon North Central",
        "Clarendon North Eastern",
        "Clarendon North Western",
        "Clarendon South Eastern",
        "Clarendon South Western",
    )),
    Parish("St. James", 5, "STJ", (
        "St. James Central",
        "St. James East Central",
        "St. James North Western",
        "St. James Southern",
        "St. James West Central",
    )),
    Parish("Manchester", 6, "MAN", (
        "Manchester Central",
        "Manchester North Eastern",
        "Manchester North Western",
        "Manchester Southern",
    )),
    Parish("St. Ann", 7, "SAN", (
        "St. Ann North Eastern",
        "St. Ann North Western",
        "St. Ann South Eastern",
        "St. Ann South Western",
    )),
    Parish("Portland", 8, "POR", (
        "Portland Eastern",
        "Portland Western",
    )),
    Parish("St. Mary", 9, "STM", (
        "St. Mary Central",
        "St. Mary South Eastern",
        "St. Mary Western",
    )),
    Parish("St. Thomas", 10, "STT", (
        "St. Thomas Eastern",
        "St. Thomas Western",
    )),
    Parish("Westmoreland", 11, "WES", (
        "Westmoreland Central",
        "Westmoreland Eastern",
        "Westmoreland Western",
    )),
    Parish("Hanover", 12, "HAN", (
        "Hanover Eastern",
        "Hanover Western",
    )),
    Parish("Trelawny", 13, "TRE", (
        "Trelawny Northern",
        "Trelawny Southern",
    )),
    Parish("St. Elizabeth", 14, "STE", (
        "St. Elizabeth North Eastern",
        "St. Elizabeth North Western",
        "St. Elizabeth South Eastern",
        "St. Elizabeth South Western",
    )),
)


def parish_by_name(name: str, parishes: tuple[Parish, ...] = PARISHES) -> Parish | None:
    """Look up a parish by its exact canonical name."""
    for parish in parishes:
        if parish.name == name:
            return parish
    return None


def parish_ids(parishes: tuple[Parish, ...] = PARISHES) -> dict[str, int]:
    """Map parish name to parish ID."""
    return {p.name: p.parish_id for p in parishes}


def parish_prefixes(parishes: tuple[Parish, ...] = PARISHES) -> dict[str, str]:
    """Map station-code prefix to parish name."""
    return {p.prefix: p.name for p in parishes}
