"""
Catalog input for the orrery.

Bodies arrive as OrbitalElementSet records, either from the static
solar-system table or from a near-Earth-object (NEO) CSV export.

NEO CSV columns (JPL small-body database style):
    full_name/name, neo, pha, diameter, GM/gm, e, a, q, i, om, w, ma, ad, tp, epoch
Angles are degrees, distances AU, tp and epoch are Julian dates.
Empty cells are treated as missing.
"""

from __future__ import annotations

import csv
import enum
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from orrery.core.constants import J2000_JD
from orrery.physics.orbit import OrbitalElements, SecularRates

logger = logging.getLogger(__name__)


class BodyKind(str, enum.Enum):
    STAR = "star"
    PLANET = "planet"
    SATELLITE = "satellite"
    NEO = "neo"


@dataclass
class OrbitalElementSet:
    """
    One catalog entry. Values are raw (degrees, AU, JD) and unvalidated;
    to_elements() performs validation.
    """
    name: str
    semi_major_axis: float
    eccentricity: float
    inclination: float
    longitude_of_ascending_node: float
    longitude_of_perihelion: float
    mean_longitude: float
    epoch_jd: float = J2000_JD
    mass_kg: Optional[float] = None
    rates: Optional[SecularRates] = None
    kind: BodyKind = BodyKind.PLANET
    parent: Optional[str] = None
    radius_km: Optional[float] = None
    color: Optional[str] = None

    def to_elements(self) -> OrbitalElements:
        return OrbitalElements(
            semi_major_axis_au=self.semi_major_axis,
            eccentricity=self.eccentricity,
            inclination_deg=self.inclination,
            longitude_of_ascending_node_deg=self.longitude_of_ascending_node,
            longitude_of_perihelion_deg=self.longitude_of_perihelion,
            mean_longitude_deg=self.mean_longitude,
            epoch_jd=self.epoch_jd,
            rates=self.rates if self.rates is not None else SecularRates(),
        )


@dataclass
class NeoRecord:
    """One parsed row of a NEO catalog."""
    name: str
    e: float
    a: float
    i: float
    om: float
    w: float
    ma: Optional[float] = None
    q: Optional[float] = None
    ad: Optional[float] = None
    tp: Optional[float] = None
    epoch: Optional[float] = None
    neo: bool = True
    pha: bool = False
    diameter: Optional[float] = None
    gm: Optional[float] = None


def _optional_float(row: Mapping[str, str], *keys: str) -> Optional[float]:
    for key in keys:
        raw = row.get(key)
        if raw is None:
            continue
        raw = raw.strip()
        if raw:
            return float(raw)
    return None


def _required_float(row: Mapping[str, str], key: str) -> float:
    value = _optional_float(row, key)
    if value is None:
        raise ValueError(f"Missing required column '{key}'")
    return value


def _flag(row: Mapping[str, str], key: str, default: bool) -> bool:
    raw = (row.get(key) or "").strip().upper()
    if not raw:
        return default
    if raw in ("Y", "YES", "TRUE", "1"):
        return True
    if raw in ("N", "NO", "FALSE", "0"):
        return False
    raise ValueError(f"Column '{key}' must be Y or N. Got: {raw!r}")


def parse_neo_row(row: Mapping[str, str]) -> NeoRecord:
    """
    Parse one CSV row (as produced by csv.DictReader).

    Raises:
        ValueError: on a missing name, a missing orbital column or a
            non-numeric value.
    """
    name = (row.get("full_name") or row.get("name") or "").strip()
    if not name:
        raise ValueError("NEO row has no name.")

    try:
        return NeoRecord(
            name=name,
            e=_required_float(row, "e"),
            a=_required_float(row, "a"),
            i=_required_float(row, "i"),
            om=_required_float(row, "om"),
            w=_required_float(row, "w"),
            ma=_optional_float(row, "ma"),
            q=_optional_float(row, "q"),
            ad=_optional_float(row, "ad"),
            tp=_optional_float(row, "tp"),
            epoch=_optional_float(row, "epoch"),
            neo=_flag(row, "neo", True),
            pha=_flag(row, "pha", False),
            diameter=_optional_float(row, "diameter"),
            gm=_optional_float(row, "GM", "gm"),
        )
    except ValueError as e:
        raise ValueError(f"Error parsing NEO '{name}': {e}") from e


def neo_to_element_set(record: NeoRecord) -> OrbitalElementSet:
    """
    Map NEO columns onto orbital elements.

    Ω = om, ϖ = om + w. The mean longitude is placed with ma at epoch when
    both are present; otherwise at the time of perihelion tp, where M = 0.
    """
    varpi = record.om + record.w

    if record.ma is not None and record.epoch is not None:
        epoch_jd = record.epoch
        mean_longitude = varpi + record.ma
    elif record.tp is not None:
        epoch_jd = record.tp
        mean_longitude = varpi
    elif record.ma is not None:
        epoch_jd = J2000_JD
        mean_longitude = varpi + record.ma
    else:
        raise ValueError(f"NEO '{record.name}' needs either ma with epoch, or tp.")

    return OrbitalElementSet(
        name=record.name,
        semi_major_axis=record.a,
        eccentricity=record.e,
        inclination=record.i,
        longitude_of_ascending_node=record.om,
        longitude_of_perihelion=varpi,
        mean_longitude=mean_longitude,
        epoch_jd=epoch_jd,
        kind=BodyKind.NEO,
        radius_km=record.diameter / 2.0 if record.diameter is not None else None,
    )


def load_neo_csv(
    filepath: Union[str, Path],
    limit: Optional[int] = None,
    strict: bool = False,
) -> List[OrbitalElementSet]:
    """
    Load NEO element sets from a CSV file.

    Malformed rows are logged and skipped unless strict is set.

    Args:
        filepath: CSV with a header row
        limit: stop after this many rows (None reads all)
        strict: raise ValueError on the first malformed row

    Returns:
        Element sets in file order
    """
    sets: List[OrbitalElementSet] = []
    skipped = 0
    with open(filepath, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            if limit is not None and len(sets) >= limit:
                break
            try:
                sets.append(neo_to_element_set(parse_neo_row(row)))
            except ValueError as e:
                if strict:
                    raise ValueError(f"{filepath}:{line_no}: {e}") from e
                logger.warning("Skipping %s:%d: %s", filepath, line_no, e)
                skipped += 1

    logger.info("Loaded %d NEO element sets from %s (%d rows skipped)", len(sets), filepath, skipped)
    return sets


def element_set_from_dict(entry: Dict) -> OrbitalElementSet:
    """Build an element set from a table entry such as those in objects/solar_system.py."""
    orbit = entry.get("orbit") or {}
    rates = entry.get("rates")
    kind = BodyKind(entry.get("kind", BodyKind.PLANET.value))
    return OrbitalElementSet(
        name=entry["name"],
        semi_major_axis=orbit.get("a", math.nan),
        eccentricity=orbit.get("e", math.nan),
        inclination=orbit.get("i", math.nan),
        longitude_of_ascending_node=orbit.get("Omega", math.nan),
        longitude_of_perihelion=orbit.get("varpi", math.nan),
        mean_longitude=orbit.get("L", math.nan),
        epoch_jd=orbit.get("epoch_jd", J2000_JD),
        mass_kg=entry.get("mass_kg"),
        rates=SecularRates(**rates) if rates else None,
        kind=kind,
        parent=entry.get("parent"),
        radius_km=entry.get("radius_km"),
        color=entry.get("color"),
    )
