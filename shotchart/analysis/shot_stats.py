"""
Region statistics aggregator for the basketball shot chart.

Takes the shot records for one view (already narrowed to a player, session
or date range) and the court region table, and computes the per-region
numbers the heatmap draws plus the overall summary panel.

Per-region output (`RegionStats.to_dict()`):
    {
        "region":      str,    # region code, e.g. "C3L"
        "region_name": str,
        "shot_type":   str,    # "2PT" | "3PT", from the region table
        "attempts":    int,
        "makes":       int,
        "percentage":  float,  # makes / attempts * 100, 0.0 with no attempts
    }

Every call recomputes from scratch; nothing here keeps state between runs.
"""

from __future__ import annotations

import dataclasses
import logging
from collections import Counter
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Sequence

from shotchart.analysis.court_regions import (
    CourtRegion,
    ShotValue,
    classify_shot,
    region_by_code,
)

logger = logging.getLogger(__name__)

# Substituted for a missing coordinate (centre of the 800 × 600 canvas)
MISSING_X = 400.0
MISSING_Y = 300.0


def _pct(makes: int, attempts: int) -> float:
    return makes / attempts * 100 if attempts > 0 else 0.0


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


# -------------------------------------------------------------------------
# Records
# -------------------------------------------------------------------------

@dataclasses.dataclass(frozen=True)
class ShotRecord:
    """One recorded shot attempt in canvas pixel coordinates."""

    id: str
    court_x: float
    court_y: float
    made: bool
    shot_type: str = ""          # label from the capture flow, not used for scoring
    player_id: Optional[str] = None
    session_id: Optional[str] = None
    created_at: Optional[datetime] = None
    arc_degrees: Optional[float] = None
    depth_inches: Optional[float] = None

    @classmethod
    def from_row(cls, row: dict) -> "ShotRecord":
        """Build a record from a `shots` table row."""
        x = row.get("court_x_position")
        y = row.get("court_y_position")
        return cls(
            id=str(row.get("id", "")),
            court_x=float(x) if x is not None else MISSING_X,
            court_y=float(y) if y is not None else MISSING_Y,
            made=bool(row.get("made")),
            shot_type=row.get("shot_type") or "",
            player_id=row.get("player_id"),
            session_id=row.get("session_id"),
            created_at=_parse_timestamp(row.get("created_at")),
            arc_degrees=row.get("arc_degrees"),
            depth_inches=row.get("depth_inches"),
        )


@dataclasses.dataclass(frozen=True)
class RegionStats:
    """Attempts / makes for one court region."""

    region_code: str
    region_name: str
    shot_value: ShotValue
    attempts: int = 0
    makes: int = 0

    @property
    def percentage(self) -> float:
        return _pct(self.makes, self.attempts)

    def to_dict(self) -> dict:
        return {
            "region":      self.region_code,
            "region_name": self.region_name,
            "shot_type":   self.shot_value.value,
            "attempts":    self.attempts,
            "makes":       self.makes,
            "percentage":  self.percentage,
        }


@dataclasses.dataclass(frozen=True)
class ShotSummary:
    """Overall makes/attempts with the 2PT / 3PT split."""

    attempts: int = 0
    makes: int = 0
    two_point_attempts: int = 0
    two_point_makes: int = 0
    three_point_attempts: int = 0
    three_point_makes: int = 0

    @property
    def percentage(self) -> float:
        return _pct(self.makes, self.attempts)

    @property
    def two_point_percentage(self) -> float:
        return _pct(self.two_point_makes, self.two_point_attempts)

    @property
    def three_point_percentage(self) -> float:
        return _pct(self.three_point_makes, self.three_point_attempts)

    def to_dict(self) -> dict:
        return {
            "attempts":               self.attempts,
            "makes":                  self.makes,
            "percentage":             round(self.percentage, 1),
            "two_point_attempts":     self.two_point_attempts,
            "two_point_makes":        self.two_point_makes,
            "two_point_percentage":   round(self.two_point_percentage, 1),
            "three_point_attempts":   self.three_point_attempts,
            "three_point_makes":      self.three_point_makes,
            "three_point_percentage": round(self.three_point_percentage, 1),
        }


# -------------------------------------------------------------------------
# Aggregation
# -------------------------------------------------------------------------

def aggregate(shots: Iterable[ShotRecord], regions: Sequence[CourtRegion]) -> List[RegionStats]:
    """
    Classify every shot and total attempts / makes per region.

    Only regions that received at least one shot appear in the output.
    Entries follow region-table order; a fallback code that is not in the
    table (custom tables without MRT) comes last, labelled with its code
    and counted as a 2PT region.
    """
    lookup = region_by_code(regions)
    attempts: Counter[str] = Counter()
    makes: Counter[str] = Counter()

    for shot in shots:
        code = classify_shot(shot.court_x, shot.court_y, regions)
        attempts[code] += 1
        if shot.made:
            makes[code] += 1

    if not attempts:
        return []

    table_order = {code: i for i, code in enumerate(lookup)}
    ordered = sorted(attempts, key=lambda c: table_order.get(c, len(table_order)))

    stats = []
    for code in ordered:
        region = lookup.get(code)
        stats.append(RegionStats(
            region_code=code,
            region_name=region.name if region else code,
            shot_value=region.shot_value if region else ShotValue.TWO_POINT,
            attempts=attempts[code],
            makes=makes[code],
        ))
    logger.debug(f"Aggregated {sum(attempts.values())} shots into {len(stats)} regions")
    return stats


def fill_missing_regions(stats: Iterable[RegionStats], regions: Sequence[CourtRegion]) -> List[RegionStats]:
    """Return one entry per table region, zero-filled where `stats` has none."""
    by_code = {s.region_code: s for s in stats}
    return [
        by_code.get(r.code) or RegionStats(r.code, r.name, r.shot_value)
        for r in regions
    ]


def summarize(shots: Iterable[ShotRecord], regions: Sequence[CourtRegion]) -> ShotSummary:
    """
    Overall totals plus the 2PT / 3PT split.

    The split uses the value of the region each shot lands in, not the
    record's own `shot_type` label.
    """
    totals = {"attempts": 0, "makes": 0,
              "two_point_attempts": 0, "two_point_makes": 0,
              "three_point_attempts": 0, "three_point_makes": 0}

    for region_stats in aggregate(shots, regions):
        prefix = "three_point" if region_stats.shot_value is ShotValue.THREE_POINT else "two_point"
        totals["attempts"] += region_stats.attempts
        totals["makes"] += region_stats.makes
        totals[f"{prefix}_attempts"] += region_stats.attempts
        totals[f"{prefix}_makes"] += region_stats.makes

    return ShotSummary(**totals)


def filter_shots(
    shots: Iterable[ShotRecord],
    player_id: Optional[str] = None,
    session_id: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[ShotRecord]:
    """
    Narrow a shot list by player, session and an inclusive date range.

    Dates compare against the calendar day of `created_at`; records with no
    timestamp are dropped only when a date bound is given.
    """
    out = []
    for shot in shots:
        if player_id is not None and shot.player_id != player_id:
            continue
        if session_id is not None and shot.session_id != session_id:
            continue
        if start is not None or end is not None:
            if shot.created_at is None:
                continue
            day = shot.created_at.date()
            if start is not None and day < start:
                continue
            if end is not None and day > end:
                continue
        out.append(shot)
    return out
