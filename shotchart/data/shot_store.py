"""
Shot data source.

Reads shot attempts from the Supabase `shots` table, or from a local JSON
export of the same rows, and turns them into ShotRecord objects.

Row shape (one per attempt):
    {
        "id": "...",
        "court_x_position": 95.0,
        "court_y_position": 490.0,
        "made": true,
        "shot_type": "3PT",
        "player_id": "...",
        "session_id": "...",
        "created_at": "2026-10-01T18:22:05Z",
        "arc_degrees": 47.0,        # optional
        "depth_inches": 11.0        # optional
    }

Environment variables required for Supabase access:
    SUPABASE_URL
    SUPABASE_SERVICE_ROLE_KEY
"""

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import List, Optional

from supabase import create_client, Client

from shotchart.analysis.shot_stats import ShotRecord

logger = logging.getLogger(__name__)

SHOTS_TABLE = "shots"


class ShotDataError(RuntimeError):
    """Shot rows could not be loaded."""


# Created on first use; importing this module needs no credentials
_supabase: Client | None = None


def _get_client() -> Client:
    global _supabase
    if _supabase is None:
        url = os.environ["SUPABASE_URL"]
        key = os.environ["SUPABASE_SERVICE_ROLE_KEY"]
        _supabase = create_client(url, key)
    return _supabase


# ----- Public API ------------------------------------------------------------

def fetch_shots(
    player_id: Optional[str] = None,
    session_id: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[ShotRecord]:
    """
    Query the shots table.

    Args:
        player_id:  Only this player's shots
        session_id: Only shots from this session
        start:      First day included (from 00:00:00 UTC)
        end:        Last day included (until 23:59:59 UTC)

    Returns:
        ShotRecord list, in the order Supabase returns the rows

    Raises:
        ShotDataError: on missing credentials or a failed query
    """
    try:
        query = _get_client().table(SHOTS_TABLE).select("*")
        if start is not None:
            query = query.gte("created_at", f"{start.isoformat()}T00:00:00Z")
        if end is not None:
            query = query.lte("created_at", f"{end.isoformat()}T23:59:59Z")
        if player_id:
            query = query.eq("player_id", player_id)
        if session_id:
            query = query.eq("session_id", session_id)
        resp = query.execute()
    except Exception as e:
        logger.error(f"Error loading shot data: {e}")
        raise ShotDataError(f"Failed to load shot data: {e}") from e

    rows = resp.data or []
    logger.info(f"Loaded {len(rows)} shots (player={player_id}, session={session_id}, {start} → {end})")
    return records_from_rows(rows)


def load_shots_json(path: str | Path) -> List[ShotRecord]:
    """
    Load shot rows from a JSON file: either a list of rows or {"shots": [...]}.

    Raises:
        ShotDataError: if the file is missing, unreadable or not in either shape
    """
    path = Path(path)
    try:
        with path.open() as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ShotDataError(f"Cannot read shots from {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("shots")
    if not isinstance(data, list):
        raise ShotDataError(f"{path} must hold a list of shot rows or {{'shots': [...]}}")

    logger.info(f"Loaded {len(data)} shots from {path}")
    return records_from_rows(data)


def records_from_rows(rows: list) -> List[ShotRecord]:
    """Convert raw rows, skipping (and logging) any that can't be parsed."""
    records = []
    for i, row in enumerate(rows):
        try:
            records.append(ShotRecord.from_row(row))
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping malformed shot row {i}: {e}")
    return records
