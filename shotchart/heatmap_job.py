"""
shotchart/heatmap_job.py — Build a shot-chart heatmap image and region stats.

Flow:
    1. Load shots, either from a local JSON export (--shots-json) or from the
       Supabase `shots` table filtered by player / session / date range
    2. Classify every shot into a court region and total attempts / makes
    3. Log the region breakdown and overall 2PT / 3PT summary
    4. Render the heatmap (or per-shot chart) and save it as an image
    5. Optionally write the region stats + summary as JSON

Usage:
    python -m shotchart.heatmap_job --shots-json shots.json --output heatmap.png
    python -m shotchart.heatmap_job --player-id <uuid> --start 2026-09-01 --view shots

Environment variables required for Supabase access (not needed with --shots-json):
    SUPABASE_URL
    SUPABASE_SERVICE_ROLE_KEY
"""

import argparse
import json
import logging
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional, Sequence

from shotchart.analysis.color_bands import color_for_percentage
from shotchart.analysis.court_regions import CourtRegion, build_court_regions
from shotchart.analysis.shot_stats import (
    RegionStats,
    ShotRecord,
    ShotSummary,
    aggregate,
    filter_shots,
    summarize,
)
from shotchart.visualization.heatmap_renderer import VIEW_MODES, render_heatmap, save_heatmap

logger = logging.getLogger("heatmap_job")

# Default lookback when no --start is given
DEFAULT_RANGE_DAYS = 30


def load_shots(args: argparse.Namespace) -> List[ShotRecord]:
    from shotchart.data.shot_store import fetch_shots, load_shots_json

    if args.shots_json:
        return filter_shots(
            load_shots_json(args.shots_json),
            player_id=args.player_id,
            session_id=args.session_id,
            start=args.start,
            end=args.end,
        )

    end = args.end or date.today()
    start = args.start or (end - timedelta(days=DEFAULT_RANGE_DAYS))
    return fetch_shots(
        player_id=args.player_id,
        session_id=args.session_id,
        start=start,
        end=end,
    )


def log_region_table(stats: Sequence[RegionStats], summary: ShotSummary) -> None:
    if not stats:
        logger.info("No shots in range — nothing to aggregate")
        return
    logger.info(f"{'Region':<18} {'Type':<4} {'FG':>7} {'Pct':>7}  Tier")
    for s in stats:
        tier = color_for_percentage(s.percentage).value
        logger.info(f"{s.region_name:<18} {s.shot_value.value:<4} "
                    f"{s.makes:>3}/{s.attempts:<3} {s.percentage:>6.1f}%  {tier}")
    logger.info(
        f"Overall {summary.makes}/{summary.attempts} ({summary.percentage:.1f}%) — "
        f"2PT {summary.two_point_makes}/{summary.two_point_attempts} "
        f"({summary.two_point_percentage:.1f}%), "
        f"3PT {summary.three_point_makes}/{summary.three_point_attempts} "
        f"({summary.three_point_percentage:.1f}%)"
    )


def write_stats_json(path: Path, regions: Sequence[CourtRegion], stats: Sequence[RegionStats],
                     summary: ShotSummary) -> None:
    payload = {
        "regions": [
            {**s.to_dict(), "tier": color_for_percentage(s.percentage).value}
            for s in stats
        ],
        "summary": summary.to_dict(),
        "region_count": len(regions),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2))
    logger.info(f"Region stats written to {path}")


def run(args: argparse.Namespace) -> int:
    regions = build_court_regions(args.width, args.height)
    shots = load_shots(args)

    stats = aggregate(shots, regions)
    summary = summarize(shots, regions)
    log_region_table(stats, summary)

    image = render_heatmap(
        shots,
        regions,
        width=args.width,
        height=args.height,
        view_mode=args.view,
        show_stats=not args.no_stats,
    )
    save_heatmap(image, args.output)

    if args.stats_json:
        write_stats_json(Path(args.stats_json), regions, stats, summary)
    return len(shots)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a basketball shot-chart heatmap")
    parser.add_argument("--shots-json", help="JSON file of shot rows (skips Supabase)")
    parser.add_argument("--player-id", help="Only this player's shots")
    parser.add_argument("--session-id", help="Only shots from this session")
    parser.add_argument("--start", type=_parse_date, help="First day (YYYY-MM-DD), default 30 days before --end")
    parser.add_argument("--end", type=_parse_date, help="Last day (YYYY-MM-DD), default today")
    parser.add_argument("--width", type=int, default=800, help="Court canvas width in px")
    parser.add_argument("--height", type=int, default=600, help="Court canvas height in px")
    parser.add_argument("--view", choices=VIEW_MODES, default="heatmap", help="Region heatmap or per-shot chart")
    parser.add_argument("--no-stats", action="store_true", help="Heatmap view without region fills/labels")
    parser.add_argument("--output", default="heatmap.png", help="Output image path")
    parser.add_argument("--stats-json", help="Also write region stats + summary to this JSON file")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        logger.error(f"Court size must be positive, got {args.width}x{args.height}")
        sys.exit(2)

    logger.info(f"╔══ Heatmap job started ({args.view} view, {args.width}x{args.height}) ══╗")
    try:
        n = run(args)
    except Exception as e:
        logger.exception(f"Heatmap job FAILED: {e}")
        sys.exit(1)
    logger.info(f"╚══ Heatmap job complete — {n} shots ══╝")


if __name__ == "__main__":
    main()
