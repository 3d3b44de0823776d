from __future__ import annotations

import argparse
import json
import sqlite3
import sys
from datetime import datetime, timezone
from typing import Sequence

from tipscore.application.services.leaderboard_service import LeaderboardService
from tipscore.config.settings import Settings, load_settings
from tipscore.repositories.sqlite import connect, ensure_schema


def _open_db(settings: Settings) -> sqlite3.Connection:
    conn = connect(settings.database_path)
    ensure_schema(conn)
    return conn


def _parse_since(text: str) -> datetime:
    try:
        dt = datetime.fromisoformat(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date: {text!r}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Model leaderboard by quota points")
    p.add_argument("--db", help="Path to the SQLite database (default: TIPSCORE_DB_PATH)")
    sub = p.add_subparsers(dest="cmd", required=True)

    pt = sub.add_parser("top", help="Ranking of the models")
    pt.add_argument("--limit", type=int, default=30, help="How many models to show")
    pt.add_argument(
        "--since",
        type=_parse_since,
        help="Only matches kicked off on/after this ISO date (UTC if no offset)",
    )
    pt.add_argument("--all", action="store_true", help="Include inactive models")
    pt.add_argument("--json", action="store_true", help="Output as JSON")

    pm = sub.add_parser("model", help="Detailed statistics of one model")
    pm.add_argument("model_id", help="Model slug")
    pm.add_argument("--json", action="store_true", help="Output as JSON")
    return p


def _run(svc: LeaderboardService, args: argparse.Namespace) -> int:
    if args.cmd == "model":
        stats = svc.model_stats(args.model_id)
        if stats is None:
            print(f"Unknown model: {args.model_id}", file=sys.stderr)
            return 1
        if args.json:
            print(json.dumps(stats.as_dict(), ensure_ascii=False, indent=2))
            return 0
        print(f"{stats.display_name} ({stats.model_id})")
        print(
            f"predictions={stats.total_predictions} scored={stats.scored_predictions} "
            f"points={stats.total_points} avg={stats.avg_points:.2f}"
        )
        print(
            f"exact={stats.exact_scores} tendency_hits={stats.correct_tendencies} "
            f"misses={stats.wrong_tendencies} max={stats.max_points} min={stats.min_points}"
        )
        s = stats.streak
        print(
            f"streak={s.current} ({s.current_type.value}) best={s.best} worst={s.worst} "
            f"best_exact={s.best_exact}"
        )
        return 0

    entries = svc.leaderboard(args.limit, since=args.since, active_only=not args.all)
    if args.json:
        print(json.dumps([e.as_dict() for e in entries], ensure_ascii=False, indent=2))
        return 0
    if not entries:
        print("No models found.")
        return 0
    for e in entries:
        print(
            f"{e.rank:>3}. {e.display_name:<28} {e.total_points:>5} pts "
            f"avg={e.avg_points:.2f} exact={e.exact_scores} "
            f"acc={e.tendency_accuracy:.1f}% n={e.scored_predictions}"
        )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    conn = _open_db(load_settings(db_path=args.db))
    try:
        return _run(LeaderboardService(conn), args)
    finally:
        conn.close()


if __name__ == "__main__":
    raise SystemExit(main())
