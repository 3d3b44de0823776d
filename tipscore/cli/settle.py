from __future__ import annotations

import argparse
import json
import sqlite3
import sys
from typing import Sequence

from tipscore.application.services.settlement_service import SettlementResult, SettlementService
from tipscore.config.settings import Settings, load_settings
from tipscore.domain.value_objects.enums import Tendency
from tipscore.domain.value_objects.quotas import Quotas
from tipscore.domain.value_objects.score_pick import ScorePick
from tipscore.logging_config import get_logger
from tipscore.repositories.sqlite import connect, ensure_schema
from tipscore.scoring.quotas import calculate_quotas, tendency_counts
from tipscore.scoring.scorer import score_with_quotas


def _open_db(settings: Settings) -> sqlite3.Connection:
    conn = connect(settings.database_path)
    ensure_schema(conn)
    return conn


def _parse_quotas(text: str) -> Quotas:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 3:
        raise ValueError(f"Invalid quotas {text!r}, expected HOME,DRAW,AWAY")
    home, draw, away = (int(p) for p in parts)
    return Quotas(home=home, draw=draw, away=away)


def _print_result(result: SettlementResult) -> None:
    if result.skipped:
        reason = result.reason.value if result.reason else "UNKNOWN"
        print(f"Match {result.match_id}: skipped ({reason})")
        return
    upset = " UPSET" if result.is_upset else ""
    print(
        f"Match {result.match_id}: quotas {result.quotas} | scored={result.scored} "
        f"points={result.total_points} avg={result.avg_points:.2f} "
        f"exact={result.exact_hits}{upset}"
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Settle finished matches with quota scoring")
    p.add_argument("--db", help="Path to the SQLite database (default: TIPSCORE_DB_PATH)")
    sub = p.add_subparsers(dest="cmd", required=True)

    ps = sub.add_parser("settle", help="Score all predictions of a finished match")
    ps.add_argument("match_id", type=int, help="Match ID")
    ps.add_argument(
        "--rescore",
        action="store_true",
        help="Recompute quotas and overwrite existing scores",
    )

    sub.add_parser("rescore-all", help="Rescore every finished match")

    pq = sub.add_parser("quotas", help="Compute quotas for a list of predictions, e.g. 2-1 1-1")
    pq.add_argument("picks", nargs="*", help="Predicted scores as H-A")
    pq.add_argument("--json", action="store_true", help="Output as JSON")

    pp = sub.add_parser("score", help="Score a single prediction")
    pp.add_argument("pick", help="Predicted score as H-A")
    pp.add_argument("--actual", required=True, help="Final score as H-A")
    pp.add_argument("--quotas", required=True, help="Quotas as HOME,DRAW,AWAY (e.g. 2,4,6)")
    pp.add_argument("--json", action="store_true", help="Output as JSON")

    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.cmd == "quotas":
        try:
            picks = [ScorePick.parse(s) for s in args.picks]
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        quotas = calculate_quotas(picks)
        if args.json:
            print(json.dumps(quotas.as_dict()))
            return 0
        counts = tendency_counts(picks)
        print(f"Predictions: {len(picks)}")
        for tendency in Tendency:
            print(f"  {tendency.value}: {counts[tendency]}")
        print(f"Quotas: {quotas}")
        return 0

    if args.cmd == "score":
        try:
            pick = ScorePick.parse(args.pick)
            actual = ScorePick.parse(args.actual)
            quotas = _parse_quotas(args.quotas)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        breakdown = score_with_quotas(
            pick.predicted_home,
            pick.predicted_away,
            actual.predicted_home,
            actual.predicted_away,
            quotas,
        )
        if args.json:
            print(json.dumps(breakdown.model_dump()))
            return 0
        print(
            f"{pick} vs {actual}: tendency={breakdown.tendency_points} "
            f"goal_diff={breakdown.goal_diff_bonus} exact={breakdown.exact_score_bonus} "
            f"total={breakdown.total}"
        )
        return 0

    get_logger()
    settings = load_settings(db_path=args.db)
    conn = _open_db(settings)
    try:
        svc = SettlementService(conn, settings)

        if args.cmd == "settle":
            _print_result(svc.settle_match(args.match_id, rescore=bool(args.rescore)))
            return 0

        if args.cmd == "rescore-all":
            summary = svc.rescore_all()
            for result in summary.results:
                _print_result(result)
            print(
                f"Rescored {summary.rescored} matches, quota changes: {summary.quota_changes}, "
                f"failed: {len(summary.failed)}"
            )
            return 1 if summary.failed else 0

        return 2
    finally:
        conn.close()


if __name__ == "__main__":
    raise SystemExit(main())
