"""
scripts/run_scoring.py — CLI to score an uploaded batch of leads.

Usage:
    python scripts/run_scoring.py --batch-id 3 --offer-id 1
    python scripts/run_scoring.py --batch-id 3 --offer-id 1 --workers 4
"""

import sys
import os
import argparse
import logging
from collections import Counter

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("run_scoring")

from app.config import settings
from app.db.session import get_session
from app.services.lead_service import ScoringRequestError, score_batch


def run(batch_id: int, offer_id: int, workers: int) -> int:
    print("\n" + "=" * 72)
    print(f"  Lead Qualifier — scoring batch {batch_id} against offer {offer_id}")
    print("=" * 72)

    try:
        with get_session() as db:
            scored = score_batch(db, batch_id=batch_id, offer_id=offer_id, max_workers=workers)
    except ScoringRequestError as exc:
        logger.error("Scoring request rejected: %s", exc)
        return 2

    if not scored:
        print("\n  No leads found for this batch.")
        return 0

    print(f"\n  {'ID':>5}  {'Name':<24} {'Role':<22} {'Intent':<7} {'Score':>5}")
    print("  " + "-" * 68)
    for s in scored:
        print(f"  {s.lead_id:>5}  {s.name[:24]:<24} {s.role[:22]:<22} {s.intent.value:<7} {s.score:>5}")

    counts = Counter(s.intent.value for s in scored)
    print("\n" + "=" * 72)
    print(
        f"  Scored {len(scored)} leads — "
        f"High: {counts.get('High', 0)}, Medium: {counts.get('Medium', 0)}, Low: {counts.get('Low', 0)}"
    )
    print("=" * 72 + "\n")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Score a batch of leads against an offer.")
    parser.add_argument("--batch-id", type=int, required=True, help="Batch to score")
    parser.add_argument("--offer-id", type=int, required=True, help="Offer to score against")
    parser.add_argument(
        "--workers", type=int, default=settings.scoring_max_workers,
        help="Concurrent LLM calls (default from .env)",
    )
    args = parser.parse_args()
    sys.exit(run(batch_id=args.batch_id, offer_id=args.offer_id, workers=args.workers))


if __name__ == "__main__":
    main()
