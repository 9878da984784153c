#!/usr/bin/env python3
"""
Batch re-score completed assessments after the survey definition changed
(theme weights, reverse-scored flags, deactivated questions).

Usage:
    # Re-score every completed assessment
    python scripts/recalculate_assessment_scores.py

    # Re-score one assessment
    python scripts/recalculate_assessment_scores.py --assessment-id 42

    # Show what would be re-scored without writing
    python scripts/recalculate_assessment_scores.py --dry-run
"""
import argparse
import logging
import os
import sys
from typing import List, Optional, Tuple

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from sme_assessment.core.exceptions import AssessmentError
from sme_assessment.db.session import SessionLocal
from sme_assessment.models.assessment import Assessment, STATUS_COMPLETED
from sme_assessment.scoring.services import AssessmentScoringService

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("recalculate_assessment_scores")


def completed_assessment_ids(db, assessment_id: Optional[int] = None) -> List[int]:
    query = db.query(Assessment.id).filter(
        Assessment.status == STATUS_COMPLETED, Assessment.deleted_at.is_(None)
    )
    if assessment_id is not None:
        query = query.filter(Assessment.id == assessment_id)
    return [row[0] for row in query.order_by(Assessment.id).all()]


def recalculate(db, assessment_ids: List[int]) -> Tuple[int, int]:
    """Returns (success_count, error_count)."""
    svc = AssessmentScoringService(db)
    success = 0
    errors = 0
    for assessment_id in assessment_ids:
        try:
            _, result = svc.score_assessment(
                assessment_id, require_complete=False, mark_completed=False
            )
            success += 1
            logger.info(
                f"Assessment {assessment_id}: {result.summary.composite_mean} "
                f"({result.summary.performance_band})"
            )
        except AssessmentError as e:
            errors += 1
            logger.error(f"Assessment {assessment_id}: {e.message}")
    return success, errors


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Re-score completed assessments")
    parser.add_argument("--assessment-id", type=int, help="Only re-score this assessment")
    parser.add_argument("--dry-run", action="store_true", help="List assessments without re-scoring")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        ids = completed_assessment_ids(db, args.assessment_id)
        print(f"Found {len(ids)} completed assessment(s)")
        if args.dry_run:
            for assessment_id in ids:
                print(f"  would re-score assessment {assessment_id}")
            return 0
        success, errors = recalculate(db, ids)
    finally:
        db.close()

    print(f"Re-scored {success} assessment(s), {errors} error(s)")
    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
