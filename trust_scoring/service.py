"""Trust score service - loads a restaurant's reviews, scores them, stores the result"""
import logging
import sqlite3
from typing import Dict, List, Optional

from database.models import get_active_reviews, get_reviewer_by_id, upsert_trust_score
from trust_scoring.calculator import TrustScoreCalculator

logger = logging.getLogger(__name__)


def load_reviewers(conn: sqlite3.Connection, reviews: List[Dict]) -> List[Dict]:
    """
    Resolve the distinct reviewers behind a set of reviews

    Reviewer ids that do not resolve are dropped.
    """
    reviewers = []
    for reviewer_id in dict.fromkeys(review['reviewer_id'] for review in reviews):
        reviewer = get_reviewer_by_id(conn, reviewer_id)
        if reviewer is None:
            logger.debug(f"Reviewer {reviewer_id} not found, excluding from scoring")
            continue
        reviewers.append(reviewer)
    return reviewers


def compute_trust_score(
    conn: sqlite3.Connection,
    restaurant_id: int,
    calculator: Optional[TrustScoreCalculator] = None
) -> Dict:
    """
    Recompute and store the trust score for one restaurant

    Reads and the upsert run in a single write transaction, so one call
    never mixes reviews from two points in time. Safe to repeat: the stored
    record is overwritten, never appended.

    Args:
        conn: Open connection with no transaction in progress
        restaurant_id: Restaurant to score
        calculator: Calculator to use (a default one is created if omitted)

    Returns:
        The computed record (including the unpersisted 'breakdown')
    """
    calculator = calculator or TrustScoreCalculator()

    conn.execute('BEGIN IMMEDIATE')
    try:
        reviews = get_active_reviews(conn, restaurant_id)
        reviewers = load_reviewers(conn, reviews)

        record = calculator.calculate(reviews, reviewers)
        upsert_trust_score(conn, restaurant_id, record)
    except Exception:
        conn.rollback()
        raise

    logger.info(
        f"Trust score restaurant={restaurant_id} overall={record['overall_score']} "
        f"verdict=\"{record['verdict']}\" flags={len(record['flags'])}"
    )
    return record
