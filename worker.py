"""
Worker for the trust score recomputation queue

Usage:
  python worker.py         # Single pass
  python worker.py --loop  # Poll forever

Reads pending rows from score_tasks, recomputes each restaurant's trust
score and records the outcome on the task. Tasks for the same restaurant
may be handled in any order; every run overwrites the stored score.
"""
import argparse
import logging
import sqlite3
import time
from typing import Dict

from config import DATABASE_PATH, LOG_LEVEL, WORKER_BATCH_SIZE, WORKER_LOOP_INTERVAL, TASK_ERROR_MAX_LENGTH
from database.migrations import init_db
from database.models import get_db_connection, get_pending_score_tasks, update_score_task
from trust_scoring.calculator import TrustScoreCalculator
from trust_scoring.service import compute_trust_score

logger = logging.getLogger(__name__)


def process_task(conn: sqlite3.Connection, task: Dict, calculator: TrustScoreCalculator = None) -> bool:
    """
    Handle one score task

    Returns:
        True if the score was stored, False on error
    """
    task_id = task['id']
    restaurant_id = task['restaurant_id']

    update_score_task(conn, task_id, 'processing')

    try:
        compute_trust_score(conn, restaurant_id, calculator)
    except Exception as e:
        logger.exception(f"Task {task_id}: trust score failed for restaurant {restaurant_id}")
        update_score_task(conn, task_id, 'error', str(e)[:TASK_ERROR_MAX_LENGTH])
        return False

    update_score_task(conn, task_id, 'done')
    return True


def process_queue(conn: sqlite3.Connection, batch_size: int = WORKER_BATCH_SIZE) -> int:
    """
    Handle one batch of pending tasks

    Returns:
        Number of tasks completed successfully
    """
    pending = get_pending_score_tasks(conn, limit=batch_size)
    if not pending:
        return 0

    logger.info(f"Found {len(pending)} pending score tasks")

    calculator = TrustScoreCalculator()
    return sum(1 for task in pending if process_task(conn, task, calculator))


def main(argv=None):
    """Worker entry point"""
    parser = argparse.ArgumentParser(description='Trust score recomputation worker')
    parser.add_argument('--loop', action='store_true', help='Keep polling the queue')
    parser.add_argument('--db', default=DATABASE_PATH, help='SQLite database path')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    init_db(args.db)
    conn = get_db_connection(args.db)

    try:
        if not args.loop:
            processed = process_queue(conn)
            logger.info(f"Processed {processed} score tasks")
            return

        logger.info(f"Worker started, polling every {WORKER_LOOP_INTERVAL}s")
        while True:
            processed = process_queue(conn)
            if processed:
                logger.info(f"Processed {processed} score tasks")
            time.sleep(WORKER_LOOP_INTERVAL)
    except KeyboardInterrupt:
        logger.info("Worker stopped")
    finally:
        conn.close()


if __name__ == '__main__':
    main()
