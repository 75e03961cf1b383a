"""Tests for the score task worker."""
from datetime import timedelta, timezone

import pytest

from database.models import (
    save_restaurant, save_reviewer, save_review, enqueue_score_task,
    get_pending_score_tasks, get_score_task, get_trust_score
)
import worker


@pytest.fixture
def restaurant_id(conn, base_time):
    restaurant_id = save_restaurant(conn, {'name': 'Warung Pak Li'})
    reviewer_id = save_reviewer(conn, {'name': 'FoodieAzman', 'total_reviews': 87, 'account_age': 730, 'suspicious_score': 5})
    save_review(conn, restaurant_id, {
        'reviewer_id': reviewer_id,
        'review_text': 'Mee rebus with 2 eggs, gravy thick and a bit sweet.',
        'rating': 4,
        'created_at': base_time,
    })
    return restaurant_id


class TestProcessQueue:
    """Tests for draining the recompute queue."""

    def test_empty_queue(self, conn):
        assert worker.process_queue(conn) == 0

    def test_processes_pending_tasks(self, conn, restaurant_id):
        first = enqueue_score_task(conn, restaurant_id)
        second = enqueue_score_task(conn, restaurant_id)

        assert worker.process_queue(conn) == 2

        assert get_score_task(conn, first)['status'] == 'done'
        assert get_score_task(conn, second)['status'] == 'done'
        assert get_score_task(conn, first)['processed_at'] is not None
        assert get_pending_score_tasks(conn) == []
        assert get_trust_score(conn, restaurant_id) is not None
        assert conn.execute('SELECT COUNT(*) FROM trust_scores').fetchone()[0] == 1

    def test_respects_batch_size(self, conn, restaurant_id):
        for _ in range(3):
            enqueue_score_task(conn, restaurant_id)

        assert worker.process_queue(conn, batch_size=2) == 2
        assert len(get_pending_score_tasks(conn)) == 1

    def test_failed_task_is_recorded(self, conn, base_time):
        restaurant_id = save_restaurant(conn, {'name': 'Broken Timestamps'})
        reviewer_id = save_reviewer(conn, {'name': 'Glitch', 'total_reviews': 3})
        for _ in range(3):
            save_review(conn, restaurant_id, {'reviewer_id': reviewer_id, 'rating': 3, 'created_at': 'not-a-date'})
        task_id = enqueue_score_task(conn, restaurant_id)

        assert worker.process_queue(conn) == 0

        task = get_score_task(conn, task_id)
        assert task['status'] == 'error'
        assert 'not-a-date' in task['error']
        assert get_trust_score(conn, restaurant_id) is None

    def test_failure_does_not_block_other_tasks(self, conn, restaurant_id):
        broken_id = save_restaurant(conn, {'name': 'Broken Timestamps'})
        reviewer_id = save_reviewer(conn, {'name': 'Glitch', 'total_reviews': 3})
        for _ in range(3):
            save_review(conn, broken_id, {'reviewer_id': reviewer_id, 'rating': 3, 'created_at': 'not-a-date'})

        enqueue_score_task(conn, broken_id)
        enqueue_score_task(conn, restaurant_id)

        assert worker.process_queue(conn) == 1
        assert get_trust_score(conn, restaurant_id) is not None

    def test_mixed_timezone_timestamps(self, conn, base_time):
        restaurant_id = save_restaurant(conn, {'name': 'Kedai Kopi Ah Seng'})
        reviewer_id = save_reviewer(conn, {'name': 'KopiLover', 'total_reviews': 12})
        aware = base_time.replace(tzinfo=timezone.utc)
        for created_at in (aware, aware + timedelta(hours=2), None, base_time - timedelta(days=3)):
            save_review(conn, restaurant_id, {'reviewer_id': reviewer_id, 'rating': 4, 'created_at': created_at})
        task_id = enqueue_score_task(conn, restaurant_id)

        assert worker.process_queue(conn) == 1
        assert get_score_task(conn, task_id)['status'] == 'done'
        assert get_trust_score(conn, restaurant_id)['burst_score'] == 35


class TestMain:
    """Tests for the command-line entry point."""

    def test_single_pass(self, db_path, conn, restaurant_id):
        task_id = enqueue_score_task(conn, restaurant_id)

        worker.main(['--db', db_path])

        assert get_score_task(conn, task_id)['status'] == 'done'
        assert get_trust_score(conn, restaurant_id)['overall_score'] > 0
