"""
Pytest fixtures for the trust scoring tests.

Provides:
- Review and reviewer dict factories with sensible defaults
- A fresh SQLite database per test
- A Flask test client bound to that database
"""
from datetime import datetime, timedelta
from itertools import count

import pytest

from database.migrations import init_db
from database.models import get_db_connection


BASE_TIME = datetime(2024, 3, 1, 12, 0, 0)

# Distinct, specific review texts: each mentions a number and no stock praise
DETAILED_TEXTS = (
    "Ordered the nasi lemak at 8pm, sambal had a slow heat and the egg was runny.",
    "Char kway teow came with 3 prawns, smoky wok hei but a little oily for me.",
    "Queue was 20 minutes on Saturday; roti canai crisp, dhal on the thin side.",
    "Teh tarik for RM2.50 is fair. Service slowed once the lunch crowd arrived.",
    "Booked a table for 6, the claypot chicken rice needed more salted fish.",
    "Came back a 2nd time for the laksa, broth was richer than last visit.",
    "Parking is tight after 7pm. Satay skewers were charred well, peanut sauce sweet.",
    "Tried 4 kuih from the counter; the ondeh-ondeh burst with gula melaka.",
)


@pytest.fixture
def base_time():
    return BASE_TIME


@pytest.fixture
def make_review():
    """
    Factory for review dicts

    Defaults describe an active, detailed 4-star review posted at BASE_TIME
    by a reviewer whose id increments per call.
    """
    ids = count(1)

    def _make(**overrides):
        review_id = next(ids)
        review = {
            'id': review_id,
            'restaurant_id': 1,
            'reviewer_id': review_id,
            'review_text': DETAILED_TEXTS[(review_id - 1) % len(DETAILED_TEXTS)],
            'rating': 4,
            'active': True,
            'created_at': BASE_TIME,
        }
        review.update(overrides)
        return review

    return _make


@pytest.fixture
def make_reviewer():
    """
    Factory for reviewer dicts

    Defaults describe an established reviewer: 20 reviews, two-year-old
    account, low suspicious score.
    """
    ids = count(1)

    def _make(**overrides):
        reviewer = {
            'id': next(ids),
            'name': 'FoodieAzman',
            'total_reviews': 20,
            'account_age': 730,
            'suspicious_score': 0,
        }
        reviewer.update(overrides)
        return reviewer

    return _make


@pytest.fixture
def spread_times():
    """Timestamps ten days apart, far enough to never share a burst window"""
    def _spread(n, start=BASE_TIME, gap=timedelta(days=10)):
        return [start + gap * i for i in range(n)]
    return _spread


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / 'trust_scores.db')
    init_db(path)
    return path


@pytest.fixture
def conn(db_path):
    connection = get_db_connection(db_path)
    yield connection
    connection.close()


@pytest.fixture
def client(db_path):
    """Flask test client fixture."""
    from app import app

    app.config['TESTING'] = True
    app.config['DATABASE_PATH'] = db_path
    with app.test_client() as test_client:
        yield test_client
