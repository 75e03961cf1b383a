"""Tests for the Flask endpoints."""
import pytest

from database.models import save_restaurant, save_reviewer, save_review, get_score_task
import worker


@pytest.fixture
def restaurant_id(conn, base_time):
    restaurant_id = save_restaurant(conn, {'name': 'Restoran Sri Melur', 'cuisine': 'Indian'})
    reviewer_id = save_reviewer(conn, {'name': 'MakanQueen', 'total_reviews': 142, 'account_age': 1095, 'suspicious_score': 2})
    save_review(conn, restaurant_id, {
        'reviewer_id': reviewer_id,
        'review_text': 'Banana leaf rice with 3 vegetables and fish curry, RM14.',
        'rating': 5,
        'created_at': base_time,
    })
    return restaurant_id


class TestHealthEndpoint:
    """Tests for /health endpoint."""

    def test_health_returns_ok(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.get_json() == {'status': 'ok'}


class TestTrustScoreEndpoint:
    """Tests for /restaurants/<id>/trust-score."""

    def test_unknown_restaurant(self, client):
        response = client.get('/restaurants/404/trust-score')
        assert response.status_code == 404
        assert response.get_json()['error'] == 'Restaurant not found'

    def test_score_not_computed_yet(self, client, restaurant_id):
        response = client.get(f'/restaurants/{restaurant_id}/trust-score')
        assert response.status_code == 404
        assert 'not computed' in response.get_json()['error']

    def test_enqueue_recompute(self, client, conn, restaurant_id):
        response = client.post(f'/restaurants/{restaurant_id}/trust-score')
        assert response.status_code == 202

        data = response.get_json()
        assert data['status'] == 'pending'
        assert get_score_task(conn, data['task_id'])['restaurant_id'] == restaurant_id

    def test_enqueue_unknown_restaurant(self, client):
        response = client.post('/restaurants/404/trust-score')
        assert response.status_code == 404

    def test_score_available_after_worker_runs(self, client, conn, restaurant_id):
        client.post(f'/restaurants/{restaurant_id}/trust-score')
        assert worker.process_queue(conn) == 1

        response = client.get(f'/restaurants/{restaurant_id}/trust-score')
        assert response.status_code == 200

        data = response.get_json()
        assert data['restaurant_id'] == restaurant_id
        assert 0 <= data['overall_score'] <= 100
        assert data['verdict'] in {"Highly Authentic", "Mixed Credibility", "High Manipulation Risk"}
        assert isinstance(data['flags'], list)
        assert 'breakdown' not in data
