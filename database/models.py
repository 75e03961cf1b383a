"""Database models and CRUD operations"""
import sqlite3
from datetime import datetime, timezone
from typing import Dict, List, Optional
import json


def get_db_connection(db_path: str) -> sqlite3.Connection:
    """Create database connection with row factory"""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row  # Access columns by name
    return conn


def _to_timestamp(value) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


# ==================== RESTAURANTS ====================

def save_restaurant(conn: sqlite3.Connection, restaurant_data: Dict) -> int:
    """
    Insert restaurant, return restaurant_id

    Args:
        restaurant_data: {'name', 'location', 'cuisine'}
    """
    cursor = conn.cursor()
    cursor.execute('''
        INSERT INTO restaurants (name, location, cuisine)
        VALUES (?, ?, ?)
    ''', (
        restaurant_data['name'],
        restaurant_data.get('location'),
        restaurant_data.get('cuisine')
    ))
    conn.commit()
    return cursor.lastrowid


def get_restaurant_by_id(conn: sqlite3.Connection, restaurant_id: int) -> Optional[Dict]:
    """Get restaurant by ID"""
    cursor = conn.cursor()
    cursor.execute('SELECT * FROM restaurants WHERE id = ?', (restaurant_id,))
    row = cursor.fetchone()
    return dict(row) if row else None


# ==================== REVIEWERS ====================

def save_reviewer(conn: sqlite3.Connection, reviewer_data: Dict) -> int:
    """
    Insert reviewer profile, return reviewer_id

    Args:
        reviewer_data: {'name', 'total_reviews', 'account_age', 'suspicious_score'}
    """
    cursor = conn.cursor()
    cursor.execute('''
        INSERT INTO reviewers (name, total_reviews, account_age, suspicious_score)
        VALUES (?, ?, ?, ?)
    ''', (
        reviewer_data['name'],
        reviewer_data.get('total_reviews', 0),
        reviewer_data.get('account_age', 0),
        reviewer_data.get('suspicious_score', 0)
    ))
    conn.commit()
    return cursor.lastrowid


def get_reviewer_by_id(conn: sqlite3.Connection, reviewer_id: int) -> Optional[Dict]:
    """Get reviewer by ID, None if it does not resolve"""
    cursor = conn.cursor()
    cursor.execute('SELECT * FROM reviewers WHERE id = ?', (reviewer_id,))
    row = cursor.fetchone()
    return dict(row) if row else None


# ==================== REVIEWS ====================

def save_review(conn: sqlite3.Connection, restaurant_id: int, review: Dict) -> int:
    """
    Insert a review, return review_id

    Args:
        review: {'reviewer_id', 'review_text', 'rating', 'created_at', 'active'}
    """
    cursor = conn.cursor()
    cursor.execute('''
        INSERT INTO reviews (restaurant_id, reviewer_id, review_text, rating, active, created_at)
        VALUES (?, ?, ?, ?, ?, ?)
    ''', (
        restaurant_id,
        review['reviewer_id'],
        review.get('review_text', ''),
        review['rating'],
        1 if review.get('active', True) else 0,
        _to_timestamp(review.get('created_at') or datetime.now(timezone.utc))
    ))
    conn.commit()
    return cursor.lastrowid


def get_active_reviews(conn: sqlite3.Connection, restaurant_id: int) -> List[Dict]:
    """Get all active reviews for a restaurant, in no particular order"""
    cursor = conn.cursor()
    cursor.execute('''
        SELECT id, restaurant_id, reviewer_id, review_text, rating, active, created_at
        FROM reviews
        WHERE restaurant_id = ? AND active = 1
    ''', (restaurant_id,))

    rows = cursor.fetchall()
    return [dict(row) for row in rows]


# ==================== TRUST SCORES ====================

def upsert_trust_score(conn: sqlite3.Connection, restaurant_id: int, record: Dict):
    """
    Save a trust score record, replacing any existing one for the restaurant

    Args:
        restaurant_id: Restaurant ID
        record: Output of TrustScoreCalculator.calculate()
    """
    cursor = conn.cursor()

    values = (
        record['overall_score'],
        record['reviewer_credibility'],
        record['rating_stability'],
        record['language_authenticity'],
        record['burst_score'],
        record['review_diversity'],
        json.dumps(list(record['flags'])),
        record['verdict'],
        record['updated_at'],
    )

    # Check if a score exists
    cursor.execute('SELECT id FROM trust_scores WHERE restaurant_id = ?', (restaurant_id,))
    existing = cursor.fetchone()

    if existing:
        cursor.execute('''
            UPDATE trust_scores
            SET overall_score = ?, reviewer_credibility = ?, rating_stability = ?,
                language_authenticity = ?, burst_score = ?, review_diversity = ?,
                flags = ?, verdict = ?, updated_at = ?
            WHERE restaurant_id = ?
        ''', values + (restaurant_id,))
    else:
        cursor.execute('''
            INSERT INTO trust_scores (
                overall_score, reviewer_credibility, rating_stability,
                language_authenticity, burst_score, review_diversity,
                flags, verdict, updated_at, restaurant_id
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ''', values + (restaurant_id,))

    conn.commit()


def get_trust_score(conn: sqlite3.Connection, restaurant_id: int) -> Optional[Dict]:
    """Get the trust score record for a restaurant"""
    cursor = conn.cursor()
    cursor.execute('''
        SELECT restaurant_id, overall_score, reviewer_credibility, rating_stability,
               language_authenticity, burst_score, review_diversity,
               flags, verdict, updated_at
        FROM trust_scores
        WHERE restaurant_id = ?
    ''', (restaurant_id,))

    row = cursor.fetchone()
    if not row:
        return None

    result = dict(row)
    result['flags'] = json.loads(result.get('flags') or '[]')
    return result


# ==================== SCORE TASKS ====================

def enqueue_score_task(conn: sqlite3.Connection, restaurant_id: int) -> int:
    """
    Queue a trust score recomputation, return task_id

    Called after every review-creating or review-superseding change.
    """
    cursor = conn.cursor()
    cursor.execute(
        'INSERT INTO score_tasks (restaurant_id) VALUES (?)',
        (restaurant_id,)
    )
    conn.commit()
    return cursor.lastrowid


def get_pending_score_tasks(conn: sqlite3.Connection, limit: int = 10) -> List[Dict]:
    """Get pending tasks, oldest first"""
    cursor = conn.cursor()
    cursor.execute('''
        SELECT id, restaurant_id
        FROM score_tasks
        WHERE status = 'pending'
        ORDER BY id ASC
        LIMIT ?
    ''', (limit,))
    return [dict(row) for row in cursor.fetchall()]


def get_score_task(conn: sqlite3.Connection, task_id: int) -> Optional[Dict]:
    """Get task by ID"""
    cursor = conn.cursor()
    cursor.execute('SELECT * FROM score_tasks WHERE id = ?', (task_id,))
    row = cursor.fetchone()
    return dict(row) if row else None


def update_score_task(conn: sqlite3.Connection, task_id: int, status: str, error: str = None):
    """Update task status"""
    cursor = conn.cursor()
    if status in ('done', 'error'):
        cursor.execute('''
            UPDATE score_tasks
            SET status = ?, processed_at = datetime('now'), error = ?
            WHERE id = ?
        ''', (status, error, task_id))
    else:
        cursor.execute(
            'UPDATE score_tasks SET status = ? WHERE id = ?',
            (status, task_id)
        )
    conn.commit()
