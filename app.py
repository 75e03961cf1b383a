"""Flask application exposing restaurant trust scores"""
import logging

from flask import Flask, jsonify, g

from config import DATABASE_PATH, SECRET_KEY, DEBUG, LOG_LEVEL
from database.models import (
    get_db_connection, get_restaurant_by_id,
    get_trust_score, enqueue_score_task
)

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['SECRET_KEY'] = SECRET_KEY
app.config['DATABASE_PATH'] = DATABASE_PATH


def get_conn():
    """Per-request database connection"""
    if 'conn' not in g:
        g.conn = get_db_connection(app.config['DATABASE_PATH'])
    return g.conn


@app.teardown_appcontext
def close_conn(exception):
    conn = g.pop('conn', None)
    if conn is not None:
        conn.close()


@app.route('/health')
def health():
    return jsonify({'status': 'ok'})


@app.route('/restaurants/<int:restaurant_id>/trust-score', methods=['GET'])
def trust_score(restaurant_id):
    """Return the stored trust score for a restaurant"""
    conn = get_conn()

    if not get_restaurant_by_id(conn, restaurant_id):
        return jsonify({'error': 'Restaurant not found'}), 404

    score = get_trust_score(conn, restaurant_id)
    if not score:
        return jsonify({'error': 'Trust score not computed yet'}), 404

    return jsonify(score)


@app.route('/restaurants/<int:restaurant_id>/trust-score', methods=['POST'])
def recompute_trust_score(restaurant_id):
    """Queue a trust score recomputation for the worker"""
    conn = get_conn()

    if not get_restaurant_by_id(conn, restaurant_id):
        return jsonify({'error': 'Restaurant not found'}), 404

    task_id = enqueue_score_task(conn, restaurant_id)
    logger.info(f"Queued score task {task_id} for restaurant {restaurant_id}")

    return jsonify({'task_id': task_id, 'status': 'pending'}), 202


if __name__ == '__main__':
    from database.migrations import init_db

    logging.basicConfig(level=LOG_LEVEL)
    init_db(app.config['DATABASE_PATH'])
    app.run(debug=DEBUG, port=5000, host='0.0.0.0')
