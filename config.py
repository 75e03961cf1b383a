"""Configuration settings for the Restaurant Trust Score service"""
import os

# Base directory
BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# Database
DATABASE_PATH = os.environ.get(
    'TRUST_SCORE_DB',
    os.path.join(BASE_DIR, 'data', 'trust_scores.db')
)

# Flask settings
SECRET_KEY = 'dev-secret-key-change-in-production'
DEBUG = True

# Logging
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# Worker settings
WORKER_BATCH_SIZE = 20  # Score tasks handled per pass
WORKER_LOOP_INTERVAL = 5  # Seconds between queue polls in --loop mode
TASK_ERROR_MAX_LENGTH = 200  # Truncate stored error messages

# Trust scoring thresholds
BURST_WINDOW_HOURS = 24  # Sliding window for review bursts
BURST_PERCENT_THRESHOLD = 0.40  # Flag if this share of reviews lands in one window
FIVE_STAR_SPIKE_THRESHOLD = 0.70  # Flag if this share of reviews are 5 stars
MIN_REVIEWS_FOR_STABILITY = 2  # Below this, rating dispersion is undefined
MIN_REVIEWS_FOR_BURST = 3  # Below this, burst analysis is skipped
SHORT_REVIEW_LENGTH = 30  # Characters
DETAILED_REVIEW_LENGTH = 150  # Characters
PHRASE_SIMILARITY_THRESHOLD = 0.60  # Bigram Jaccard for a "similar" pair
SIMILAR_PAIRS_THRESHOLD = 0.30  # Flag if this share of pairs are similar
