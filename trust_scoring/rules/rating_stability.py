"""Rating stability rule - dispersion of star ratings"""
import math
from typing import Dict, List

from trust_scoring.base import TrustRule
from trust_scoring.utils import mean
from config import MIN_REVIEWS_FOR_STABILITY


class RatingStabilityRule(TrustRule):
    """
    Maps the population standard deviation of ratings to a score

    Reviews that agree with each other score higher. Uniform ratings are
    rewarded here even though the burst rule treats a 5-star spike as a
    warning sign.
    """

    # (upper bound on std dev, score), checked in order
    BREAKPOINTS = [
        (0.5, 95.0),
        (1.0, 80.0),
        (1.5, 60.0),
        (2.0, 40.0),
    ]
    FLOOR_SCORE = 20.0
    NEUTRAL_SCORE = 50.0

    def __init__(self, min_reviews: int = MIN_REVIEWS_FOR_STABILITY):
        """
        Args:
            min_reviews: Reviews needed before dispersion is meaningful
        """
        self.min_reviews = min_reviews

    def analyze(self, reviews: List[Dict], reviewers: List[Dict]) -> Dict:
        if len(reviews) < self.min_reviews:
            return {
                'score': self.NEUTRAL_SCORE,
                'flags': (),
                'reasoning': 'Insufficient reviews for rating dispersion'
            }

        std_dev = self.rating_std_dev([review['rating'] for review in reviews])

        score = self.FLOOR_SCORE
        for upper_bound, mapped_score in self.BREAKPOINTS:
            if std_dev < upper_bound:
                score = mapped_score
                break

        return {
            'score': score,
            'flags': (),
            'reasoning': f"Rating standard deviation {std_dev:.2f}"
        }

    @staticmethod
    def rating_std_dev(ratings: List[int]) -> float:
        """Population standard deviation (divides by n, not n - 1)"""
        avg = mean(ratings)
        variance = sum((rating - avg) ** 2 for rating in ratings) / len(ratings)
        return math.sqrt(variance)
