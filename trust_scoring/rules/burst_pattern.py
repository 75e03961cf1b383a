"""Burst pattern rule - detects reviews clustered in a short time span"""
from datetime import timedelta
from typing import Dict, List

from trust_scoring.base import TrustRule
from trust_scoring.utils import parse_timestamp, round_half_up
from config import (
    BURST_WINDOW_HOURS, BURST_PERCENT_THRESHOLD,
    FIVE_STAR_SPIKE_THRESHOLD, MIN_REVIEWS_FOR_BURST
)


class BurstPatternRule(TrustRule):
    """
    Detects suspicious timing patterns

    Slides a fixed window over the review timeline and measures the largest
    share of all reviews that landed inside any one window. Coordinated
    review campaigns tend to arrive together. Also flags a restaurant whose
    reviews are overwhelmingly 5 stars.
    """

    # (minimum burst ratio, score), checked in order
    SCORE_BANDS = [
        (0.6, 15.0),
        (0.4, 35.0),
        (0.25, 60.0),
    ]
    CALM_SCORE = 90.0
    INSUFFICIENT_DATA_SCORE = 85.0

    def __init__(
        self,
        window_hours: float = BURST_WINDOW_HOURS,
        burst_threshold: float = BURST_PERCENT_THRESHOLD,
        five_star_threshold: float = FIVE_STAR_SPIKE_THRESHOLD,
        min_reviews: int = MIN_REVIEWS_FOR_BURST
    ):
        """
        Args:
            window_hours: Width of the sliding window
            burst_threshold: Burst ratio at which the window flag is raised
            five_star_threshold: 5-star share at which the spike flag is raised
            min_reviews: Fewer reviews than this skip the analysis entirely
        """
        self.window = timedelta(hours=window_hours)
        self.window_hours = window_hours
        self.burst_threshold = burst_threshold
        self.five_star_threshold = five_star_threshold
        self.min_reviews = min_reviews

    def analyze(self, reviews: List[Dict], reviewers: List[Dict]) -> Dict:
        """
        Find the densest review window

        Returns:
            {
                'score': 0-100 (lower = more bursty),
                'flags': (burst-window flag?, five-star-spike flag?),
                'reasoning': str
            }
        """
        if len(reviews) < self.min_reviews:
            return {
                'score': self.INSUFFICIENT_DATA_SCORE,
                'flags': (),
                'reasoning': 'Insufficient reviews for timing analysis'
            }

        total = len(reviews)
        max_in_window = self.max_reviews_in_window(
            [parse_timestamp(review['created_at']) for review in reviews]
        )
        burst_ratio = max_in_window / total

        flags = []
        if burst_ratio >= self.burst_threshold:
            flags.append(
                f"{round_half_up(burst_ratio * 100)}% of reviews arrived "
                f"within {self.window_hours:g} hours"
            )

        five_stars = sum(1 for review in reviews if review['rating'] == 5)
        five_star_ratio = five_stars / total
        if five_star_ratio >= self.five_star_threshold:
            flags.append(f"{round_half_up(five_star_ratio * 100)}% are 5-star ratings")

        score = self.CALM_SCORE
        for min_ratio, band_score in self.SCORE_BANDS:
            if burst_ratio >= min_ratio:
                score = band_score
                break

        return {
            'score': score,
            'flags': tuple(flags),
            'reasoning': f"Largest {self.window_hours:g}h window holds {max_in_window} of {total} reviews"
        }

    def max_reviews_in_window(self, timestamps: List) -> int:
        """
        Two-pointer scan over sorted timestamps

        A pair exactly one window apart still falls inside the same window.
        """
        ordered = sorted(timestamps)
        max_count = 0
        start = 0
        for end in range(len(ordered)):
            while ordered[end] - ordered[start] > self.window:
                start += 1
            max_count = max(max_count, end - start + 1)
        return max_count
