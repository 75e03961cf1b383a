"""Language authenticity rule - generic marketing copy vs. specific detail"""
import re
from typing import Dict, List

from trust_scoring.base import TrustRule
from trust_scoring.utils import clamp, mean
from config import SHORT_REVIEW_LENGTH, DETAILED_REVIEW_LENGTH


GENERIC_PHRASES = (
    "amazing", "best ever", "highly recommend", "must try",
    "so good", "love it", "great food", "nice place",
    "delicious", "yummy", "awesome", "fantastic",
    "perfect", "wonderful", "excellent service",
)

DIGIT_PATTERN = re.compile(r'\d', re.ASCII)


class LanguageAuthenticityRule(TrustRule):
    """
    Scores how specific and non-generic review text reads

    Short reviews and reviews stuffed with stock praise are penalised;
    reviews that mention numbers (prices, dates, quantities) or run long
    get a small bonus. One vote per review.
    """

    NEUTRAL_SCORE = 50.0

    def __init__(
        self,
        short_length: int = SHORT_REVIEW_LENGTH,
        detailed_length: int = DETAILED_REVIEW_LENGTH,
        phrases=GENERIC_PHRASES
    ):
        """
        Args:
            short_length: Reviews shorter than this are penalised
            detailed_length: Reviews longer than this earn the detail bonus
            phrases: Generic marketing phrases to count
        """
        self.short_length = short_length
        self.detailed_length = detailed_length
        self.phrases = tuple(phrases)

    def analyze(self, reviews: List[Dict], reviewers: List[Dict]) -> Dict:
        if not reviews:
            return {
                'score': self.NEUTRAL_SCORE,
                'flags': (),
                'reasoning': 'No review text to analyze'
            }

        score = mean([self.score_text(review.get('review_text') or '') for review in reviews])

        return {
            'score': score,
            'flags': (),
            'reasoning': f"Average language authenticity {score:.1f} over {len(reviews)} reviews"
        }

    def score_text(self, text: str) -> float:
        """Authenticity of a single review text, clamped to 0-100"""
        lower = text.lower()
        score = 80.0

        if len(lower) < self.short_length:
            score -= 30

        generic_hits = self.count_generic_phrases(lower)
        if generic_hits >= 4:
            score -= 35
        elif generic_hits >= 2:
            score -= 15

        if DIGIT_PATTERN.search(lower) or len(lower) > self.detailed_length:
            score += 10

        return clamp(score)

    def count_generic_phrases(self, lower_text: str) -> int:
        """Number of distinct generic phrases appearing as substrings"""
        return sum(1 for phrase in self.phrases if phrase in lower_text)
