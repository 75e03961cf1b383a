"""Reviewer credibility rule - how established the reviewers are"""
from typing import Dict, List

from trust_scoring.base import TrustRule
from trust_scoring.utils import clamp, mean


class ReviewerCredibilityRule(TrustRule):
    """
    Scores the distinct reviewers behind a restaurant's reviews

    Each reviewer starts at 50 and is adjusted for review history, account
    age and the externally assigned suspicious score. A reviewer with many
    reviews of this restaurant still counts once.
    """

    NEUTRAL_SCORE = 50.0

    def analyze(self, reviews: List[Dict], reviewers: List[Dict]) -> Dict:
        """
        Average per-reviewer credibility

        Returns:
            {
                'score': 0-100 (mean of clamped per-reviewer scores),
                'flags': (),
                'reasoning': str
            }
        """
        if not reviewers:
            return {
                'score': self.NEUTRAL_SCORE,
                'flags': (),
                'reasoning': 'No reviewer profiles available'
            }

        score = mean([self.score_reviewer(reviewer) for reviewer in reviewers])

        return {
            'score': score,
            'flags': (),
            'reasoning': f"Average credibility {score:.1f} across {len(reviewers)} reviewers"
        }

    def score_reviewer(self, reviewer: Dict) -> float:
        """Credibility of a single reviewer profile, clamped to 0-100"""
        score = 50.0

        total_reviews = reviewer.get('total_reviews', 0)
        if total_reviews >= 10:
            score += 20
        elif total_reviews >= 5:
            score += 10
        elif total_reviews <= 1:
            score -= 25

        account_age = reviewer.get('account_age', 0)
        if account_age >= 365:
            score += 15
        elif account_age >= 90:
            score += 5
        elif account_age < 30:
            score -= 15

        score -= reviewer.get('suspicious_score', 0) * 0.5

        return clamp(score)
