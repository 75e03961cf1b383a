"""Trust score calculator - runs all rules over one restaurant snapshot"""
from datetime import datetime, timezone
from typing import Dict, List, Optional

from trust_scoring.rules.reviewer_credibility import ReviewerCredibilityRule
from trust_scoring.rules.rating_stability import RatingStabilityRule
from trust_scoring.rules.language_authenticity import LanguageAuthenticityRule
from trust_scoring.rules.burst_pattern import BurstPatternRule
from trust_scoring.rules.review_diversity import ReviewDiversityRule
from trust_scoring.scoring import TrustScorer
from trust_scoring.utils import round_half_up


# Stored sub-score column for each rule
SUB_SCORE_FIELDS = {
    'ReviewerCredibilityRule': 'reviewer_credibility',
    'RatingStabilityRule': 'rating_stability',
    'LanguageAuthenticityRule': 'language_authenticity',
    'BurstPatternRule': 'burst_score',
    'ReviewDiversityRule': 'review_diversity',
}


class TrustScoreCalculator:
    """
    Orchestrates trust score computation

    Runs every sub-score rule over the same input snapshot and combines the
    results. Holds no state between calls.
    """

    def __init__(self, scorer: Optional[TrustScorer] = None):
        """Initialize with trust scoring rules"""
        self.rules = [
            ReviewerCredibilityRule(),
            RatingStabilityRule(),
            LanguageAuthenticityRule(),
            BurstPatternRule(),
            ReviewDiversityRule()
        ]
        self.scorer = scorer or TrustScorer()

    def analyze_restaurant(self, reviews: List[Dict], reviewers: List[Dict]) -> Dict:
        """
        Run all trust rules

        Returns:
            {
                'ReviewerCredibilityRule': {'score', 'flags', 'reasoning'},
                'RatingStabilityRule': {'score', 'flags', 'reasoning'},
                ...
            }
        """
        return {rule.get_name(): rule.analyze(reviews, reviewers) for rule in self.rules}

    def calculate(
        self,
        reviews: List[Dict],
        reviewers: List[Dict],
        now: Optional[datetime] = None
    ) -> Dict:
        """
        Compute the trust score record for one restaurant

        Args:
            reviews: Review dictionaries; inactive ones are ignored
            reviewers: Resolved reviewer dictionaries; duplicates by id are ignored
            now: Timestamp for 'updated_at' (defaults to the current time)

        Returns:
            {
                'overall_score', 'reviewer_credibility', 'rating_stability',
                'language_authenticity', 'burst_score', 'review_diversity',
                'flags', 'verdict', 'updated_at', 'breakdown'
            }
        """
        active_reviews = [review for review in reviews if review.get('active', True)]
        distinct_reviewers = self._dedupe_reviewers(reviewers)

        rule_results = self.analyze_restaurant(active_reviews, distinct_reviewers)
        final_score = self.scorer.calculate_score(rule_results)

        record = {'overall_score': final_score['overall_score']}
        for rule_name, field in SUB_SCORE_FIELDS.items():
            record[field] = round_half_up(rule_results[rule_name]['score'])
        record['flags'] = final_score['flags']
        record['verdict'] = final_score['verdict']
        record['updated_at'] = (now or datetime.now(timezone.utc)).isoformat()
        record['breakdown'] = final_score['breakdown']

        return record

    def get_enabled_rules(self) -> List[str]:
        """Get list of enabled rule names"""
        return [rule.get_name() for rule in self.rules]

    @staticmethod
    def _dedupe_reviewers(reviewers: List[Dict]) -> List[Dict]:
        seen = set()
        distinct = []
        for reviewer in reviewers:
            if reviewer['id'] in seen:
                continue
            seen.add(reviewer['id'])
            distinct.append(reviewer)
        return distinct
