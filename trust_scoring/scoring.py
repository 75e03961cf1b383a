"""Trust scoring system - combines rule results into the overall score"""
from typing import Dict, List

from trust_scoring.utils import round_half_up


VERDICT_HIGHLY_AUTHENTIC = "Highly Authentic"
VERDICT_MIXED = "Mixed Credibility"
VERDICT_MANIPULATION_RISK = "High Manipulation Risk"


class TrustScorer:
    """
    Calculates the weighted trust score from rule results

    Scores are combined unrounded and the total is rounded once.
    """

    # Rule weights (must sum to 1.0)
    WEIGHTS = {
        'ReviewerCredibilityRule': 0.30,
        'RatingStabilityRule': 0.25,
        'LanguageAuthenticityRule': 0.20,
        'BurstPatternRule': 0.15,
        'ReviewDiversityRule': 0.10,
    }

    # Flags are reported in this rule order
    FLAG_ORDER = ('BurstPatternRule', 'ReviewDiversityRule')

    def calculate_score(self, rule_results: Dict) -> Dict:
        """
        Calculate weighted trust score (0-100)

        Args:
            rule_results: Dict of {rule_name: {'score', 'flags', 'reasoning'}}
                          with an entry for every weighted rule

        Returns:
            {
                'overall_score': int (0-100),
                'verdict': str,
                'flags': [suspicion flags in detection order],
                'breakdown': {rule_name: {'score', 'weight', 'contribution', 'reasoning'}}
            }
        """
        weighted_sum = 0.0
        breakdown = {}

        for rule_name, weight in self.WEIGHTS.items():
            result = rule_results[rule_name]
            score = result['score']
            contribution = score * weight

            weighted_sum += contribution

            breakdown[rule_name] = {
                'score': round(score, 1),
                'weight': weight,
                'contribution': round(contribution, 2),
                'reasoning': result.get('reasoning', '')
            }

        overall_score = round_half_up(weighted_sum)

        return {
            'overall_score': overall_score,
            'verdict': self.get_verdict(overall_score),
            'flags': self.collect_flags(rule_results),
            'breakdown': breakdown
        }

    def collect_flags(self, rule_results: Dict) -> List[str]:
        """Concatenate rule flags in the fixed reporting order"""
        flags = []
        for rule_name in self.FLAG_ORDER:
            flags.extend(rule_results.get(rule_name, {}).get('flags', ()))
        return flags

    @staticmethod
    def get_verdict(score: int) -> str:
        """
        Convert overall score to a verdict label

        Args:
            score: Overall trust score (0-100)

        Returns:
            Verdict string
        """
        if score >= 75:
            return VERDICT_HIGHLY_AUTHENTIC
        elif score >= 45:
            return VERDICT_MIXED
        else:
            return VERDICT_MANIPULATION_RISK
