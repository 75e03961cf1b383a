"""Trust scoring rules"""
from trust_scoring.rules.reviewer_credibility import ReviewerCredibilityRule
from trust_scoring.rules.rating_stability import RatingStabilityRule
from trust_scoring.rules.language_authenticity import LanguageAuthenticityRule
from trust_scoring.rules.burst_pattern import BurstPatternRule
from trust_scoring.rules.review_diversity import ReviewDiversityRule

__all__ = [
    "ReviewerCredibilityRule",
    "RatingStabilityRule",
    "LanguageAuthenticityRule",
    "BurstPatternRule",
    "ReviewDiversityRule",
]
