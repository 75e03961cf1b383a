"""Trust scoring module"""
from trust_scoring.calculator import TrustScoreCalculator
from trust_scoring.scoring import TrustScorer
from trust_scoring.base import TrustRule
from trust_scoring.service import compute_trust_score

__all__ = ["TrustScoreCalculator", "TrustScorer", "TrustRule", "compute_trust_score"]
