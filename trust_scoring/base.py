"""Base class for trust scoring rules"""
from typing import Dict, List
from abc import ABC, abstractmethod


class TrustRule(ABC):
    """Base class for all trust sub-score rules"""

    @abstractmethod
    def analyze(self, reviews: List[Dict], reviewers: List[Dict]) -> Dict:
        """
        Analyze a restaurant's reviews and return a sub-score

        Args:
            reviews: List of active review dictionaries
            reviewers: List of distinct, resolved reviewer dictionaries

        Returns:
            {
                'score': float (0-100, higher = more trustworthy),
                'flags': tuple of human-readable suspicion flags,
                'reasoning': str (human-readable explanation)
            }
        """
        pass

    def get_name(self) -> str:
        """Get rule name"""
        return self.__class__.__name__
