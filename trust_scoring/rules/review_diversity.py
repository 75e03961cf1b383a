"""Review diversity rule - distinct voices, throwaway accounts and copied text"""
from typing import Dict, List
from itertools import combinations

from trust_scoring.base import TrustRule
from trust_scoring.utils import word_bigrams, jaccard_similarity
from config import PHRASE_SIMILARITY_THRESHOLD, SIMILAR_PAIRS_THRESHOLD


class ReviewDiversityRule(TrustRule):
    """
    Measures how many independent reviewers stand behind the reviews

    Scores the ratio of distinct reviewers to reviews, and flags restaurants
    reviewed mostly by single-review accounts or by near-duplicate text.
    Text comparison is over all pairs, so cost grows quadratically with
    the number of reviews.
    """

    # (minimum unique reviewer ratio, score), checked in order
    SCORE_BANDS = [
        (0.9, 90.0),
        (0.7, 70.0),
        (0.5, 50.0),
    ]
    FLOOR_SCORE = 25.0
    NEUTRAL_SCORE = 50.0
    SIMILARITY_FLAG = "High phrase similarity detected across reviews"

    def __init__(
        self,
        similarity_threshold: float = PHRASE_SIMILARITY_THRESHOLD,
        similar_pairs_threshold: float = SIMILAR_PAIRS_THRESHOLD
    ):
        """
        Args:
            similarity_threshold: Bigram Jaccard at which a pair counts as similar
            similar_pairs_threshold: Share of similar pairs that raises the flag
        """
        self.similarity_threshold = similarity_threshold
        self.similar_pairs_threshold = similar_pairs_threshold

    def analyze(self, reviews: List[Dict], reviewers: List[Dict]) -> Dict:
        """
        Returns:
            {
                'score': 0-100 (higher = more distinct reviewers),
                'flags': (single-review-accounts flag?, phrase-similarity flag?),
                'reasoning': str
            }
        """
        if not reviews:
            return {
                'score': self.NEUTRAL_SCORE,
                'flags': (),
                'reasoning': 'No reviews to compare'
            }

        unique_reviewers = len({review['reviewer_id'] for review in reviews})
        ratio = unique_reviewers / len(reviews)

        flags = []

        single_review_accounts = [r for r in reviewers if r.get('total_reviews', 0) <= 1]
        if len(single_review_accounts) > len(reviewers) * 0.5:
            flags.append(
                f"{len(single_review_accounts)}/{len(reviewers)} reviewers have only 1 review"
            )

        similar_pairs, compared_pairs = self.count_similar_pairs(
            [review.get('review_text') or '' for review in reviews]
        )
        if compared_pairs > 0 and similar_pairs / compared_pairs >= self.similar_pairs_threshold:
            flags.append(self.SIMILARITY_FLAG)

        score = self.FLOOR_SCORE
        for min_ratio, band_score in self.SCORE_BANDS:
            if ratio >= min_ratio:
                score = band_score
                break

        return {
            'score': score,
            'flags': tuple(flags),
            'reasoning': (
                f"{unique_reviewers} distinct reviewers for {len(reviews)} reviews; "
                f"{similar_pairs}/{compared_pairs} review pairs similar"
            )
        }

    def count_similar_pairs(self, texts: List[str]):
        """
        Compare every unordered pair of texts by word-bigram Jaccard

        Returns:
            (similar_pairs, compared_pairs)
        """
        bigram_sets = [word_bigrams(text) for text in texts]

        similar_pairs = 0
        compared_pairs = 0
        for a, b in combinations(bigram_sets, 2):
            compared_pairs += 1
            if jaccard_similarity(a, b) >= self.similarity_threshold:
                similar_pairs += 1

        return similar_pairs, compared_pairs
