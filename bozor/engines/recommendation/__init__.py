"""
Recommendation Engine

Handles similar-listing, personal and taxonomy-based recommendations.
"""

from .core import RecommendationEngine
from .schemas import InterestProfile, SimilarityScore
from .similarity_service import SimilarityRecommender

__all__ = [
    "InterestProfile",
    "RecommendationEngine",
    "SimilarityRecommender",
    "SimilarityScore",
]
