"""
Pydantic schemas for the searching user
"""
from typing import Dict, List

from pydantic import BaseModel, Field


class UserContext(BaseModel):
    """Personalization signals for a signed-in user"""

    user_id: str
    category_preferences: Dict[str, float] = Field(
        default_factory=dict, description="Category -> preference score from past activity"
    )
    recent_searches: List[str] = Field(default_factory=list)

    def category_preference(self, category: str) -> float:
        return self.category_preferences.get(category, 0)
