from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass
class SearchCardSummary:
    """Summary of one business card on a search results page"""
    business_url: str
    business_name: Optional[str] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'businessName': self.business_name,
            'rating': self.rating,
            'reviewCount': self.review_count,
            'businessUrl': self.business_url
        }
