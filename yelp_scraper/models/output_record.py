from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple, Dict, Any, Iterable
from .business_detail import BusinessDetail
from .review import Review


@dataclass(frozen=True)
class OutputRecord:
    """Final record pushed to the dataset, one per detail page visited"""
    detail: BusinessDetail
    reviews: Optional[Tuple[Review, ...]]
    scraped_at: str

    @classmethod
    def create(cls, detail: BusinessDetail, reviews: Iterable[Review] = (),
               scraped_at: Optional[datetime] = None) -> 'OutputRecord':
        """Build a record, stamping the current UTC time when none is given"""
        reviews = tuple(reviews)
        stamp = scraped_at or datetime.now(timezone.utc)
        return cls(
            detail=detail,
            reviews=reviews if reviews else None,
            scraped_at=stamp.isoformat()
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the dataset's camelCase schema"""
        detail = self.detail
        return {
            'businessName': detail.business_name,
            'rating': detail.rating,
            'reviewCount': detail.review_count,
            'categories': list(detail.categories) if detail.categories else None,
            'priceRange': detail.price_range,
            'address': detail.address,
            'phone': detail.phone,
            'hours': list(detail.hours) if detail.hours else None,
            'photos': list(detail.photos),
            'reviews': [review.to_dict() for review in self.reviews] if self.reviews else None,
            'url': detail.url,
            'scrapedAt': self.scraped_at
        }
