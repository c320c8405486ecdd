from dataclasses import dataclass, field
from typing import Optional, List

MAX_PHOTOS = 10


@dataclass
class BusinessDetail:
    """Fields extracted from a business detail page"""
    url: str
    business_name: str = ""
    rating: Optional[float] = None
    review_count: int = 0
    categories: Optional[List[str]] = None
    price_range: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    hours: Optional[List[str]] = None
    photos: List[str] = field(default_factory=list)

    def __post_init__(self):
        if len(self.photos) > MAX_PHOTOS:
            self.photos = self.photos[:MAX_PHOTOS]
