"""
Data model for scraped listings
"""

from .search_card_summary import SearchCardSummary
from .business_detail import BusinessDetail, MAX_PHOTOS
from .review import Review
from .output_record import OutputRecord

__all__ = [
    'SearchCardSummary',
    'BusinessDetail',
    'MAX_PHOTOS',
    'Review',
    'OutputRecord'
]
