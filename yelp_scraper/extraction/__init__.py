"""
Extraction layer - pure functions from parsed pages to structured records
"""

from .fallback import first_present, first_result
from .search_card import extract_search_card, extract_search_cards, find_search_cards, find_next_page_url
from .business_detail import extract_business_detail, select_address
from .reviews import extract_reviews

__all__ = [
    'first_present',
    'first_result',
    'extract_search_card',
    'extract_search_cards',
    'find_search_cards',
    'find_next_page_url',
    'extract_business_detail',
    'select_address',
    'extract_reviews'
]
