import re
from typing import Optional, Pattern

NUMBER_RE = re.compile(r'(\d+\.?\d*)')
STAR_RATING_RE = re.compile(r'(\d+\.?\d*)\s*star', re.IGNORECASE)
CARD_REVIEW_COUNT_RE = re.compile(r'(\d+[,.]?\d*)\s*review', re.IGNORECASE)
PAGE_REVIEW_COUNT_RE = re.compile(r'(\d+)\s*review', re.IGNORECASE)
PRICE_RANGE_RE = re.compile(r'^\$+$')
PHONE_RE = re.compile(r'\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}')
WEEKDAY_RE = re.compile(r'Mon|Tue|Wed|Thu|Fri|Sat|Sun', re.IGNORECASE)
REVIEW_DATE_RE = re.compile(r'\d{1,2}/\d{1,2}/\d{4}')
DIGIT_RE = re.compile(r'\d')

MIN_RATING = 0.0
MAX_RATING = 5.0


def parse_rating(text: Optional[str], pattern: Pattern = NUMBER_RE) -> Optional[float]:
    """Pull the first numeric token out of text; None if missing or outside 0-5"""
    if not text:
        return None

    match = pattern.search(text)
    if not match:
        return None

    try:
        rating = float(match.group(1))
    except ValueError:
        return None

    if not MIN_RATING <= rating <= MAX_RATING:
        return None
    return rating


def parse_count(text: Optional[str], pattern: Pattern) -> Optional[int]:
    """Pull an integer count out of text, ignoring thousands separators"""
    if not text:
        return None

    match = pattern.search(text)
    if not match:
        return None

    digits = re.sub(r'[,.]', '', match.group(1))
    return int(digits) if digits.isdigit() else None
