"""
Business Detail Extraction - Best-effort field heuristics for listing pages

Each field is read from the whole document rather than a single container,
since the listing markup varies across layouts. A missing field yields its
absent value (None, 0, empty list) and never raises.
"""

import logging
from typing import List, Optional
from bs4 import BeautifulSoup
from .fallback import first_result
from .patterns import (
    STAR_RATING_RE, PAGE_REVIEW_COUNT_RE, PRICE_RANGE_RE, PHONE_RE,
    WEEKDAY_RE, DIGIT_RE, parse_rating, parse_count
)
from ..models import BusinessDetail, MAX_PHOTOS

logger = logging.getLogger(__name__)

MAX_ADDRESS_LENGTH = 200
CATEGORY_LINK_SELECTOR = 'a[href*="cflt="]'
HOURS_SELECTOR = 'tbody tr, div[class*="hours"] p, div[class*="businessHours"] p'
PHOTO_SELECTOR = 'img[src*="bphoto"]'


def extract_name(soup: BeautifulSoup) -> str:
    heading = soup.select_one('h1')
    return heading.get_text().strip() if heading is not None else ""


def _star_label_from_role_img(soup: BeautifulSoup) -> Optional[float]:
    for node in soup.select('[role="img"][aria-label]'):
        rating = parse_rating(node.get('aria-label'), STAR_RATING_RE)
        if rating is not None:
            return rating
    return None


def _star_label_from_any_aria(soup: BeautifulSoup) -> Optional[float]:
    for node in soup.select('[aria-label*="star rating"]'):
        rating = parse_rating(node.get('aria-label'), STAR_RATING_RE)
        if rating is not None:
            return rating
    return None


RATING_EXTRACTORS = [_star_label_from_role_img, _star_label_from_any_aria]


def extract_rating(soup: BeautifulSoup) -> Optional[float]:
    return first_result(RATING_EXTRACTORS, soup)


def extract_review_count(soup: BeautifulSoup) -> int:
    body = soup.body or soup
    count = parse_count(body.get_text(' '), PAGE_REVIEW_COUNT_RE)
    return count if count is not None else 0


def extract_categories(soup: BeautifulSoup) -> Optional[List[str]]:
    categories = []
    for anchor in soup.select(CATEGORY_LINK_SELECTOR):
        category = anchor.get_text().strip()
        if category and category not in categories:
            categories.append(category)
    return categories or None


def extract_price_range(soup: BeautifulSoup) -> Optional[str]:
    for span in soup.select('span'):
        text = span.get_text().strip()
        if PRICE_RANGE_RE.match(text):
            return text
    return None


def is_address_like(text: str) -> bool:
    """Comma separated, contains a digit, and short enough to be an address"""
    return (
        ',' in text
        and DIGIT_RE.search(text) is not None
        and len(text) < MAX_ADDRESS_LENGTH
        and len(text.split(',')) >= 2
    )


def select_address(candidates: List[str]) -> Optional[str]:
    """Pick the shortest address-shaped candidate; earliest wins ties"""
    address = None
    for text in candidates:
        if is_address_like(text) and (address is None or len(text) < len(address)):
            address = text
    return address


def extract_address(soup: BeautifulSoup) -> Optional[str]:
    return select_address([node.get_text().strip() for node in soup.select('p, div, span')])


def extract_phone(soup: BeautifulSoup) -> Optional[str]:
    for node in soup.select('p, div, span, a'):
        match = PHONE_RE.search(node.get_text().strip())
        if match:
            return match.group(0)
    return None


def extract_hours(soup: BeautifulSoup) -> Optional[List[str]]:
    hours = []
    for node in soup.select(HOURS_SELECTOR):
        text = node.get_text().strip()
        if text and WEEKDAY_RE.search(text):
            hours.append(text)
    return hours or None


def extract_photos(soup: BeautifulSoup) -> List[str]:
    photos = []
    for image in soup.select(PHOTO_SELECTOR):
        src = image.get('src')
        if src and src not in photos:
            photos.append(src)
            if len(photos) >= MAX_PHOTOS:
                break
    return photos


def extract_business_detail(soup: BeautifulSoup, url: str) -> BusinessDetail:
    """
    Extract all detail fields from a rendered business page

    Args:
        soup: Parsed detail page
        url: URL the page was loaded from

    Returns:
        BusinessDetail with every field populated or at its absent value
    """
    detail = BusinessDetail(
        url=url,
        business_name=extract_name(soup),
        rating=extract_rating(soup),
        review_count=extract_review_count(soup),
        categories=extract_categories(soup),
        price_range=extract_price_range(soup),
        address=extract_address(soup),
        phone=extract_phone(soup),
        hours=extract_hours(soup),
        photos=extract_photos(soup)
    )

    logger.debug(f"Extracted detail for {url}: name={detail.business_name!r}, rating={detail.rating}")
    return detail
