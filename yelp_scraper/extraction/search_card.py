"""
Search Card Extraction - Business summaries from search results pages
"""

import logging
from typing import List, Optional
from bs4 import BeautifulSoup, Tag
from .fallback import first_result
from .patterns import NUMBER_RE, CARD_REVIEW_COUNT_RE, parse_rating, parse_count
from ..deduplication import URLCanonicalizer
from ..models import SearchCardSummary

logger = logging.getLogger(__name__)

CARD_SELECTOR = 'div[data-testid="serp-ia-card"], div[data-testid="searchResultBusiness"]'
LISTING_LINK_SELECTOR = 'a[href*="/biz/"]'
NEXT_PAGE_SELECTOR = 'a[aria-label*="Next"]'

_canonicalizer = URLCanonicalizer()


def _text_of(node: Optional[Tag]) -> Optional[str]:
    return node.get_text() if node is not None else None


def _name_from_image_alt(card: Tag) -> Optional[str]:
    image = card.select_one('img[alt]')
    return image.get('alt') if image is not None else None


def _name_from_anchor(card: Tag) -> Optional[str]:
    return _text_of(card.select_one(LISTING_LINK_SELECTOR))


def _name_from_heading(card: Tag) -> Optional[str]:
    return _text_of(card.select_one('h3, h4'))


NAME_EXTRACTORS = [_name_from_image_alt, _name_from_anchor, _name_from_heading]


def _rating_from_aria_label(card: Tag) -> Optional[str]:
    labelled = card.select_one('[aria-label*="star rating"]')
    return labelled.get('aria-label') if labelled is not None else None


def _rating_from_emphasis(card: Tag) -> Optional[str]:
    return _text_of(card.select_one('span[data-font-weight="semibold"]'))


RATING_TEXT_EXTRACTORS = [_rating_from_aria_label, _rating_from_emphasis]


def _review_count_text(card: Tag) -> Optional[str]:
    for node in card.select('span, p'):
        text = node.get_text()
        if 'review' in text.lower():
            return text
    return None


def _listing_link(card: Tag) -> Optional[str]:
    for anchor in card.select(LISTING_LINK_SELECTOR):
        href = anchor.get('href') or ''
        if '/biz/' in href:
            return href
    return None


def extract_search_card(soup: BeautifulSoup, card: Tag) -> Optional[SearchCardSummary]:
    """
    Extract a business summary from one search result card

    Args:
        soup: Parsed search page (kept for signature symmetry with the other extractors)
        card: The card element

    Returns:
        SearchCardSummary, or None when the card has no listing link
    """
    href = _listing_link(card)
    if not href:
        return None

    rating_text = first_result(RATING_TEXT_EXTRACTORS, card)

    return SearchCardSummary(
        business_url=_canonicalizer.canonicalize(href),
        business_name=first_result(NAME_EXTRACTORS, card),
        rating=parse_rating(rating_text, NUMBER_RE),
        review_count=parse_count(_review_count_text(card), CARD_REVIEW_COUNT_RE)
    )


def find_search_cards(soup: BeautifulSoup) -> List[Tag]:
    """Find all result cards on a search page"""
    return soup.select(CARD_SELECTOR)


def extract_search_cards(soup: BeautifulSoup) -> List[SearchCardSummary]:
    """Extract summaries for every card on the page, skipping non-listing cards"""
    summaries = []
    for card in find_search_cards(soup):
        summary = extract_search_card(soup, card)
        if summary is None:
            logger.debug("Skipping card without a listing link")
            continue
        summaries.append(summary)
    return summaries


def find_next_page_url(soup: BeautifulSoup) -> Optional[str]:
    """Locate the pagination link to the next search page"""
    anchor = soup.select_one(NEXT_PAGE_SELECTOR)
    href = anchor.get('href') if anchor is not None else None
    if not href:
        return None
    return _canonicalizer.resolve(href)
