from typing import Iterator, Optional
from bs4 import BeautifulSoup, Tag
from .fallback import first_result
from .patterns import STAR_RATING_RE, REVIEW_DATE_RE, parse_rating
from ..models import Review

REVIEW_CONTAINER_SELECTOR = 'div[class*="review"], li[class*="review"]'
MIN_REVIEW_LENGTH = 20
MAX_REVIEW_LENGTH = 500
TRUNCATION_MARKER = '...'


def _comment_text(container: Tag) -> Optional[str]:
    node = container.select_one('p[class*="comment"], span[class*="comment"]')
    return node.get_text() if node is not None else None


def _first_paragraph_text(container: Tag) -> Optional[str]:
    node = container.select_one('p')
    return node.get_text() if node is not None else None


TEXT_EXTRACTORS = [_comment_text, _first_paragraph_text]


def _author(container: Tag) -> str:
    link = container.select_one('a[href*="/user_details"]')
    author = link.get_text().strip() if link is not None else ''
    return author or 'Anonymous'


def _rating(container: Tag) -> Optional[float]:
    labelled = container.select_one('[role="img"]')
    return parse_rating(labelled.get('aria-label') if labelled is not None else None, STAR_RATING_RE)


def _date(container: Tag) -> Optional[str]:
    for span in container.select('span'):
        text = span.get_text().strip()
        if REVIEW_DATE_RE.search(text):
            return text
    return None


def truncate_review_text(text: str) -> str:
    if len(text) > MAX_REVIEW_LENGTH:
        return text[:MAX_REVIEW_LENGTH] + TRUNCATION_MARKER
    return text


def extract_reviews(soup: BeautifulSoup, max_reviews: int) -> Iterator[Review]:
    """
    Yield reviews from the first max_reviews review containers

    The container list is cut to max_reviews before filtering, so fewer
    reviews may come back when some containers hold only short fragments.
    Containers whose text is empty or at most 20 characters are skipped.
    """
    containers = soup.select(REVIEW_CONTAINER_SELECTOR)[:max(max_reviews, 0)]

    for container in containers:
        text = first_result(TEXT_EXTRACTORS, container) or ''
        if len(text) <= MIN_REVIEW_LENGTH:
            continue

        yield Review(
            author=_author(container),
            rating=_rating(container),
            text=truncate_review_text(text),
            date=_date(container)
        )
