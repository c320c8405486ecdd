from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class Review:
    """A single review scraped from a business page"""
    text: str
    author: str = "Anonymous"
    rating: Optional[float] = None
    date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'author': self.author,
            'rating': self.rating,
            'text': self.text,
            'date': self.date
        }
