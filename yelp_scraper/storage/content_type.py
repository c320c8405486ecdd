from enum import Enum


class ContentType(Enum):
    """Enum for key-value store content types"""
    HTML = 'html'
    JSON = 'json'
    TEXT = 'text'
