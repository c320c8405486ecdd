"""
Deduplication and admission control for business URLs
"""

from .frontier import FrontierStore
from .url_canonicalizer import URLCanonicalizer, SITE_ORIGIN

__all__ = [
    'FrontierStore',
    'URLCanonicalizer',
    'SITE_ORIGIN'
]
