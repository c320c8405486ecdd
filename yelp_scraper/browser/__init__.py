"""
Browser rendering collaborators
"""

from .renderer import PageRenderer, PlaywrightRenderer
from .result import RenderResult, SettleOutcome
from .proxy import ProxyConfiguration

__all__ = [
    'PageRenderer',
    'PlaywrightRenderer',
    'RenderResult',
    'SettleOutcome',
    'ProxyConfiguration'
]
