"""
Storage and persistence modules
"""

from .dataset_storage import DatasetStorage
from .content_type import ContentType

__all__ = [
    'DatasetStorage',
    'ContentType'
]
