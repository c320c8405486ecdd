import json
import asyncio
import logging
import aiofiles
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, List, Union
from .content_type import ContentType
from ..models import OutputRecord

logger = logging.getLogger(__name__)


class DatasetStorage:
    """
    Append-only dataset of scraped records plus a small key-value store

    Layout:
    - base_path/dataset.jsonl          one JSON record per line
    - base_path/key_value_store/KEY.ext  named blobs (debug HTML, metrics)
    """

    DATASET_FILENAME = 'dataset.jsonl'

    def __init__(self, base_path='crawl_data', purge_on_start: bool = True):
        self.base_path = Path(base_path)
        self.purge_on_start = purge_on_start
        self.dataset_path = self.base_path / self.DATASET_FILENAME
        self.key_value_path = self.base_path / 'key_value_store'
        self.item_count = 0
        self._write_lock = asyncio.Lock()
        self.setup_directories()

    def setup_directories(self):
        """Create directory structure; start an empty dataset unless keeping earlier runs"""
        self.key_value_path.mkdir(parents=True, exist_ok=True)
        if self.dataset_path.exists() and self.purge_on_start:
            logger.info(f"Purging dataset from a previous run: {self.dataset_path}")
            self.dataset_path.unlink()
        elif self.dataset_path.exists():
            with open(self.dataset_path, 'r', encoding='utf-8') as f:
                self.item_count = sum(1 for line in f if line.strip())

    async def push_data(self, record: Union[OutputRecord, Dict[str, Any]]) -> bool:
        """Append one record to the dataset

        Args:
            record: OutputRecord or an already serialized dict

        Returns:
            True if written, False if the write failed (the failure is logged)
        """
        data = record.to_dict() if isinstance(record, OutputRecord) else record

        try:
            line = json.dumps(data, ensure_ascii=False)
            async with self._write_lock:
                async with aiofiles.open(self.dataset_path, 'a', encoding='utf-8') as f:
                    await f.write(line + '\n')
                self.item_count += 1
            return True

        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error pushing record to dataset: {e}")
            return False

    def get_file_path(self, key: str, content_type: ContentType) -> Path:
        """Path for a key-value store entry"""
        extensions = {
            ContentType.HTML: '.html',
            ContentType.JSON: '.json',
            ContentType.TEXT: '.txt'
        }
        return self.key_value_path / f"{key}{extensions.get(content_type, '.txt')}"

    async def set_value(self, key: str, content: Union[str, Dict[str, Any]],
                        content_type: ContentType = ContentType.JSON) -> str:
        """Save a value under key and return the file path, or None if the save failed"""
        file_path = self.get_file_path(key, content_type)

        try:
            if content_type == ContentType.JSON and not isinstance(content, str):
                content = json.dumps(content, indent=2, ensure_ascii=False, default=str)

            async with aiofiles.open(file_path, 'w', encoding='utf-8') as f:
                await f.write(content)
            return str(file_path)

        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving key-value entry {key}: {e}")
            return None

    def read_items(self) -> List[Dict[str, Any]]:
        """Read every record in the dataset"""
        if not self.dataset_path.exists():
            return []

        with open(self.dataset_path, 'r', encoding='utf-8') as f:
            return [json.loads(line) for line in f if line.strip()]

    def get_info(self) -> Dict[str, Any]:
        """Get dataset information"""
        size = self.dataset_path.stat().st_size if self.dataset_path.exists() else 0
        return {
            'item_count': self.item_count,
            'path': str(self.dataset_path),
            'size_mb': round(size / (1024 * 1024), 2),
            'checked_at': datetime.now().isoformat()
        }
