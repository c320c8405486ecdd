import logging
from typing import Iterable
from .models import BusinessDetail, OutputRecord, Review
from .storage import DatasetStorage

logger = logging.getLogger(__name__)


class ResultEmitter:
    """Shapes detail records and forwards them to the dataset"""

    def __init__(self, storage: DatasetStorage):
        self.storage = storage
        self.emitted_count = 0

    async def emit(self, detail: BusinessDetail, reviews: Iterable[Review] = ()) -> OutputRecord:
        """Build the output record, stamp it, and push it to the sink

        Sink failures are logged by the sink and are not retried here.
        """
        record = OutputRecord.create(detail, reviews)

        if await self.storage.push_data(record):
            self.emitted_count += 1
            logger.info(f"   ✅ Saved: {detail.business_name}")
        else:
            logger.warning(f"   Record for {detail.url} was not persisted")

        return record
