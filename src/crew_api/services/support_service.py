"""Support inquiry service."""

import logging

from crew_api.models.domain.inquiry import Inquiry
from crew_api.repositories.store import RecordStore

logger = logging.getLogger(__name__)


class SupportService:
    """Service for support requests sent from the console."""

    def __init__(self, store: RecordStore) -> None:
        """Initialize service with the record store."""
        self.store = store

    async def submit(self, inquiry: Inquiry) -> Inquiry:
        """Persist an inquiry with status ``open``.

        Raises:
            PersistenceError: If the store rejects the inquiry
        """
        saved = await self.store.add_inquiry(inquiry.model_copy(update={"status": "open"}))
        logger.info("Support inquiry %s received (%s)", saved.id, saved.subject)
        return saved
