"""Activity logger: append-only audit trail of console actions."""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from crew_api.exceptions import CrewAPIError
from crew_api.models.domain.activity import ActivityLog, LogCategory
from crew_api.repositories.store import RecordStore

logger = logging.getLogger(__name__)


class LogAction:
    """Standard action labels written to the activity feed."""

    # Roster lifecycle
    ARCHIVE = "Archivage"
    AUTO_ARCHIVE = "Archivage automatique"
    DELETE = "Suppression"
    RESTORE = "Restauration"
    PURGE = "Destruction"
    EMPTY_TRASH = "Corbeille"
    REINSTATE = "Réintégration"
    FINALIZE_ARCHIVE = "Finalisation Archive"

    # Employee records
    RECRUIT = "Recrutement"
    UPDATE_RECORD = "Mise à jour Dossier"
    UPDATE_DOCUMENT = "Update Document"

    # Settings and planning
    UPDATE_CATALOG = "Paramètres"
    AI_PLANNING = "Planification IA"


class ActivityLogger:
    """Records activity log entries.

    Each entry is persisted through the record store and prepended to an
    in-memory feed (newest first). A persistence failure never fails the
    triggering operation: it is logged and the entry is kept in
    ``failed_entries`` so callers can observe it.
    """

    def __init__(self, store: RecordStore, feed_limit: int = 100) -> None:
        """Initialize logger.

        Args:
            store: Record store used to persist entries
            feed_limit: Maximum size of the in-memory feed
        """
        self.store = store
        self.feed_limit = feed_limit
        self.feed: list[ActivityLog] = []
        self.failed_entries: list[ActivityLog] = []

    async def record(
        self,
        actor_name: str,
        action: str,
        details: str,
        category: LogCategory,
    ) -> ActivityLog:
        """Record one activity log entry.

        Args:
            actor_name: Display name of the acting user
            action: Action label (use LogAction constants)
            details: Human-readable detail
            category: Log category

        Returns:
            The created entry, whether or not it was persisted
        """
        entry = ActivityLog(
            id=f"LOG-{uuid4().hex}",
            timestamp=datetime.now(timezone.utc),
            user=actor_name,
            action=action,
            details=details,
            category=category,
        )
        self.feed = [entry, *self.feed][: self.feed_limit]

        try:
            await self.store.add_log(entry)
            logger.debug("Activity logged: %s / %s by %s", category.value, action, actor_name)
        except CrewAPIError as e:
            # Never fail the main operation due to activity logging
            logger.error("Failed to write activity log %s: %s", entry.id, e.message)
            self.failed_entries.append(entry)

        return entry

    async def load_feed(self) -> list[ActivityLog]:
        """Replace the in-memory feed with the latest persisted entries.

        Returns:
            The feed, or the current in-memory feed if the store fails
        """
        try:
            self.feed = await self.store.get_logs(limit=self.feed_limit)
        except CrewAPIError as e:
            logger.warning("Could not load activity feed: %s", e.message)
        return list(self.feed)

    async def list_logs(
        self,
        limit: int = 50,
        offset: int = 0,
        category: LogCategory | None = None,
    ) -> list[ActivityLog]:
        """Page through persisted entries, newest first."""
        return await self.store.get_logs(
            limit=limit,
            offset=offset,
            category=category.value if category else None,
        )

    async def count_logs(self, category: LogCategory | None = None) -> int:
        """Number of persisted entries, optionally within one category."""
        return await self.store.count_logs(category.value if category else None)
