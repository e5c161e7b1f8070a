import asyncio
import logging

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from app.config import settings
from app.errors import StoreUnavailable

logger = logging.getLogger(__name__)


class MongoConnection:
    """
    Process-wide, lazily established connection to the product store.

    ensure_connected() is idempotent: a no-op once connected, and concurrent
    callers share a single connection attempt.
    """

    def __init__(
        self,
        uri: str | None = None,
        db_name: str | None = None,
        collection_name: str | None = None,
        server_selection_timeout_ms: int | None = None,
        client_factory=AsyncMongoClient,
    ):
        self.uri = settings.MONGODB_URI if uri is None else uri
        self.db_name = db_name or settings.DB_NAME
        self.collection_name = collection_name or settings.COLLECTION_NAME
        self.server_selection_timeout_ms = server_selection_timeout_ms or settings.SERVER_SELECTION_TIMEOUT_MS
        self._client_factory = client_factory

        self.client = None
        self.connected = False
        self.disabled = False
        self._lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        """False when no store is configured, or it was dropped at startup."""
        return bool(self.uri) and not self.disabled

    @property
    def collection(self):
        if self.client is None:
            raise StoreUnavailable("Product store is not connected")
        return self.client[self.db_name][self.collection_name]

    async def ensure_connected(self) -> bool:
        """Returns True when the store is usable, False when running without one."""
        if not self.enabled:
            return False
        if self.connected:
            return True

        async with self._lock:
            if self.connected:
                return True

            if self.client is None:
                self.client = self._client_factory(
                    self.uri,
                    serverSelectionTimeoutMS=self.server_selection_timeout_ms,
                )
            try:
                await self.client.admin.command("ping")
            except PyMongoError as e:
                logger.error(f"Could not connect to MongoDB database {self.db_name}: {e}")
                raise StoreUnavailable(str(e)) from e

            self.connected = True
            logger.info(f"Connected to MongoDB database {self.db_name}, collection {self.collection_name}")
            return True

    def disable(self, reason: str) -> None:
        logger.warning(f"⚠ Product store disabled, serving fallback dataset: {reason}")
        self.disabled = True

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()
        self.client = None
        self.connected = False


mongo = MongoConnection()
