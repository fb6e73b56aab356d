# mummytrack/database/mongo_state.py
import logging
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from mummytrack.database.state_store import StateStore

logger = logging.getLogger(__name__)


class MongoStateStore(StateStore):
    def __init__(self, db: AsyncIOMotorDatabase, collection: str = "app_state"):
        self.col = db[collection]

    async def load(self, key: str) -> Optional[str]:
        try:
            d = await self.col.find_one({"key": key})
        except PyMongoError:
            logger.exception("Lettura fallita per la chiave %s", key)
            return None
        if not d:
            return None
        value = d.get("value")
        return value if isinstance(value, str) else None

    async def save(self, key: str, text: str) -> bool:
        """
        Upsert del blob: un documento per chiave, nessun merge col contenuto precedente.
        """
        try:
            await self.col.update_one(
                {"key": key},
                {"$set": {"value": text, "updatedAt": datetime.now(timezone.utc)}},
                upsert=True,
            )
        except PyMongoError:
            logger.exception("Salvataggio fallito per la chiave %s", key)
            return False
        return True

    async def ensure_indexes(self):
        await self.col.create_index("key", unique=True)
