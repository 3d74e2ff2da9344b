"""
Profile Store.

Loads and saves onboarding progress on the Supabase profiles table.
Any failure talking to Supabase is raised as StoreUnavailableError so that
callers retry instead of resolving against a guessed record.
"""

import logging
from datetime import datetime, timezone

from supabase import Client

from onboarding.errors import StoreUnavailableError
from onboarding.record import ProgressRecord
from onboarding.steps import Step

logger = logging.getLogger(__name__)


class ProfileStore:
    """Progress records keyed by user id."""

    def __init__(self, client: Client | None = None, table: str | None = None):
        self._client = client
        self._table = table

    @property
    def client(self) -> Client:
        if self._client is None:
            from offseason.db.client import get_service_client
            self._client = get_service_client()
        return self._client

    @property
    def table(self) -> str:
        if self._table is None:
            from offseason.config import settings
            self._table = settings.profiles_table
        return self._table

    async def load(self, user_id: str) -> ProgressRecord | None:
        """
        Load a user's progress record.

        Returns None when the user has no profile row yet.
        """
        try:
            result = self.client.table(self.table).select("*").eq("id", user_id).execute()
        except Exception as e:
            logger.error(f"Failed to load profile for {user_id}: {e}")
            raise StoreUnavailableError(user_id, "load", e) from e

        if not result.data:
            logger.info(f"No profile found for user {user_id}")
            return None

        return ProgressRecord.from_profile(result.data[0])

    async def save(self, record: ProgressRecord, fields: dict | None = None) -> None:
        """
        Persist a record's progress columns.

        `fields` carries extra profile columns (name, age, ...) written in the
        same request.
        """
        row = {
            **(fields or {}),
            **record.to_profile_update(),
            "id": record.user_id,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }

        try:
            self.client.table(self.table).upsert(row).execute()
        except Exception as e:
            logger.error(f"Failed to save profile for {record.user_id}: {e}")
            raise StoreUnavailableError(record.user_id, "save", e) from e

        logger.info(f"Saved onboarding progress for {record.user_id} at step {record.current_step}")

    async def create(self, user_id: str, fields: dict | None = None) -> ProgressRecord:
        """
        Insert the initial profile row after phone verification.

        The row starts at PHONE_VERIFIED with nothing selected.
        """
        record = ProgressRecord(user_id=user_id, current_step=Step.PHONE_VERIFIED.value)
        row = {
            **(fields or {}),
            **record.to_profile_update(),
            "id": user_id,
        }

        try:
            self.client.table(self.table).insert(row).execute()
        except Exception as e:
            logger.error(f"Failed to create profile for {user_id}: {e}")
            raise StoreUnavailableError(user_id, "create", e) from e

        logger.info(f"Created initial profile for {user_id}")
        return record
