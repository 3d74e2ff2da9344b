"""
Pytest configuration and fixtures for Offseason onboarding tests.
"""

import os

import pytest
from unittest.mock import MagicMock

# Set test environment before importing offseason modules
os.environ["OFFSEASON_ENV"] = "development"
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-key-not-real")

from onboarding.errors import StoreUnavailableError
from onboarding.record import ProgressRecord
from onboarding.steps import Step


class InMemoryProfileStore:
    """
    Profile store kept in a dict of profile rows.

    Rows go through the same to_profile_update/from_profile mapping as the
    Supabase store, so tests exercise the real storage layout.
    """

    def __init__(self, rows: dict[str, dict] | None = None):
        self.rows: dict[str, dict] = dict(rows or {})
        self.saves = 0
        self.fail = False

    async def load(self, user_id: str) -> ProgressRecord | None:
        if self.fail:
            raise StoreUnavailableError(user_id, "load")
        row = self.rows.get(user_id)
        return ProgressRecord.from_profile(row) if row else None

    async def save(self, record: ProgressRecord, fields: dict | None = None) -> None:
        if self.fail:
            raise StoreUnavailableError(record.user_id, "save")
        row = self.rows.setdefault(record.user_id, {"id": record.user_id})
        row.update(fields or {})
        row.update(record.to_profile_update())
        self.saves += 1

    async def create(self, user_id: str, fields: dict | None = None) -> ProgressRecord:
        record = ProgressRecord(user_id=user_id, current_step=Step.PHONE_VERIFIED.value)
        await self.save(record, fields)
        return record


@pytest.fixture
def memory_store():
    """Empty in-memory profile store."""
    return InMemoryProfileStore()


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.insert.return_value = mock_table
    mock_table.update.return_value = mock_table
    mock_table.upsert.return_value = mock_table
    mock_table.delete.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    return mock_client


@pytest.fixture
def sample_profile_row():
    """Profile row for a user partway through the activity screens."""
    return {
        "id": "user-1",
        "first_name": "Sam",
        "last_name": "Rivera",
        "phone_number": "+15555550100",
        "onboarding_step": "running_style",
        "selected_activities": ["Running", "Yoga", "Swimming"],
        "registration_completed_at": None,
        "onboarding_data": {
            "selected_goals": ["get-faster", "push-myself"],
            "_completed_activities": [],
            "_completed_goals": [],
            "physical_info": {"height_feet": 5, "height_inches": 10, "weight_lbs": 165},
            "running": {"style": "both"},
        },
        "created_at": "2026-10-01T12:00:00+00:00",
        "updated_at": "2026-10-02T08:30:00+00:00",
    }
