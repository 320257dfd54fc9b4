"""Unit tests for the ImmigrationStatisticsService."""

import pytest

from fakes import FakeDocumentStore
from ohshop_admin.application.services import ImmigrationStatisticsService


@pytest.fixture
def service() -> ImmigrationStatisticsService:
    store = FakeDocumentStore(
        {
            "immigration_statistics": {
                "a": {"type": "OHPLUS", "total_users": 10, "created": "2024-01-01T00:00:00+00:00"},
                "b": {"type": "OHPLUS", "total_users": 12, "created": "2024-02-01T00:00:00+00:00",
                      "user_device": {"android": 7, "ios": 5}},
                "c": {"type": "SELLAH", "total_users": 3, "created": "2024-01-15T00:00:00+00:00"},
            }
        }
    )
    return ImmigrationStatisticsService(store)


@pytest.mark.asyncio
async def test_statistics_grouped_newest_first(service: ImmigrationStatisticsService):
    stats = await service.get_statistics()
    assert [s.id for s in stats["OHPLUS"]] == ["b", "a"]
    assert [s.id for s in stats["SELLAH"]] == ["c"]
    assert stats["OHSHOP"] == []


@pytest.mark.asyncio
async def test_latest_statistics(service: ImmigrationStatisticsService):
    latest = await service.get_latest_statistics()
    assert latest["OHPLUS"].total_users == 12
    assert latest["OHPLUS"].user_device.android == 7
    assert latest["OHPLUS"].user_device.web == 0
    assert latest["OHSHOP"] is None
