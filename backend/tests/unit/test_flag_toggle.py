"""Unit tests for FlagToggle toast and restore behaviour."""

from dataclasses import dataclass

import pytest

from fakes import RecordingSSE
from ohshop_admin.application.services import (
    CATEGORY_ACTIVE_MESSAGES,
    CATEGORY_FEATURE_MESSAGES,
    FEATURE_MESSAGES,
    PIN_MESSAGES,
    FlagToggle,
)


@dataclass
class Item:
    id: str
    title: str
    pinned: bool = False
    featured: bool = False


@pytest.mark.asyncio
async def test_successful_toggle_broadcasts_success_toast():
    sse = RecordingSSE()
    item = Item("m1", "Launch")

    async def update(current: Item) -> Item:
        return Item(current.id, current.title, pinned=current.pinned)

    result = await FlagToggle(sse).toggle(item, "pinned", update, PIN_MESSAGES)

    assert result.pinned is True
    assert sse.of_type("toast") == [
        {
            "title": "Content pinned",
            "description": '"Launch" has been added to pinned content.',
            "variant": "default",
        }
    ]


@pytest.mark.asyncio
async def test_turning_a_flag_off_uses_off_messages():
    sse = RecordingSSE()
    item = Item("m1", "Launch", featured=True)

    async def update(current: Item) -> Item:
        return current

    await FlagToggle(sse).toggle(item, "featured", update, FEATURE_MESSAGES)
    assert sse.of_type("toast")[0]["title"] == "Content unfeatured"


@pytest.mark.asyncio
async def test_failed_toggle_restores_flag_and_reraises():
    sse = RecordingSSE()
    item = Item("m1", "Launch")

    async def update(current: Item) -> Item:
        raise RuntimeError("offline")

    with pytest.raises(RuntimeError, match="offline"):
        await FlagToggle(sse).toggle(item, "pinned", update, PIN_MESSAGES)

    assert item.pinned is False
    assert sse.of_type("toast") == [
        {"title": "Error", "description": "Failed to pin content: offline", "variant": "destructive"}
    ]


@dataclass
class Category:
    id: str
    name: str
    featured: bool = False
    active: bool = True


@pytest.mark.asyncio
async def test_category_toasts_use_the_category_name():
    sse = RecordingSSE()
    category = Category("c1", "Billboards")

    async def update(current: Category) -> Category:
        return current

    toggle = FlagToggle(sse)
    await toggle.toggle(category, "featured", update, CATEGORY_FEATURE_MESSAGES)
    await toggle.toggle(category, "active", update, CATEGORY_ACTIVE_MESSAGES)

    assert sse.of_type("toast") == [
        {
            "title": "Category featured",
            "description": '"Billboards" has been added to featured categories.',
            "variant": "default",
        },
        {
            "title": "Category deactivated",
            "description": '"Billboards" has been deactivated.',
            "variant": "default",
        },
    ]


@pytest.mark.asyncio
async def test_failed_category_toggle_uses_category_error_text():
    sse = RecordingSSE()
    category = Category("c1", "Billboards")

    async def update(current: Category) -> Category:
        raise RuntimeError("offline")

    with pytest.raises(RuntimeError):
        await FlagToggle(sse).toggle(category, "active", update, CATEGORY_ACTIVE_MESSAGES)

    assert category.active is True
    assert sse.of_type("toast")[0]["description"] == (
        "Failed to update active status. Please try again."
    )
