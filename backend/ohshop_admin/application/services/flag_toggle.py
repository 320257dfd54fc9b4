"""Optimistic toggling of boolean flags with toast notifications.

The local copy is flipped before the backing update runs. On success the
updated item replaces it and a success toast is broadcast; on failure the
flag is put back, an error toast is broadcast and the error propagates.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from ohshop_admin.application.services.sse_manager import SSEManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ToggleMessages:
    """Toast texts for one flag. ``{title}`` is replaced by the item title or name.

    ``error_description`` may use ``{verb}`` and ``{error}``.
    """

    on_title: str
    off_title: str
    on_description: str
    off_description: str
    on_verb: str
    off_verb: str
    error_description: str = "Failed to {verb} content: {error}"


PIN_MESSAGES = ToggleMessages(
    on_title="Content pinned",
    off_title="Content unpinned",
    on_description='"{title}" has been added to pinned content.',
    off_description='"{title}" has been removed from pinned content.',
    on_verb="pin",
    off_verb="unpin",
)

FEATURE_MESSAGES = ToggleMessages(
    on_title="Content featured",
    off_title="Content unfeatured",
    on_description='"{title}" has been added to featured content.',
    off_description='"{title}" has been removed from featured content.',
    on_verb="feature",
    off_verb="unfeature",
)

CATEGORY_FEATURE_MESSAGES = ToggleMessages(
    on_title="Category featured",
    off_title="Category unfeatured",
    on_description='"{title}" has been added to featured categories.',
    off_description='"{title}" has been removed from featured categories.',
    on_verb="feature",
    off_verb="unfeature",
    error_description="Failed to update featured status. Please try again.",
)

CATEGORY_ACTIVE_MESSAGES = ToggleMessages(
    on_title="Category activated",
    off_title="Category deactivated",
    on_description='"{title}" has been activated.',
    off_description='"{title}" has been deactivated.',
    on_verb="activate",
    off_verb="deactivate",
    error_description="Failed to update active status. Please try again.",
)


class FlagToggle:
    def __init__(self, sse: SSEManager):
        self._sse = sse

    async def toggle(
        self,
        item: Any,
        flag: str,
        update: Callable[[Any], Awaitable[T]],
        messages: ToggleMessages,
    ) -> T:
        """Flip ``item.<flag>`` and persist it through ``update(item)``.

        Single attempt; the original exception is re-raised after the flag
        has been restored.
        """
        original = getattr(item, flag)
        setattr(item, flag, not original)
        title = getattr(item, "title", "") or getattr(item, "name", "") or ""

        try:
            updated = await update(item)
        except Exception as e:
            setattr(item, flag, original)
            verb = messages.off_verb if original else messages.on_verb
            logger.warning("Failed to %s %s: %s", verb, getattr(item, "id", item), e)
            await self._sse.toast(
                "Error",
                messages.error_description.format(verb=verb, error=e),
                variant="destructive",
            )
            raise

        if original:
            await self._sse.toast(messages.off_title, messages.off_description.format(title=title))
        else:
            await self._sse.toast(messages.on_title, messages.on_description.format(title=title))
        return updated
