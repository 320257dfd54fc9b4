"""Application service (use case) for platform member listings.

Members live in two collections: OOH! Shop members in ``users`` and the
OH! Plus / Sellah accounts in ``iboard_users``, told apart by ``type``.
"""

import logging
import time

from ohshop_admin.application.interfaces import DocumentStore
from ohshop_admin.domain.entities.document import FieldFilter, OrderBy
from ohshop_admin.domain.entities.member import Member, MemberPlatform
from ohshop_admin.domain.entities.pagination import PageRequest, Pagination
from ohshop_admin.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)

USERS = "users"
IBOARD_USERS = "iboard_users"
COMPANIES = "companies"

# Type spellings found in legacy data, used only for the dashboard counts.
MEMBER_TYPES = ["MEMBERS", "Members", "members", "MEMBER", "Member", "member", "USER", "User", "user"]
OH_PLUS_TYPES = ["OHPLUS", "OHPlus", "ohplus", "OH_PLUS", "oh_plus", "PLUS", "Plus"]
SELLAH_TYPES = ["SELLAH", "Sellah", "sellah", "SELLER", "Seller", "seller"]

NO_COMPANY = "No Company"
COMPANY_NOT_FOUND = "Company Not Found"
UNKNOWN_COMPANY = "Unknown Company"


class CompanyNameCache:
    """Company id → name, with entries expiring after ``ttl_seconds``."""

    def __init__(self, ttl_seconds: float = 600.0):
        self._ttl = ttl_seconds
        self._entries: dict[str, tuple[str, float]] = {}

    def get(self, company_id: str) -> str | None:
        entry = self._entries.get(company_id)
        if entry is None:
            return None
        name, stored_at = entry
        if time.monotonic() - stored_at >= self._ttl:
            del self._entries[company_id]
            return None
        return name

    def put(self, company_id: str, name: str) -> None:
        self._entries[company_id] = (name, time.monotonic())

    def clear(self) -> None:
        self._entries.clear()


_company_names = CompanyNameCache()


def _listing(platform: MemberPlatform) -> tuple[str, list[FieldFilter], OrderBy]:
    if platform is MemberPlatform.OH_PLUS:
        return IBOARD_USERS, [FieldFilter("type", "==", "OHPLUS")], OrderBy("created", descending=True)
    if platform is MemberPlatform.SELLAH:
        return IBOARD_USERS, [FieldFilter("type", "==", "SELLAH")], OrderBy("created_at", descending=True)
    return (
        USERS,
        [FieldFilter("type", "in", ["MEMBERS", "Members"]), FieldFilter("deleted", "==", False)],
        OrderBy("created_time", descending=True),
    )


class MemberService:
    """Read-only access to members of the three platforms."""

    def __init__(self, store: DocumentStore, company_names: CompanyNameCache | None = None):
        self._store = store
        self._company_names = company_names or _company_names

    async def list_members(
        self, platform: MemberPlatform, request: PageRequest
    ) -> tuple[list[Member], Pagination]:
        collection, filters, order = _listing(platform)
        total = await self._store.count(collection, filters)
        docs = await self._store.query(
            collection, filters, [order], offset=request.offset, limit=request.page_size
        )
        members = [Member.from_document(d, platform) for d in docs]
        await self._attach_company_names(members)
        return members, Pagination.build(request, total)

    async def get_member(self, platform: MemberPlatform, member_id: str) -> Member:
        collection = USERS if platform is MemberPlatform.MEMBERS else IBOARD_USERS
        doc = await self._store.get(collection, member_id)
        if doc is None:
            raise EntityNotFoundError("Member", member_id)
        member = Member.from_document(doc, platform)
        await self._attach_company_names([member])
        return member

    async def count_members(self) -> dict[str, int]:
        return {
            "members": await self._store.count(USERS, [FieldFilter("type", "in", MEMBER_TYPES)]),
            "oh_plus": await self._store.count(
                IBOARD_USERS, [FieldFilter("type", "in", OH_PLUS_TYPES)]
            ),
            "sellah": await self._store.count(
                IBOARD_USERS, [FieldFilter("type", "in", SELLAH_TYPES)]
            ),
        }

    async def get_company_name(self, company_id: str | None) -> str:
        if not company_id:
            return NO_COMPANY
        cached = self._company_names.get(company_id)
        if cached is not None:
            return cached

        doc = await self._store.get(COMPANIES, company_id)
        name = COMPANY_NOT_FOUND if doc is None else doc.data.get("name") or UNKNOWN_COMPANY
        self._company_names.put(company_id, name)
        return name

    async def get_company_names(self, company_ids: list[str]) -> dict[str, str]:
        return {cid: await self.get_company_name(cid) for cid in dict.fromkeys(company_ids)}

    async def _attach_company_names(self, members: list[Member]) -> None:
        ids = [m.company_id for m in members if m.company_id and not m.company_name]
        if not ids:
            return
        names = await self.get_company_names(ids)
        for member in members:
            if member.company_id in names and not member.company_name:
                member.company_name = names[member.company_id]
