"""Member endpoints for the three platforms (members, OH! Plus, Sellah)."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ohshop_admin.application.schemas.common import PaginationResponse
from ohshop_admin.application.schemas.member import (
    MemberCountsResponse,
    MemberListResponse,
    MemberResponse,
)
from ohshop_admin.application.services import MemberService
from ohshop_admin.domain.entities.member import MemberPlatform
from ohshop_admin.domain.entities.pagination import PageRequest
from ohshop_admin.domain.exceptions import EntityNotFoundError
from ohshop_admin.infrastructure.dependencies import get_current_user, get_member_service

router = APIRouter(
    prefix="/members",
    tags=["Members"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/counts", response_model=MemberCountsResponse)
async def member_counts(
    service: MemberService = Depends(get_member_service),
) -> MemberCountsResponse:
    return MemberCountsResponse(**await service.count_members())


@router.get("/{platform}", response_model=MemberListResponse)
async def list_members(
    platform: MemberPlatform,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    service: MemberService = Depends(get_member_service),
) -> MemberListResponse:
    members, pagination = await service.list_members(
        platform, PageRequest(page=page, page_size=page_size)
    )
    return MemberListResponse(
        members=[MemberResponse.model_validate(m, from_attributes=True) for m in members],
        pagination=PaginationResponse.model_validate(pagination, from_attributes=True),
    )


@router.get("/{platform}/{member_id}", response_model=MemberResponse)
async def get_member(
    platform: MemberPlatform,
    member_id: str,
    service: MemberService = Depends(get_member_service),
) -> MemberResponse:
    try:
        member = await service.get_member(platform, member_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MemberResponse.model_validate(member, from_attributes=True)
