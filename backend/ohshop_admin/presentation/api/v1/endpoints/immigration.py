"""Immigration (user onboarding) statistics endpoints."""

from fastapi import APIRouter, Depends

from ohshop_admin.application.schemas.immigration import ImmigrationStatisticsResponse
from ohshop_admin.application.services import ImmigrationStatisticsService
from ohshop_admin.infrastructure.dependencies import get_current_user, get_immigration_service

router = APIRouter(
    prefix="/immigration",
    tags=["Immigration"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/statistics", response_model=dict[str, list[ImmigrationStatisticsResponse]])
async def statistics(
    service: ImmigrationStatisticsService = Depends(get_immigration_service),
) -> dict[str, list[ImmigrationStatisticsResponse]]:
    """Every entry for OHPLUS, SELLAH and OHSHOP, newest first."""
    grouped = await service.get_statistics()
    return {
        category: [ImmigrationStatisticsResponse.model_validate(s, from_attributes=True) for s in entries]
        for category, entries in grouped.items()
    }


@router.get("/statistics/latest", response_model=dict[str, ImmigrationStatisticsResponse | None])
async def latest_statistics(
    service: ImmigrationStatisticsService = Depends(get_immigration_service),
) -> dict[str, ImmigrationStatisticsResponse | None]:
    latest = await service.get_latest_statistics()
    return {
        category: (
            ImmigrationStatisticsResponse.model_validate(entry, from_attributes=True)
            if entry is not None
            else None
        )
        for category, entry in latest.items()
    }
