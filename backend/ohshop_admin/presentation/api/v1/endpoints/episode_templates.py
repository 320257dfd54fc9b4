"""Episode template endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ohshop_admin.application.schemas.episode import (
    EpisodeTemplateCreate,
    EpisodeTemplateResponse,
    EpisodeTemplateUpdate,
)
from ohshop_admin.application.services import EpisodeTemplateService
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError
from ohshop_admin.infrastructure.dependencies import (
    get_current_user,
    get_episode_template_service,
)

router = APIRouter(prefix="/episode-templates", tags=["Episode Templates"])


def _to_response(template) -> EpisodeTemplateResponse:
    return EpisodeTemplateResponse.model_validate(template, from_attributes=True)


@router.get("", response_model=list[EpisodeTemplateResponse])
async def list_templates(
    created_by: str | None = Query(None),
    service: EpisodeTemplateService = Depends(get_episode_template_service),
    _: str = Depends(get_current_user),
) -> list[EpisodeTemplateResponse]:
    return [_to_response(t) for t in await service.list_templates(created_by)]


@router.get("/mine", response_model=list[EpisodeTemplateResponse])
async def my_templates(
    service: EpisodeTemplateService = Depends(get_episode_template_service),
    user_id: str = Depends(get_current_user),
) -> list[EpisodeTemplateResponse]:
    return [_to_response(t) for t in await service.list_templates(user_id)]


@router.get("/{template_id}", response_model=EpisodeTemplateResponse)
async def get_template(
    template_id: str,
    service: EpisodeTemplateService = Depends(get_episode_template_service),
    _: str = Depends(get_current_user),
) -> EpisodeTemplateResponse:
    try:
        template = await service.get_template(template_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(template)


@router.post("", response_model=EpisodeTemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    data: EpisodeTemplateCreate,
    service: EpisodeTemplateService = Depends(get_episode_template_service),
    user_id: str = Depends(get_current_user),
) -> EpisodeTemplateResponse:
    try:
        template = await service.create_template(data, user_id)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return _to_response(template)


@router.put("/{template_id}", response_model=EpisodeTemplateResponse)
async def update_template(
    template_id: str,
    data: EpisodeTemplateUpdate,
    service: EpisodeTemplateService = Depends(get_episode_template_service),
    _: str = Depends(get_current_user),
) -> EpisodeTemplateResponse:
    try:
        template = await service.update_template(template_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return _to_response(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: str,
    service: EpisodeTemplateService = Depends(get_episode_template_service),
    _: str = Depends(get_current_user),
) -> None:
    try:
        await service.delete_template(template_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
