"""Client (company) endpoints: paginated listing, onboarding and maintenance."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ohshop_admin.application.schemas.client import (
    ClientCreate,
    ClientCreatedResponse,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdate,
    ProjectResponse,
    SubscriptionResponse,
)
from ohshop_admin.application.schemas.common import PaginationResponse
from ohshop_admin.application.services import ClientService
from ohshop_admin.domain.entities.pagination import PageRequest
from ohshop_admin.domain.exceptions import EntityNotFoundError, ValidationError
from ohshop_admin.infrastructure.dependencies import get_client_service, get_current_user

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=CompanyListResponse)
async def list_clients(
    page: int = Query(1, ge=1),
    page_size: int = Query(15, ge=1, le=100, alias="pageSize"),
    search: str | None = Query(None, description="Company name prefix"),
    service: ClientService = Depends(get_client_service),
    _: str = Depends(get_current_user),
) -> CompanyListResponse:
    companies, pagination = await service.list_companies(
        PageRequest(page=page, page_size=page_size, search=search or None)
    )
    return CompanyListResponse(
        companies=[CompanyResponse.model_validate(c, from_attributes=True) for c in companies],
        pagination=PaginationResponse.model_validate(pagination, from_attributes=True),
    )


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_client(
    company_id: str,
    service: ClientService = Depends(get_client_service),
    _: str = Depends(get_current_user),
) -> CompanyResponse:
    try:
        company = await service.get_company(company_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CompanyResponse.model_validate(company, from_attributes=True)


@router.post("", response_model=ClientCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    service: ClientService = Depends(get_client_service),
    user_id: str = Depends(get_current_user),
) -> ClientCreatedResponse:
    """Create the company with its subscription and default project."""
    try:
        company, subscription, project = await service.create_client(data, user_id)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.errors)
    return ClientCreatedResponse(
        company=CompanyResponse.model_validate(company, from_attributes=True),
        subscription=SubscriptionResponse.model_validate(subscription, from_attributes=True),
        project=ProjectResponse.model_validate(project, from_attributes=True),
    )


@router.put("/{company_id}", response_model=CompanyResponse)
async def update_client(
    company_id: str,
    data: CompanyUpdate,
    service: ClientService = Depends(get_client_service),
    user_id: str = Depends(get_current_user),
) -> CompanyResponse:
    try:
        company = await service.update_company(company_id, data, user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CompanyResponse.model_validate(company, from_attributes=True)


@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    company_id: str,
    service: ClientService = Depends(get_client_service),
    user_id: str = Depends(get_current_user),
) -> None:
    try:
        await service.delete_company(company_id, user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
