"""FastAPI dependency injection: wires infrastructure to the application layer."""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ohshop_admin.config import get_settings
from ohshop_admin.application.interfaces import (
    DocumentStore,
    FileStorage,
    PasswordHasher,
    TokenIssuer,
)
from ohshop_admin.application.services import (
    ApvService,
    AuthService,
    ClientService,
    CollectionDiscoveryService,
    CompanyBackfillService,
    ContentCategoryService,
    ContentMediaService,
    CustomFieldService,
    EpisodeTemplateService,
    FlagToggle,
    ImmigrationStatisticsService,
    MainCategoryService,
    MemberService,
    MigrationHistoryService,
    NewstickerService,
    ProductService,
    ProfileService,
    ProgressSimulator,
    SSEManager,
)
from ohshop_admin.application.services.collection_discovery_service import load_catalog
from ohshop_admin.domain.entities.collection_metadata import DiscoveryEvent, DiscoveryEventType
from ohshop_admin.domain.exceptions import AuthenticationError
from ohshop_admin.infrastructure.database.repositories import SQLAlchemyDocumentStore
from ohshop_admin.infrastructure.database.session import async_session_factory, get_db_session
from ohshop_admin.infrastructure.security import JWTTokenIssuer, PasslibPasswordHasher
from ohshop_admin.infrastructure.storage.local_file_storage import LocalFileStorage

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")


# ── Shared singletons ────────────────────────────────────────────────


@lru_cache
def get_sse_manager() -> SSEManager:
    """Process-wide broadcaster for toast, migration and discovery events."""
    return SSEManager()


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasslibPasswordHasher()


@lru_cache
def get_token_issuer() -> TokenIssuer:
    settings = get_settings()
    return JWTTokenIssuer(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )


@asynccontextmanager
async def _standalone_store() -> AsyncIterator[DocumentStore]:
    """A store on its own session, for work that outlives a request."""
    async with async_session_factory() as session:
        try:
            yield SQLAlchemyDocumentStore(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def _broadcast_discovery_event(event: DiscoveryEvent) -> None:
    await get_sse_manager().broadcast("discovery", event.to_payload())


@lru_cache
def get_discovery_service() -> CollectionDiscoveryService:
    """The single discovery instance; its cache is shared by every request."""
    settings = get_settings()
    service = CollectionDiscoveryService(
        _standalone_store,
        load_catalog(settings.collection_catalog_file),
        cache_seconds=settings.discovery_cache_seconds,
        max_concurrency=settings.discovery_max_concurrency,
        exclude_patterns=settings.discovery_exclude_patterns,
        include_test_collections=settings.discovery_include_test_collections,
        schema_detection=settings.discovery_schema_detection,
        permission_check=settings.discovery_permission_check,
    )
    for event_type in DiscoveryEventType:
        service.add_listener(event_type, _broadcast_discovery_event)
    return service


# ── Per-request adapters ─────────────────────────────────────────────


async def get_document_store(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[DocumentStore, None]:
    """Provides a DocumentStore bound to the request's session."""
    yield SQLAlchemyDocumentStore(session)


def get_file_storage() -> FileStorage:
    settings = get_settings()
    return LocalFileStorage(upload_dir=settings.upload_dir, url_prefix=settings.upload_url_prefix)


# ── Authentication ───────────────────────────────────────────────────


async def get_auth_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[AuthService, None]:
    settings = get_settings()
    yield AuthService(
        store,
        get_password_hasher(),
        get_token_issuer(),
        reset_ttl_minutes=settings.password_reset_ttl_minutes,
    )


async def get_current_user(token: str = Depends(oauth2_scheme)) -> str:
    """Uid of the signed-in admin, read from the bearer token."""
    try:
        return get_token_issuer().read_subject(token)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_profile_service(
    store: DocumentStore = Depends(get_document_store),
    auth: AuthService = Depends(get_auth_service),
) -> AsyncGenerator[ProfileService, None]:
    settings = get_settings()
    yield ProfileService(store, auth, get_file_storage(), settings.max_image_size_mb)


# ── Content ──────────────────────────────────────────────────────────


async def get_main_category_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[MainCategoryService, None]:
    settings = get_settings()
    yield MainCategoryService(store, get_file_storage(), settings.max_image_size_mb)


async def get_content_category_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[ContentCategoryService, None]:
    settings = get_settings()
    yield ContentCategoryService(store, get_file_storage(), settings.max_image_size_mb)


async def get_content_media_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[ContentMediaService, None]:
    settings = get_settings()
    yield ContentMediaService(store, get_file_storage(), settings.max_image_size_mb)


def get_flag_toggle() -> FlagToggle:
    return FlagToggle(get_sse_manager())


async def get_apv_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[ApvService, None]:
    yield ApvService(store)


async def get_episode_template_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[EpisodeTemplateService, None]:
    yield EpisodeTemplateService(store)


async def get_newsticker_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[NewstickerService, None]:
    yield NewstickerService(store)


# ── Commerce ─────────────────────────────────────────────────────────


async def get_client_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[ClientService, None]:
    yield ClientService(store)


async def get_member_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[MemberService, None]:
    yield MemberService(store)


async def get_product_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[ProductService, None]:
    yield ProductService(store)


async def get_custom_field_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[CustomFieldService, None]:
    yield CustomFieldService(store)


async def get_immigration_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[ImmigrationStatisticsService, None]:
    yield ImmigrationStatisticsService(store)


# ── Migrations ───────────────────────────────────────────────────────


async def get_migration_history_service(
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[MigrationHistoryService, None]:
    yield MigrationHistoryService(store)


async def get_company_backfill_service(
    store: DocumentStore = Depends(get_document_store),
    history: MigrationHistoryService = Depends(get_migration_history_service),
) -> AsyncGenerator[CompanyBackfillService, None]:
    settings = get_settings()
    yield CompanyBackfillService(
        store, history, get_sse_manager(), batch_size=settings.migration_batch_size
    )


def get_progress_simulator() -> ProgressSimulator:
    return ProgressSimulator(step_delay=get_settings().migration_step_delay_seconds)
