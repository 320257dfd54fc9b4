from .common import (
    ImageUploadResponse,
    MessageResponse,
    NextPositionResponse,
    PaginationResponse,
    PositionUpdate,
    PositionUpdateRequest,
)
from .main_category import (
    MainCategoryCreate,
    MainCategoryUpdate,
    MainCategoryResponse,
    MainCategoryListResponse,
)
from .content_category import (
    ContentCategoryCreate,
    ContentCategoryUpdate,
    ContentCategoryResponse,
)
from .content_media import (
    ContentMediaCreate,
    ContentMediaUpdate,
    ContentMediaResponse,
    MediaItemSchema,
    PinnedSyncResponse,
    ThumbnailUploadResponse,
    UrlReferenceSchema,
)
from .episode import (
    EpisodeSchema,
    EpisodeTemplateCreate,
    EpisodeTemplateResponse,
    EpisodeTemplateUpdate,
)
from .apv import ApvVideoCreate, ApvVideoResponse, ApvVideoUpdate, PinLatestResponse
from .client import (
    ClientCreate,
    ClientCreatedResponse,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdate,
    ProjectResponse,
    SubscriptionResponse,
)
from .member import MemberCountsResponse, MemberListResponse, MemberResponse
from .product import (
    BulkAddFieldRequest,
    BulkOperationResultSchema,
    DeletedFieldBackfillResponse,
    FieldDefinitionCreate,
    FieldDefinitionResponse,
    FieldMigrationResponse,
    FieldUsageStatsResponse,
    FieldValidationErrorSchema,
    FieldValidationResponse,
    FieldValidationRulesSchema,
    FieldValueRequest,
    ProductListResponse,
    ProductResponse,
    ProductStatsResponse,
    ProductUpdate,
)
from .newsticker import NewstickerCreate, NewstickerUpdate, NewstickerResponse
from .immigration import ImmigrationStatisticsResponse, UserDeviceSchema
from .migration import (
    BackfillRequest,
    BackfillResultResponse,
    BackfillTarget,
    CleanupResponse,
    MigrationCompleteRequest,
    MigrationHistoryResponse,
    MigrationProgressUpdate,
    MigrationStartRequest,
    MigrationStatsResponse,
    MigrationSummaryResponse,
    MigrationTrendResponse,
)
from .collections import (
    CollectionMetadataResponse,
    DiscoveryResultResponse,
    DiscoveryStatisticsResponse,
)
from .auth import (
    PasswordChangeRequest,
    PasswordCheckRequest,
    PasswordCheckResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    ProfileImageResponse,
    ProfileResponse,
    ProfileUpdate,
    RegisterRequest,
    TokenResponse,
)

__all__ = [
    "ImageUploadResponse",
    "MessageResponse",
    "NextPositionResponse",
    "PaginationResponse",
    "PositionUpdate",
    "PositionUpdateRequest",
    "MainCategoryCreate",
    "MainCategoryUpdate",
    "MainCategoryResponse",
    "MainCategoryListResponse",
    "ContentCategoryCreate",
    "ContentCategoryUpdate",
    "ContentCategoryResponse",
    "ContentMediaCreate",
    "ContentMediaUpdate",
    "ContentMediaResponse",
    "MediaItemSchema",
    "PinnedSyncResponse",
    "ThumbnailUploadResponse",
    "UrlReferenceSchema",
    "EpisodeSchema",
    "EpisodeTemplateCreate",
    "EpisodeTemplateResponse",
    "EpisodeTemplateUpdate",
    "ApvVideoCreate",
    "ApvVideoResponse",
    "ApvVideoUpdate",
    "PinLatestResponse",
    "ClientCreate",
    "ClientCreatedResponse",
    "CompanyListResponse",
    "CompanyResponse",
    "CompanyUpdate",
    "ProjectResponse",
    "SubscriptionResponse",
    "MemberCountsResponse",
    "MemberListResponse",
    "MemberResponse",
    "BulkAddFieldRequest",
    "BulkOperationResultSchema",
    "DeletedFieldBackfillResponse",
    "FieldDefinitionCreate",
    "FieldDefinitionResponse",
    "FieldMigrationResponse",
    "FieldUsageStatsResponse",
    "FieldValidationErrorSchema",
    "FieldValidationResponse",
    "FieldValidationRulesSchema",
    "FieldValueRequest",
    "ProductListResponse",
    "ProductResponse",
    "ProductStatsResponse",
    "ProductUpdate",
    "NewstickerCreate",
    "NewstickerUpdate",
    "NewstickerResponse",
    "ImmigrationStatisticsResponse",
    "UserDeviceSchema",
    "BackfillRequest",
    "BackfillResultResponse",
    "BackfillTarget",
    "CleanupResponse",
    "MigrationCompleteRequest",
    "MigrationHistoryResponse",
    "MigrationProgressUpdate",
    "MigrationStartRequest",
    "MigrationStatsResponse",
    "MigrationSummaryResponse",
    "MigrationTrendResponse",
    "CollectionMetadataResponse",
    "DiscoveryResultResponse",
    "DiscoveryStatisticsResponse",
    "PasswordChangeRequest",
    "PasswordCheckRequest",
    "PasswordCheckResponse",
    "PasswordResetConfirm",
    "PasswordResetRequest",
    "ProfileImageResponse",
    "ProfileResponse",
    "ProfileUpdate",
    "RegisterRequest",
    "TokenResponse",
]
