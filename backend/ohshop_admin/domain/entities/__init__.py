from .document import (
    ArrayRemove,
    ArrayUnion,
    DeleteField,
    Document,
    FieldFilter,
    Increment,
    OrderBy,
)
from .pagination import PageRequest, Pagination
from .main_category import MainCategory
from .content_category import ContentCategory
from .content_media import ContentMedia, MediaItem, MediaType, UrlReference
from .episode import Episode, EpisodeTemplate
from .apv import ApvVideo
from .company import Company, PlanLimits, Project, Subscription
from .member import Member, MemberPlatform
from .product import Product
from .custom_field import (
    BulkOperationResult,
    CustomFieldDefinition,
    FieldDataType,
    FieldErrorType,
    FieldMigration,
    FieldStatus,
    FieldValidationError,
    FieldValidationRules,
)
from .newsticker import Newsticker, NewstickerStatus
from .immigration_statistics import ImmigrationStatistics, UserDevice
from .migration import (
    BackfillResult,
    MigrationHistoryEntry,
    MigrationStats,
    MigrationStatus,
    MigrationSummary,
    MigrationTrend,
    ProgressStep,
)
from .collection_metadata import (
    CollectionMetadata,
    CollectionPermissions,
    CollectionPriority,
    CollectionSchema,
    DiscoveryError,
    DiscoveryEvent,
    DiscoveryEventType,
    DiscoveryResult,
    DiscoveryStatistics,
)
from .user import PasswordCheck, UserProfile

__all__ = [
    "ArrayRemove",
    "ArrayUnion",
    "DeleteField",
    "Document",
    "FieldFilter",
    "Increment",
    "OrderBy",
    "PageRequest",
    "Pagination",
    "MainCategory",
    "ContentCategory",
    "ContentMedia",
    "MediaItem",
    "MediaType",
    "UrlReference",
    "Episode",
    "EpisodeTemplate",
    "ApvVideo",
    "Company",
    "PlanLimits",
    "Project",
    "Subscription",
    "Member",
    "MemberPlatform",
    "Product",
    "BulkOperationResult",
    "CustomFieldDefinition",
    "FieldDataType",
    "FieldErrorType",
    "FieldMigration",
    "FieldStatus",
    "FieldValidationError",
    "FieldValidationRules",
    "Newsticker",
    "NewstickerStatus",
    "ImmigrationStatistics",
    "UserDevice",
    "BackfillResult",
    "MigrationHistoryEntry",
    "MigrationStats",
    "MigrationStatus",
    "MigrationSummary",
    "MigrationTrend",
    "ProgressStep",
    "CollectionMetadata",
    "CollectionPermissions",
    "CollectionPriority",
    "CollectionSchema",
    "DiscoveryError",
    "DiscoveryEvent",
    "DiscoveryEventType",
    "DiscoveryResult",
    "DiscoveryStatistics",
    "PasswordCheck",
    "UserProfile",
]
