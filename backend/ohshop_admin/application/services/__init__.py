from .apv_service import ApvService
from .auth_service import AuthService
from .client_service import ClientService
from .collection_discovery_service import CollectionCatalog, CollectionDiscoveryService
from .company_backfill_service import CompanyBackfillService
from .content_category_service import ContentCategoryService
from .content_media_service import ContentMediaService
from .custom_field_service import CustomFieldService
from .episode_template_service import EpisodeTemplateService
from .flag_toggle import (
    CATEGORY_ACTIVE_MESSAGES,
    CATEGORY_FEATURE_MESSAGES,
    FEATURE_MESSAGES,
    PIN_MESSAGES,
    FlagToggle,
)
from .immigration_service import ImmigrationStatisticsService
from .main_category_service import MainCategoryService
from .member_service import MemberService
from .migration_history_service import MigrationHistoryService
from .newsticker_service import NewstickerService
from .product_service import ProductService
from .profile_service import ProfileService
from .progress_simulator import ProgressSimulator
from .sse_manager import SSEManager

__all__ = [
    "CATEGORY_ACTIVE_MESSAGES",
    "CATEGORY_FEATURE_MESSAGES",
    "ApvService",
    "AuthService",
    "ClientService",
    "CollectionCatalog",
    "CollectionDiscoveryService",
    "CompanyBackfillService",
    "ContentCategoryService",
    "ContentMediaService",
    "CustomFieldService",
    "EpisodeTemplateService",
    "FEATURE_MESSAGES",
    "FlagToggle",
    "ImmigrationStatisticsService",
    "MainCategoryService",
    "MemberService",
    "MigrationHistoryService",
    "NewstickerService",
    "PIN_MESSAGES",
    "ProductService",
    "ProfileService",
    "ProgressSimulator",
    "SSEManager",
]
