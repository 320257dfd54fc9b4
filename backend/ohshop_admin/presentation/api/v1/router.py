"""V1 API router: aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from ohshop_admin.presentation.api.v1.endpoints.health import router as health_router
from ohshop_admin.presentation.api.v1.endpoints.auth import router as auth_router
from ohshop_admin.presentation.api.v1.endpoints.profile import router as profile_router
from ohshop_admin.presentation.api.v1.endpoints.main_categories import router as main_categories_router
from ohshop_admin.presentation.api.v1.endpoints.content_categories import router as content_categories_router
from ohshop_admin.presentation.api.v1.endpoints.content_media import router as content_media_router
from ohshop_admin.presentation.api.v1.endpoints.apv import router as apv_router
from ohshop_admin.presentation.api.v1.endpoints.episode_templates import router as episode_templates_router
from ohshop_admin.presentation.api.v1.endpoints.clients import router as clients_router
from ohshop_admin.presentation.api.v1.endpoints.members import router as members_router
from ohshop_admin.presentation.api.v1.endpoints.products import router as products_router
from ohshop_admin.presentation.api.v1.endpoints.product_fields import router as product_fields_router
from ohshop_admin.presentation.api.v1.endpoints.newstickers import router as newstickers_router
from ohshop_admin.presentation.api.v1.endpoints.immigration import router as immigration_router
from ohshop_admin.presentation.api.v1.endpoints.migrations import router as migrations_router
from ohshop_admin.presentation.api.v1.endpoints.collections import router as collections_router
from ohshop_admin.presentation.api.v1.endpoints.events import router as events_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(auth_router)
router.include_router(profile_router)
router.include_router(main_categories_router)
router.include_router(content_categories_router)
router.include_router(content_media_router)
router.include_router(apv_router)
router.include_router(episode_templates_router)
router.include_router(clients_router)
router.include_router(members_router)
router.include_router(products_router)
router.include_router(product_fields_router)
router.include_router(newstickers_router)
router.include_router(immigration_router)
router.include_router(migrations_router)
router.include_router(collections_router)
router.include_router(events_router)
