from fastapi import APIRouter

from country_sync.api.v1 import health
from country_sync.api.v1.endpoints import countries
from country_sync.schemas import COMMON_RESPONSES

# Router principal avec réponses RFC 9457 par défaut
router = APIRouter(responses=COMMON_RESPONSES)

router.include_router(health.router, tags=["health"])
router.include_router(countries.router, prefix="/countries", tags=["countries"])
