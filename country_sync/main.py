from opentelemetry.instrumentation import auto_instrumentation

auto_instrumentation.initialize()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
import fastapi_problem_details as problem

from country_sync.api.v1 import api as api_v1
from country_sync.core.config import settings
from country_sync.core.database import create_db_and_tables, engine
from country_sync.infrastructure.countries_api.client import CountriesAPIClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gère le cycle de vie de l'application:
    - Crée les tables de base de données.
    - Initialise le client de la source externe (httpx async) dans app.state.
    - Ferme proprement le client et le pool de connexions.
    """
    logger.info("=== Application Startup ===")
    logger.info(f"Ressource OpenTelemetry: {dict(settings.OTEL_RESOURCE_ATTRIBUTES.attributes)}")

    await create_db_and_tables()
    logger.info("Tables de base de données créées")

    app.state.countries_client = CountriesAPIClient()
    logger.info(f"Client countries API initialisé: {app.state.countries_client.base_url}")

    try:
        logger.info("=== Application Startup Complete ===")
        yield
    finally:
        logger.info("=== Application Shutdown ===")
        await app.state.countries_client.close()
        await engine.dispose()
        logger.info("=== Application Shutdown Complete ===")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan,
    openapi_url=f"{settings.get_api_prefix()}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Exception handlers RFC 9457 Problem Details
problem.init_app(app, include_exc_info_in_response=settings.DEBUG)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.ALLOWED_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.ENVIRONMENT != "development":
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.TRUSTED_HOSTS,
    )

app.include_router(api_v1.router, prefix=settings.get_api_prefix("v1"))
