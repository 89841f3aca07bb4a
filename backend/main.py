"""
Element Variants - FastAPI Backend
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import conditions, elements, integration, variants, websites
from config import get_settings
from repositories import close_db_pool, get_db_pool
from repositories.schema import ensure_schema
from services.errors import AuthenticationError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s [%(name)s] %(levelname)s: %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if settings.auto_create_schema:
        await ensure_schema(await get_db_pool())
    logger.info(f"Element Variants API ready ({settings.environment})")
    yield
    # Shutdown
    await close_db_pool()


app = FastAPI(
    title="Element Variants",
    description="Conditional content variants for page elements",
    version="1.0.0",
    lifespan=lifespan,
)

# Loader script calls come from customer domains
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    return JSONResponse(status_code=401, content={"error": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(integration.router)
app.include_router(websites.router)
app.include_router(elements.router)
app.include_router(variants.router)
app.include_router(conditions.router)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/api/health")
async def api_health():
    return {"status": "ok", "service": "element_variants"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
