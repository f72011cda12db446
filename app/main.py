import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.features.health.routes.health import router as health_router
from app.features.leads.routes.lead_route import router as leads_router
from app.features.sms.routes.sms import router as sms_router
from app.features.sms.routes.webhook import router as webhook_router
from app.platform.cache.redis import close_redis
from app.platform.config import settings
from app.platform.db.session import init_models
from app.platform.exceptions import add_exception_handlers

# Configure logging to show INFO level messages
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        await init_models()
    yield
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    description="SMS intake, AI categorization and auto-response for leads",
    version=settings.VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)


# Root endpoint for basic info
@app.get("/", tags=["Info"])
def root():
    return {
        "app_name": settings.APP_NAME,
        "version": settings.VERSION,
        "docs_url": "/docs",
        "health": "/health",
    }


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_exception_handlers(app)

app.include_router(health_router)
app.include_router(webhook_router)
app.include_router(leads_router)
app.include_router(sms_router)
