import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager
from hospital_api.core.database import connect_to_mongo, close_mongo_connection
from hospital_api.core.email_service.email_instance import email_service
from hospital_api.core.exceptions import register_exception_handlers
from hospital_api.core.log_config import configure_logging
from hospital_api.modules.auth.router import auth_router
from hospital_api.modules.admissions.router import admission_router
from hospital_api.modules.password_reset.router import reset_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging()
    await connect_to_mongo()
    if email_service.client:
        logger.info("Email service initialized (SendGrid)")
    else:
        logger.info("Email service running in MOCK mode")
    yield
    # Shutdown
    await close_mongo_connection()


app = FastAPI(
    title="Hospital API",
    version="1.0.0",
    description="Admissions records, user authentication and password reset",
    lifespan=lifespan,
)
register_exception_handlers(app)


@app.get("/")
async def root():
    return {"message": "Hospital API is running"}


app.include_router(auth_router, prefix="/api")
app.include_router(reset_router, prefix="/api")
app.include_router(admission_router, prefix="/api")
