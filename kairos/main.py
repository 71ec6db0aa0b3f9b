import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from kairos.api.v1.health import router as health_router
from kairos.api.v1.careers import router as careers_router
from kairos.api.v1.profile import router as profile_router
from kairos.api.v1.journal import router as journal_router
from kairos.api.v1.plan import router as plan_router
from kairos.api.v1.chat import router as chat_router
from kairos.core.cors import cors_allowed_origins
from kairos.core.rate_limit import limiter
from kairos.core.config import settings
from dotenv import load_dotenv
from kairos.core.lifespan import lifespan

load_dotenv()
logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Kairos Career Guidance API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(careers_router, prefix="/v1", tags=["Careers"])
app.include_router(profile_router, prefix="/v1", tags=["Profile"])
app.include_router(journal_router, prefix="/v1", tags=["Journal"])
app.include_router(plan_router, prefix="/v1", tags=["Plan"])
app.include_router(chat_router, prefix="/v1", tags=["Chat"])
