from contextlib import asynccontextmanager
import json
import logging

from kairos.ai.config import load_ai_config
from kairos.catalog import get_default_catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    catalog = get_default_catalog()
    cfg = load_ai_config()
    logger.info(
        json.dumps(
            {
                "event": "startup",
                "careers": len(catalog.all()),
                "ai_enabled": cfg.enabled,
                "ai_provider": cfg.provider,
                "ai_model": cfg.model,
                "ai_key_configured": bool(cfg.api_key),
            }
        )
    )
    yield
    logger.info(json.dumps({"event": "shutdown"}))
