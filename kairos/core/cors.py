from __future__ import annotations

from kairos.core.config import settings


def cors_allowed_origins() -> list[str]:
    origins = [origin.rstrip("/") for origin in settings.cors_allowed_origins]
    return list(dict.fromkeys(origins))
