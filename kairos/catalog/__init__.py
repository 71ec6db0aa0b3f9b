from functools import lru_cache

from kairos.core.config import settings

from .local_catalog import LocalCareerCatalog


@lru_cache(maxsize=1)
def get_default_catalog() -> LocalCareerCatalog:
    return LocalCareerCatalog(settings.career_catalog_path)


__all__ = ["LocalCareerCatalog", "get_default_catalog"]
