from __future__ import annotations

from dataclasses import dataclass

from kairos.core.config import Settings, settings

DASHSCOPE_COMPATIBLE_URL = "https://dashscope.aliyuncs.com/compatible-mode/v1"


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    theme_model: str
    api_key: str | None
    base_url: str | None
    timeout_s: float
    max_retries: int
    enabled: bool = True


def load_ai_config(source: Settings | None = None) -> AIConfig:
    cfg = source or settings
    if cfg.ai_provider == "modelscope":
        api_key = cfg.modelscope_api_key
        base_url = cfg.openai_base_url or DASHSCOPE_COMPATIBLE_URL
    else:
        api_key = cfg.openai_api_key
        base_url = cfg.openai_base_url
    return AIConfig(
        provider=cfg.ai_provider,
        model=cfg.ai_model,
        theme_model=cfg.theme_model,
        api_key=(api_key or "").strip() or None,
        base_url=base_url,
        timeout_s=cfg.ai_timeout_s,
        max_retries=cfg.ai_max_retries,
        enabled=cfg.ai_enabled,
    )
