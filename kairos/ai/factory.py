from kairos.ai.config import AIConfig, load_ai_config
from kairos.ai.types import AIClient

from kairos.ai.providers.openai_provider import OpenAIProvider


def get_ai_client(cfg: AIConfig | None = None) -> AIClient:
    cfg = cfg or load_ai_config()

    if not cfg.enabled:
        raise RuntimeError("AI is disabled (AI_ENABLED=0)")

    if cfg.provider in {"openai", "modelscope"}:
        return OpenAIProvider(
            model=cfg.model,
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            timeout_s=cfg.timeout_s,
            max_retries=cfg.max_retries,
        )

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
