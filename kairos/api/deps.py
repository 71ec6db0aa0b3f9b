from kairos.ai.types import AIClient
from kairos.services.llm import resolve_ai_client


def get_ai_client_dependency() -> AIClient | None:
    """Configured AI client, or ``None`` so the services take their local paths."""
    return resolve_ai_client()
