from src.core.config.settings import Settings
import logging

logger = logging.getLogger(__name__)


def check_all_infrastructure(settings: Settings) -> dict[str, bool | str]:
    """
    Checks everything a search request needs before it reaches upstream.
    Returns a dict mapping component name to status (True for OK, error string for failure).

    The upstream API itself is not contacted: probes must not spend tokens.
    """
    status = {}

    if settings.LLM_API_KEY:
        status["llm_credentials"] = True
    else:
        logger.error("Health check failed (LLM credentials): DEEPSEEK_API_KEY not set")
        status["llm_credentials"] = "DEEPSEEK_API_KEY not set"

    return status
