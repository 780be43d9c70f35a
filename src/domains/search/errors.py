from src.core.errors import ConfigurationError, DomainError, InfraError


class InvalidQuery(DomainError):
    def __init__(self):
        super().__init__("Query cannot be empty")


class MissingAPIKey(ConfigurationError):
    def __init__(self):
        super().__init__(
            "API key not configured. Please set DEEPSEEK_API_KEY in environment variables."
        )


class UpstreamError(InfraError):
    """The chat-completion API failed or answered with a non-success status."""

    def __init__(self, message: str, *, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


class EmptyUpstreamResponse(UpstreamError):
    def __init__(self):
        super().__init__("No content received from OpenRouter API")
