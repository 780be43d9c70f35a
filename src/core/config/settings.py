from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_ignore_empty=True, extra="ignore"
    )

    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "AI Search Assistant"

    LOG_LEVEL: str = "INFO"

    # Upstream credentials, DEEPSEEK_API_KEY wins over the generic API_KEY
    DEEPSEEK_API_KEY: str | None = None
    API_KEY: str | None = None

    @property
    def LLM_API_KEY(self) -> str | None:
        return self.DEEPSEEK_API_KEY or self.API_KEY or None

    # OpenRouter (routes to DeepSeek)
    LLM_BASE_URL: str = "https://openrouter.ai/api/v1"
    LLM_MODEL: str = "deepseek/deepseek-r1-0528:free"
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 1000
    LLM_HTTP_REFERER: str = "https://ai-search-assistant.replit.app"
    LLM_APP_TITLE: str = "AI Search Assistant"

    DEFAULT_TIMEOUT: float = 60.0


settings = Settings()


def get_settings() -> Settings:
    """Dependency hook so routes and tests can swap the settings instance."""
    return settings
