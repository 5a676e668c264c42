"""
Configuration management for the Answer Grader system.

Uses Pydantic Settings for type-safe configuration loading from environment variables.
Credentials for each provider are optional; only the selected provider's key
must be present when a grading call is made.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from answer_grader.models import DEFAULT_BASE_URLS, ProviderConfig, ProviderKind


class ConfigurationError(Exception):
    """Raised when the selected provider cannot be configured."""

    def __init__(self, message: str, provider: ProviderKind | None = None):
        self.provider = provider
        super().__init__(message)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Provider selection is a single tag; each provider has its own key,
    model and optional endpoint override.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Provider Selection
    # ==========================================================================
    grader_provider: ProviderKind = Field(
        default=ProviderKind.OPENAI,
        description="Which LLM backend grades answers",
    )

    # ==========================================================================
    # OpenAI-compatible API
    # ==========================================================================
    openai_api_key: str | None = Field(
        default=None,
        description="API key for the OpenAI-compatible endpoint",
    )

    openai_base_url: str | None = Field(
        default=None,
        description="Base URL override for OpenAI-compatible gateways",
    )

    openai_model: str | None = Field(
        default=None,
        description="Model to use with the OpenAI provider",
    )

    # ==========================================================================
    # Anthropic API
    # ==========================================================================
    anthropic_api_key: str | None = Field(
        default=None,
        description="API key for Anthropic",
    )

    anthropic_base_url: str | None = Field(
        default=None,
        description="Base URL override for the Anthropic API",
    )

    claude_model: str | None = Field(
        default=None,
        description="Model to use with the Claude provider",
    )

    # ==========================================================================
    # Zhipu API
    # ==========================================================================
    zhipu_api_key: str | None = Field(
        default=None,
        description="API key for Zhipu AI",
    )

    zhipu_base_url: str | None = Field(
        default=None,
        description="Base URL override for the Zhipu API",
    )

    zhipu_model: str | None = Field(
        default=None,
        description="Model to use with the Zhipu provider",
    )

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: str = Field(
        default="INFO",
        description="Root log level for the CLI",
    )

    @field_validator("openai_base_url", "anthropic_base_url", "zhipu_base_url")
    @classmethod
    def validate_base_url(cls, v: str | None) -> str | None:
        """Ensure base URL doesn't have trailing slash."""
        if not v:
            return None
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Log levels are matched case-insensitively."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def provider_config(
        self,
        provider: ProviderKind | None = None,
        model: str | None = None,
    ) -> ProviderConfig:
        """
        Resolve the configuration for a provider.

        Args:
            provider: Provider to resolve. Uses `grader_provider` if not provided.
            model: Model override taking precedence over the configured model.

        Returns:
            ProviderConfig ready for the provider factory.

        Raises:
            ConfigurationError: If the provider's API key is not set.
        """
        kind = provider or self.grader_provider

        api_key, base_url, configured_model = {
            ProviderKind.OPENAI: (self.openai_api_key, self.openai_base_url, self.openai_model),
            ProviderKind.CLAUDE: (
                self.anthropic_api_key,
                self.anthropic_base_url,
                self.claude_model,
            ),
            ProviderKind.ZHIPU: (self.zhipu_api_key, self.zhipu_base_url, self.zhipu_model),
        }[kind]

        if not api_key:
            raise ConfigurationError(f"No API key configured for provider '{kind.value}'", kind)

        return ProviderConfig(
            provider=kind,
            api_key=api_key,
            model=model or configured_model,
            base_url=base_url,
        )


def default_base_url(provider: ProviderKind) -> str:
    """Return the documented public endpoint for a provider."""
    return DEFAULT_BASE_URLS[provider]


def check_api_key_format(provider: ProviderKind, api_key: str) -> tuple[bool, str]:
    """
    Check that an API key looks right for its provider.

    This is a format check only; no request is made.

    Args:
        provider: Provider the key belongs to.
        api_key: The key to check.

    Returns:
        Tuple of (is_valid, message).
    """
    if not api_key:
        return False, "API key is required"

    if provider == ProviderKind.OPENAI:
        if api_key.startswith("sk-"):
            return True, "API key format looks valid"
        return False, "OpenAI API keys should start with 'sk-'"

    if provider == ProviderKind.CLAUDE:
        if api_key.startswith("sk-ant-"):
            return True, "API key format looks valid"
        return False, "Claude API keys should start with 'sk-ant-'"

    if len(api_key) > 20:
        return True, "API key format looks valid"
    return False, "Zhipu API key format is invalid"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once.
    """
    return Settings()
