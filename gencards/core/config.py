from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="gencards", alias="APP_NAME")


class GenerationSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    count: int = Field(default=10, alias="FLASHCARDS_COUNT")
    max_rounds: int = Field(default=3, alias="FLASHCARDS_MAX_ROUNDS")
    llm_model: str = Field(default="gemini-2.0-flash", alias="FLASHCARDS_MODEL")
    retries: int = Field(default=3, alias="FLASHCARDS_RETRIES")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        protected_namespaces=(),
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    generation: GenerationSettings = Field(
        default_factory=lambda: GenerationSettings()
    )

    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    openrouter_api_key: Optional[str] = Field(default=None, alias="OPENROUTER_API_KEY")

    # Model provider selection: "google" or "openrouter"
    model_provider: str = Field(default="google", alias="MODEL_PROVIDER")
    openrouter_model: str = Field(
        default="x-ai/grok-code-fast-1", alias="OPENROUTER_MODEL"
    )


settings = Settings()
