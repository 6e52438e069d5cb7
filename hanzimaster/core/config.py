from typing import Optional
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="hanzimaster", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=9000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"],
        alias="CORS_ORIGINS",
    )

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class ReviewSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    idle_seconds: int = Field(default=3600, alias="SESSION_IDLE_SECONDS")
    sweep_interval: int = Field(default=60, alias="SESSION_SWEEP_INTERVAL")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    review: ReviewSettings = Field(default_factory=lambda: ReviewSettings())

    # Both optional: features degrade to an error state when absent
    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")
    google_client_id: Optional[str] = Field(default=None, alias="GOOGLE_CLIENT_ID")

    # Remembered credentials edited at runtime (see core.credentials)
    credentials_file: str = Field(
        default=".hanzimaster_credentials.json", alias="CREDENTIALS_FILE"
    )

    stroke_data_url: str = Field(
        default="https://cdn.jsdelivr.net/npm/hanzi-writer-data@2.0/{char}.json",
        alias="STROKE_DATA_URL",
    )


settings = Settings()
