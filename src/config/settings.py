"""
Sales Insights Dashboard
Centralized Configuration Management

This module provides configuration management using Pydantic settings with
environment variable support, validation, and type safety.
"""

from functools import lru_cache
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatasetSettings(BaseSettings):
    """Static Order Dataset Configuration"""

    model_config = SettingsConfigDict(env_prefix="DATASET_")

    path: str = Field(default="./attached_assets/data.json", description="Path to the JSON order dataset")
    encoding: str = Field(default="utf-8", description="Dataset file encoding")


class DashboardSettings(BaseSettings):
    """Dashboard Presentation Configuration"""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    top_countries_limit: int = Field(default=5, description="Countries shown in the top-N ranking")
    country_pie_limit: int = Field(default=15, description="Countries shown in the country pie chart")
    page_size: int = Field(default=5, description="Rows per page in the orders table")
    max_page_buttons: int = Field(default=5, description="Page buttons before gaps are used")
    default_trend_period: str = Field(default="month", description="Default sales trend granularity")
    export_filename: str = Field(default="walmart_sales_data", description="Base name for exported files")

    # Dataset API consumer
    api_url: str = Field(default="http://localhost:8000", description="Base URL of the dataset API")
    request_timeout: float = Field(default=30.0, description="Dataset fetch timeout in seconds")

    @field_validator("default_trend_period")
    @classmethod
    def validate_trend_period(cls, v: str) -> str:
        """Validate trend period value"""
        allowed = ["week", "month", "quarter", "year"]
        if v.lower() not in allowed:
            raise ValueError(f"Trend period must be one of: {allowed}")
        return v.lower()


class MonitoringSettings(BaseSettings):
    """Logging Configuration"""

    model_config = SettingsConfigDict(env_prefix="")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="json", alias="LOG_FORMAT", description="Log format: json or console")


class Settings(BaseSettings):
    """
    Main Application Settings

    Aggregates all configuration sections and provides a single entry point
    for accessing application configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="sales-insights", alias="APP_NAME", description="Application name")
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")
    debug: bool = Field(default=False, alias="DEBUG", description="Debug mode")

    # API Server
    api_host: str = Field(default="0.0.0.0", alias="API_HOST", description="API host")
    api_port: int = Field(default=8000, alias="API_PORT", description="API port")
    api_workers: int = Field(default=4, alias="API_WORKERS", description="API workers")

    # CORS
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins")

    # Version
    version: str = Field(default="1.0.0", description="Application version")

    # Subsystem configurations
    dataset: DatasetSettings = Field(default_factory=DatasetSettings)
    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()

    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development"""
        return self.app_env == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
