"""
Base configuration for the connector.

Uses Pydantic Settings for environment-based configuration.
Component settings extend BaseConnectorSettings with their own prefix.
"""

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class BaseConnectorSettings(BaseSettings):
    """Settings shared by every connector component."""

    component_name: str = "orient-connector"

    # HTTP client
    timeout: float = 30.0

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
