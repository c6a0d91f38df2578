from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    # Redfish target (default scrape target for /metrics)
    REDFISH_HOST: str = Field("", description="Default Redfish host (host[:port]) scraped by /metrics")
    REDFISH_USERNAME: str = Field("", description="Redfish session username")
    REDFISH_PASSWORD: str = Field("", description="Redfish session password")
    REDFISH_SCHEME: str = Field("https", description="URL scheme used to reach the BMC")
    REDFISH_TIMEOUT: int = Field(30, description="Timeout in seconds for each Redfish request")
    REDFISH_VERIFY_TLS: bool = Field(False, description="Verify the BMC TLS certificate")
    REDFISH_CA_BUNDLE: Optional[str] = Field(None, description="Path to a CA bundle for verifying BMC TLS")

    # Bootstrap
    EXIT_ON_BOOTSTRAP_FAILURE: bool = Field(False, description="Fail startup when the default target cannot be reached")

    # Metrics
    EXPORTER_NAMESPACE: str = Field("redfish", description="Namespace prefix for exported metrics")

    # Logging
    LOG_LEVEL: str = Field("INFO", description="Logging level")
