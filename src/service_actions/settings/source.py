from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from .base import ActionsBaseSettings


class SourceSettings(ActionsBaseSettings):
    """Azure Resource Manager endpoints used to list the provider catalog."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="AZURE_"
    )

    subscription_id: Optional[str] = Field(
        default=None,
        description="Subscription whose feature registrations are listed. "
                    "Provider operations are tenant-wide and do not need it."
    )
    management_endpoint: str = Field(
        default="https://management.azure.com",
        description="Azure Resource Manager endpoint (override for sovereign clouds)."
    )
    operations_api_version: str = Field(
        default="2022-04-01",
        description="api-version of Microsoft.Authorization/providerOperations."
    )
    features_api_version: str = Field(
        default="2021-07-01",
        description="api-version of Microsoft.Features/features."
    )
    request_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        le=600,
        description="Timeout of each catalog request. Requests are never retried."
    )

    @field_validator("management_endpoint")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def token_scope(self) -> str:
        """OAuth scope requested from the Azure credential chain."""
        return f"{self.management_endpoint}/.default"
