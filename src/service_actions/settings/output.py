from typing import Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .base import ActionsBaseSettings


class OutputSettings(ActionsBaseSettings):
    """Snapshot, export and history locations, and the run flags."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="ACTIONS_"
    )

    input_snapshot_path: str = Field(
        default="AzureServiceActions.csv",
        description="Operations snapshot of the previous run, compared against the current catalog."
    )
    output_snapshot_path: Optional[str] = Field(
        default=None,
        description="Where a commit writes the current Operations snapshot. Defaults to input_snapshot_path."
    )
    history_log_path: str = Field(
        default="AzureHistory.txt",
        description="Append-only change log; one entry per run."
    )
    services_path: str = Field(
        default="AzureServices.csv",
        description="Services table export."
    )
    features_path: str = Field(
        default="AzureServiceFeatures.csv",
        description="Features table export."
    )
    commit: bool = Field(
        default=False,
        description="Replace the stored snapshot with the current one. "
                    "When false the run only reports (dry run)."
    )
    add_note: bool = Field(
        default=False,
        description="Prepend a note row to the Operations table."
    )

    @property
    def effective_output_snapshot_path(self) -> str:
        return self.output_snapshot_path or self.input_snapshot_path
