"""Application configuration via Pydantic Settings.

NOTE: Every field maps an explicit environment variable name
(ASSIGNMENT_POLICY, LOG_LEVEL, ...) to avoid silent misconfiguration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from issue_desk.domain.value_objects.enums import PolicyName


class Settings(BaseSettings):
    # Assignment
    assignment_policy: PolicyName = Field(
        default=PolicyName.LEAST_WORKLOAD,
        validation_alias="ASSIGNMENT_POLICY",
    )

    # Seed data
    csv_data_path: str = Field(default="data", validation_alias="CSV_DATA_PATH")

    # App
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
