"""Pydantic models for request/response validation."""

import os
from enum import IntEnum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResponseStatus(IntEnum):
    """Per-question status code carried in each ResponseRecord."""
    SUCCESS = 200
    INTERNAL_ERROR = 500


class MagicEightBallRequest(BaseModel):
    """Body of a batch ask request."""

    questions: List[str] = Field(..., description="Questions to ask, in submission order")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "questions": ["Will it rain?", "Is the sky blue?"]
            }
        }
    )


class ResponseRecord(BaseModel):
    """Answer to one question. Frozen once built."""

    questionNumber: int = Field(..., ge=1, description="1-based position of the question in the request")
    question: str = Field(..., description="The question as submitted")
    answer: Optional[str] = Field(None, description="Phrase drawn from the answer set (absent on error)")
    elapsedMillis: int = Field(..., ge=0, description="Time taken to answer in milliseconds")
    status: ResponseStatus = Field(ResponseStatus.SUCCESS, description="200 on success, 500 on internal error")
    message: str = Field("", description="Status text, empty on success")

    model_config = ConfigDict(frozen=True)


class SystemConfig(BaseModel):
    """Model for system configuration from environment variables."""

    apiPort: int = Field(default=8080, ge=1, le=65535, description="API server port")
    maxConcurrentWorkers: Optional[int] = Field(
        default=None, ge=1, description="Cap on concurrently answered questions (unset = one per question)"
    )
    questionTimeoutMs: Optional[int] = Field(
        default=None, ge=1, description="Per-question timeout in milliseconds (unset = wait indefinitely)"
    )
    logLevel: str = Field(default="INFO", description="Logging level")

    @field_validator('logLevel')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper

    @classmethod
    def from_env(cls) -> "SystemConfig":
        """
        Build the configuration from environment variables.

        Empty or missing optional variables fall back to their defaults.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        values = {
            "apiPort": os.getenv("API_PORT"),
            "maxConcurrentWorkers": os.getenv("MAX_CONCURRENT_WORKERS"),
            "questionTimeoutMs": os.getenv("QUESTION_TIMEOUT_MS"),
            "logLevel": os.getenv("LOG_LEVEL"),
        }
        return cls(**{key: value for key, value in values.items() if value})
