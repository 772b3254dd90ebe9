"""
Scenario configuration model for a tracegen run.
"""

from datetime import timedelta
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..exporters import EXPORTERS
from ..utils import parse_duration


class InvalidConfiguration(ValueError):
    """Raised when a scenario has neither a trace count nor a duration."""


class ScenarioConfig(BaseModel):
    """Describes the test scenario."""
    workers: int = Field(1, ge=0, description="Number of workers (threads) to run")
    traces: int = Field(1, description="Number of traces to generate in each worker (ignored if duration is provided)")
    marshal: bool = Field(False, description="Whether to pass the parent context to child spans through a propagation carrier")
    debug: bool = Field(False, description="Whether to set DEBUG flag on the spans to force sampling")
    firehose: bool = Field(False, description="Whether to set FIREHOSE flag on the spans to skip indexing")
    pause: timedelta = Field(timedelta(microseconds=1), description="How long to pause between traces")
    duration: timedelta = Field(timedelta(0), description="For how long to run the test")
    service: str = Field("tracegen", description="Service name to use")
    trace_exporter: str = Field("otlp-http", description="Trace exporter (otlp-http|otlp-grpc|stdout)")

    class Config:
        """Pydantic configuration."""
        frozen = True

    @field_validator("pause", "duration", mode="before")
    @classmethod
    def _parse_duration(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_duration(value)
        return value

    @field_validator("pause")
    @classmethod
    def _check_pause(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("pause must not be negative")
        return value

    @field_validator("trace_exporter")
    @classmethod
    def _check_exporter(cls, value: str) -> str:
        if value not in EXPORTERS:
            raise ValueError(f"unrecognized trace exporter '{value}', expected one of: {', '.join(EXPORTERS)}")
        return value

    @property
    def is_duration_mode(self) -> bool:
        return self.duration > timedelta(0)

    def validated(self) -> "ScenarioConfig":
        """
        Check the stop policy and normalize the trace count.

        In duration mode the per-worker trace count is forced to 0, so
        workers only stop when the run's stop signal is cleared.

        Returns:
            The configuration to run with

        Raises:
            InvalidConfiguration: If neither `traces` nor `duration` is positive
        """
        if self.is_duration_mode:
            if self.traces == 0:
                return self
            return self.model_copy(update={"traces": 0})
        if self.traces <= 0:
            raise InvalidConfiguration("either `traces` or `duration` must be greater than 0")
        return self
