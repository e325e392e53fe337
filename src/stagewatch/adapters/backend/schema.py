"""Pydantic models describing the processing backend payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stagewatch.domain.reconciliation.sanitize import coerce_epoch_millis


def _lenient_epoch_millis(value: object) -> int | None:
    return coerce_epoch_millis(value)


class BackendBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class ContextMetadata(BackendBaseModel):
    started_at: int | None = Field(default=None, alias="startedAt")

    _normalize_started_at = field_validator("started_at", mode="before")(_lenient_epoch_millis)


class CleansedContextPayload(BackendBaseModel):
    """The subset of the cleansed context that status reconciliation reads.

    Everything else is kept as extra fields and passed through untouched.
    """

    started_at: int | None = Field(default=None, alias="startedAt")
    metadata: ContextMetadata | None = None
    status_history: object = Field(default=None, alias="statusHistory")

    _normalize_started_at = field_validator("started_at", mode="before")(_lenient_epoch_millis)

    @field_validator("metadata", mode="before")
    @classmethod
    def _drop_malformed_metadata(cls, value: object) -> object:
        return value if isinstance(value, dict) else None

    @property
    def resolved_started_at(self) -> int | None:
        if self.started_at is not None:
            return self.started_at
        if self.metadata is not None:
            return self.metadata.started_at
        return None
