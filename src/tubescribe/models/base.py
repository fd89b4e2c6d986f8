"""Shared base model definitions for tubescribe domain objects."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TubescribeBaseModel(BaseModel):
    """Base model configured for immutable, strictly-shaped domain values."""

    model_config = ConfigDict(extra="forbid", frozen=True)


__all__ = ["TubescribeBaseModel"]
