"""Shared schema plumbing: wire casing and the response envelope."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Emits camelCase on the wire and accepts either casing on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Envelope(BaseModel, Generic[DataT]):
    message: str
    metadata: DataT


class ErrorDetail(BaseModel):
    message: str


class ErrorEnvelope(BaseModel):
    errors: ErrorDetail
