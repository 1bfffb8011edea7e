"""Request/response wire shapes for the sum and concat operations."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SumRequest(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    a: int
    b: int


class ConcatRequest(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    a: str
    b: str


class SumResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    v: int
    err: str = ""


class ConcatResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    v: str
    err: str = ""
