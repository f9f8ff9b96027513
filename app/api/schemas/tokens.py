from __future__ import annotations

from pydantic import BaseModel


class SupportedTokensResponse(BaseModel):
    tokens: list[str]
    count: int
