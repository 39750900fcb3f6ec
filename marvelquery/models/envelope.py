"""API response envelope models.

Every Marvel API response wraps its results in the same envelope::

    {code, status, copyright, attributionText, attributionHTML, etag,
     data: {offset, limit, total, count, results: [...]}}

Only the shape of the envelope is checked here; individual results are
validated separately against their resource type's schema.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResponseData(BaseModel):
    """Pagination block of a response plus the raw results."""

    offset: int = Field(..., ge=0)
    limit: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    count: int = Field(..., ge=0)
    results: list[dict[str, Any]]

    model_config = ConfigDict(frozen=True)


class Metadata(BaseModel):
    """Envelope metadata returned with every call."""

    code: int
    status: str
    copyright: str = ""
    attribution_text: str = Field("", alias="attributionText")
    attribution_html: str = Field("", alias="attributionHTML")
    etag: str = ""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class APIResponse(BaseModel):
    """Complete response envelope."""

    code: int
    status: str
    copyright: str = ""
    attribution_text: str = Field("", alias="attributionText")
    attribution_html: str = Field("", alias="attributionHTML")
    etag: str = ""
    data: ResponseData

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def metadata(self) -> Metadata:
        return Metadata(
            code=self.code,
            status=self.status,
            copyright=self.copyright,
            attribution_text=self.attribution_text,
            attribution_html=self.attribution_html,
            etag=self.etag,
        )

    @property
    def results(self) -> list[dict[str, Any]]:
        return self.data.results
