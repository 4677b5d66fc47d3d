"""Response models for the engine's JSON wire format."""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import DecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)


class WireModel(BaseModel):
    """Base for models whose wire keys start with an underscore."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Response(WireModel):
    """Acknowledgement returned by index-level calls.

    Error bodies are raised as TransportError before decoding, so only the
    acknowledgement flag is modelled.
    """

    acknowledged: bool = False


class InsertDocument(WireModel):
    created: bool = False
    index: str = Field(default="", alias="_index")
    type: str = Field(default="", alias="_type")
    id: str = Field(default="", alias="_id")
    version: int = Field(default=0, alias="_version")


class Document(WireModel):
    index: str = Field(default="", alias="_index")
    type: str = Field(default="", alias="_type")
    id: str = Field(default="", alias="_id")
    version: int = Field(default=0, alias="_version")
    found: bool = False
    source: Any = Field(default=None, alias="_source")


class Bulk(WireModel):
    """Raw bulk response. Items are kept as the engine sent them."""

    took: int = 0
    errors: bool = False
    items: list[dict[str, Any]] = Field(default_factory=list)


class Shards(WireModel):
    total: int = 0
    successful: int = 0
    failed: int = 0


class Hit(WireModel):
    """One matched record."""

    index: str = Field(default="", alias="_index")
    type: str = Field(default="", alias="_type")
    id: str = Field(default="", alias="_id")
    score: Optional[float] = Field(default=None, alias="_score")
    source: Any = Field(default=None, alias="_source")
    highlight: dict[str, list[str]] = Field(default_factory=dict)

    def source_as(self, model: type[ModelT]) -> ModelT:
        """Validate the raw ``_source`` payload into *model*."""
        try:
            return model.model_validate(self.source)
        except PydanticValidationError as exc:
            raise DecodeError(f"Cannot decode _source of hit {self.id!r}: {exc}") from exc


class ResultHits(WireModel):
    total: int = 0
    max_score: Optional[float] = None
    hits: list[Hit] = Field(default_factory=list)

    @field_validator("total", mode="before")
    @classmethod
    def _flatten_total(cls, value: Any) -> Any:
        # 7.x+ reports {"value": n, "relation": "eq"}
        if isinstance(value, dict):
            return value.get("value", 0)
        return value

    @field_validator("hits", mode="before")
    @classmethod
    def _null_hits(cls, value: Any) -> Any:
        return [] if value is None else value


class SearchResult(WireModel):
    took: int = 0
    timed_out: bool = False
    shards: Shards = Field(default_factory=Shards, alias="_shards")
    hits: ResultHits = Field(default_factory=ResultHits)
    aggregations: Any = None


class ScrollResponse(SearchResult):
    """Body of a scan-open or scroll-continuation call."""

    scroll_id: str = Field(default="", alias="_scroll_id")


class MSearchQuery(WireModel):
    header: str  # index name, document type
    body: str  # query for the declared index


class MSearchResult(WireModel):
    responses: list[SearchResult] = Field(default_factory=list)


class AliasMap(RootModel[dict[str, Any]]):
    """Index name to alias definitions, as returned by the alias lookup."""


def decode(model: type[ModelT], raw: bytes) -> ModelT:
    """Deserialize *raw* into *model*, raising DecodeError on any mismatch."""
    try:
        return model.model_validate_json(raw)
    except PydanticValidationError as exc:
        raise DecodeError(f"Cannot decode {model.__name__}: {exc}", body=raw) from exc
