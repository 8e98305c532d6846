"""Conversion configuration model."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

MetadataMode = Literal[False, "basic", "extended"]


class ConversionOptions(BaseModel):
    """Options shared by every stage of an HTML -> Markdown conversion.

    One instance is threaded through the detector, lowerer, refifier and
    renderer.  ``url_map`` is the only field written during a conversion: the
    refify pass stores its URL-prefix -> token table there.
    """

    website_domain: str | None = None
    extract_main_content: bool = False
    refify_urls: bool = False
    url_map: dict[str, str] = Field(default_factory=dict)
    debug: bool = False
    dom_parser: str | Callable[[str], Any] = "lxml"
    enable_table_column_tracking: bool = False
    include_meta_data: MetadataMode = False

    # Extension hooks (see semantic_markdown.plugins for the signatures)
    override_element_processing: Callable[..., Any] | None = None
    process_unhandled_element: Callable[..., Any] | None = None
    override_node_renderer: Callable[..., Any] | None = None
    render_custom_node: Callable[..., Any] | None = None

    max_depth: int = Field(256, ge=1)

    model_config = {"extra": "forbid", "arbitrary_types_allowed": True}

    @field_validator("include_meta_data", mode="before")
    @classmethod
    def coerce_metadata_flag(cls, v: Any) -> Any:
        if v is True:
            return "basic"
        if v is None:
            return False
        return v

    @property
    def extended_metadata(self) -> bool:
        return self.include_meta_data == "extended"
