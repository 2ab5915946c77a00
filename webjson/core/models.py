"""Domain models for site configuration, page descriptors and build results."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    ValidationError,
    model_validator,
)

from .errors import PageDescriptorError
from .settings import SiteLayout


class SiteConfig(BaseModel):
    """Roots and conventions for a single build, fixed at startup."""

    model_config = ConfigDict(frozen=True)

    source_root: Path = Field(..., description="Source directory")
    output_root: Path = Field(..., description="Output directory")
    file_mode: int = Field(default=0o644, description="Rendered page permissions (octal)")
    layout: SiteLayout = Field(default_factory=SiteLayout)

    def template_path(self, name: str) -> Path:
        layout = self.layout
        return self.source_root / layout.templates_dir / f"{name}{layout.fragment_extension}"

    def include_path(self, name: str) -> Path:
        layout = self.layout
        return self.source_root / layout.includes_dir / f"{name}{layout.fragment_extension}"

    def relative_dir(self, source_dir: Path) -> Path:
        """Path of ``source_dir`` relative to the source root."""
        return source_dir.relative_to(self.source_root)

    def mirror_dir(self, source_dir: Path) -> Path:
        """Output directory mirroring ``source_dir``."""
        return self.output_root / self.relative_dir(source_dir)


class PageDescriptor(BaseModel):
    """A parsed page descriptor.

    ``template`` names the template to render with. ``properties`` holds every
    string-valued key of the document, ``template`` included, in document
    order. Values are never coerced: a number, list, object or boolean makes
    the whole descriptor invalid.
    """

    template: StrictStr | None = None
    properties: dict[str, StrictStr] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _split_document(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError(
                f"page descriptor must be a JSON object, got {type(data).__name__}"
            )
        properties = {
            key: value
            for key, value in data.items()
            if not (key == "template" and value is None)
        }
        return {"template": data.get("template"), "properties": properties}

    @classmethod
    def from_json(cls, text: str) -> PageDescriptor:
        """Parse and validate descriptor text.

        Raises:
            PageDescriptorError: Invalid JSON or a document that is not a
                flat object of strings.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise PageDescriptorError(f"Invalid JSON: {e}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            problems = "; ".join(
                f"{err['loc'][-1] if err['loc'] else 'document'}: {err['msg']}"
                for err in e.errors()
            )
            raise PageDescriptorError(f"Invalid page descriptor: {problems}") from e


class BuildReport(BaseModel):
    """Counters collected while walking the source tree."""

    directories: int = 0
    pages_rendered: int = 0
    pages_skipped: int = 0
    files_copied: int = 0
    failures: int = 0
