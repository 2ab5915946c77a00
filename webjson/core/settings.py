"""Site layout conventions, overridable from the environment."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class SiteLayout(BaseSettings):
    """Where templates and includes live and which files are pages."""

    model_config = SettingsConfigDict(
        env_prefix="WEBJSON_", case_sensitive=False, frozen=True
    )

    templates_dir: str = "_templates"
    includes_dir: str = "_includes"
    fragment_extension: str = ".html"
    page_extension: str = ".json"
    output_extension: str = ".html"
    excluded_prefix: str = "_"
    encoding: str = "utf-8"
