"""Package-wide defaults, overridable through ``JSONAPI_*`` environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from jsonapi_collection.utils.iri import UrlGenerationStrategy


class JSONAPISettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="JSONAPI_", env_file=".env", extra="ignore")

    page_parameter_name: str = "page"
    url_generation_strategy: UrlGenerationStrategy = UrlGenerationStrategy.ABS_PATH

    # Page size used by the data layer when the caller does not pass one.
    items_per_page: int = 30
    maximum_items_per_page: int | None = None


settings = JSONAPISettings()
