"""Configuration using pydantic-settings."""

from pydantic_settings import BaseSettings


class OutputSettings(BaseSettings):
    """Output writer configuration."""

    colors: bool = True
    json_output: bool = False
    verbose: bool = False
    output_file: str | None = None
    append_output: bool = False
    fields: str = ""
    store_fields: str = ""
    store_fields_dir: str = "crawl_output"
    store_response: bool = False
    store_response_dir: str = "crawl_responses"

    model_config = {"env_prefix": "CRAWLSINK_"}


settings = OutputSettings()
