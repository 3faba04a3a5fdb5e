from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SKULD_")

    repeat_count: int = Field(1000, ge=0)
    chunk_size: int = Field(512, ge=1)
    label_margin: int = Field(5, ge=0)
    default_columns: int = Field(80, ge=1)
    # One column per count, so bars stay inside the terminal.
    marker: str = Field("#", min_length=1, max_length=1)


settings = Settings()
