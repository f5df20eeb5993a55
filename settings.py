"""Settings from YCOMB_* environment variables or a .env file, via
pydantic-settings. Only the demo and the harness read these; the
combinators take no configuration."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="YCOMB_", env_file=".env", case_sensitive=False)

    # Ceiling the demo installs before it unfolds anything.
    recursion_limit: int = 2000

    # Frames allowed above the caller when showing that a missing base
    # case exhausts the stack.
    exhaustion_headroom: int = 200

    trace: bool = False

    demo_n: int = 6

    @field_validator("recursion_limit")
    @classmethod
    def limit_above_interpreter_floor(cls, v: int) -> int:
        if v < 1000:
            raise ValueError("recursion_limit must be at least 1000")
        return v

    @field_validator("exhaustion_headroom")
    @classmethod
    def headroom_fits_a_few_unfoldings(cls, v: int) -> int:
        if v < 50:
            raise ValueError("exhaustion_headroom must be at least 50")
        return v

    @field_validator("demo_n")
    @classmethod
    def demo_n_is_natural(cls, v: int) -> int:
        if v < 0:
            raise ValueError("demo_n must be non-negative")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
