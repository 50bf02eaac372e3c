"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for AuthDemo happen here. No module should
call os.getenv() or os.environ.get() directly -- build a Settings object (or
call get_settings()) and pass it to api.main.create_app().

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call. Only the
      process entry points (asgi.py, main.py) use it; everything below them
      receives the Settings object explicitly.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. jwt_secret -> JWT_SECRET). Type coercion and validation are built in.

  @model_validator(mode="after"): Runs after all fields are resolved. A missing
      JWT_SECRET is a hard startup failure -- there is no dev-mode fallback.

Layer rule: core/ is the kernel. This module may not import from api/ or auth/.
"""

import logging
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("authdemo.config")

_RECOMMENDED_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    Every field except jwt_secret has a default. jwt_secret defaults to the
    empty string only so the validator can report it by name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------

    host: str = "127.0.0.1"
    port: int = 5001

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    # Empty string is the sentinel for "not configured".
    jwt_secret: str = ""
    # 10 hours
    token_expire_seconds: int = Field(default=10 * 60 * 60, gt=0)
    # bcrypt accepts 4..31; each step doubles the cost.
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # ------------------------------------------------------------------
    # Debug surface
    # ------------------------------------------------------------------

    # GET /users dumps the whole registry. Testing aid only.
    expose_user_list: bool = True

    @model_validator(mode="after")
    def validate_jwt_secret(self) -> "Settings":
        """Refuse to build settings without a signing secret.

        Tokens signed with a random per-process key would silently stop
        verifying after a restart, so there is no auto-generated fallback.
        Short secrets are accepted but logged.
        """
        if not self.jwt_secret:
            raise ValueError(
                "JWT_SECRET is required. Set JWT_SECRET in your environment or .env file."
            )
        if len(self.jwt_secret) < _RECOMMENDED_SECRET_LENGTH:
            logger.warning(
                "JWT_SECRET is shorter than %d characters; HS256 signatures will be weak.",
                _RECOMMENDED_SECRET_LENGTH,
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings instance.

    Raises pydantic.ValidationError (a ValueError) when JWT_SECRET is missing.

    In tests: build Settings(...) directly instead, or call
    get_settings.cache_clear() after changing the environment.
    """
    return Settings()
