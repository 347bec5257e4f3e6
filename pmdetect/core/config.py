from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class UserAgentSettings(BaseSettings):
    """The package-manager hint, loaded on its own.

    npm, yarn, pnpm and bun all export ``npm_config_user_agent`` to the
    scripts they run. Detection only needs this value, so a malformed
    ``PMDETECT_*`` variable cannot break it.
    """

    model_config = SettingsConfigDict(
        env_prefix="PMDETECT_",
        case_sensitive=False,
        populate_by_name=True,
    )

    # e.g. "pnpm/8.6.0 npm/? node/v20.5.0 linux x64"
    user_agent: str = Field(default="", validation_alias="npm_config_user_agent")


class Settings(UserAgentSettings):
    """Settings loaded from environment variables.

    Everything besides the user agent is ``PMDETECT_``-prefixed.
    """

    # Console log renderer instead of JSON.
    debug: bool = False


def get_settings() -> Settings:
    return Settings()


def get_user_agent_settings() -> UserAgentSettings:
    return UserAgentSettings()
