from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    user_timezone: str = "UTC"
    default_locale: str = "en-US"

    # After the active profile, also try the phrases of every other profile
    search_all_locales: bool = True

    # Hours below this value get +12 when qualified by a noon word ("2 siang" -> 14:00)
    siang_pm_before_hour: int = 11

    log_level: str = "INFO"

    @property
    def has_custom_timezone(self) -> bool:
        return self.user_timezone != "UTC"

    @property
    def is_strict_locale(self) -> bool:
        return not self.search_all_locales


settings = Settings()
