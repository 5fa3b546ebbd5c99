from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    APP_NAME: str = "certgen"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Default certificate
    DEFAULT_CERT_COMMON_NAME: str = "TRAEFIK DEFAULT CERT"
    DEFAULT_CERT_DOMAIN_SUFFIX: str = "traefik.default"


settings = Settings()
