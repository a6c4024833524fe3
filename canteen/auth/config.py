from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AUTH_", env_file=".env", extra="ignore")

    secret: str = "canteen-change-me"  # set AUTH_SECRET in every real deployment
    jwt_lifetime_seconds: int = 8 * 60 * 60
    jwt_algorithm: str = "HS256"
    jwt_audience: str = "fastapi-users:auth"


auth_config = AuthConfig()
