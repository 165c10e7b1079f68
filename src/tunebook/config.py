from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str
    port: int
    debug: bool
    jwt_secret: str  # Signing secret for bearer tokens, injected into TokenService
    jwt_algorithm: str = "HS256"
    token_expire_hours: int = 24
    session_ttl_seconds: int = 30 * 24 * 60 * 60
    cookie_secure: bool = False  # Set to True in production with HTTPS
    bcrypt_rounds: int = 10
    accept_bearer_tokens: bool = False  # Let the session guard also admit a valid bearer token
    cors_origins: list[str] = []
    # Build metadata, set by the deployment environment
    git_commit_hash: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "TUNEBOOK_",
        "extra": "ignore",
    }
