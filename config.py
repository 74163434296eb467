from pydantic_settings import BaseSettings
import hashlib

def _derive_key(base_secret: str, purpose: str) -> str:
    """Derive a deterministic key from base secret for specific purpose"""
    return hashlib.sha256(f"{base_secret}:{purpose}".encode()).hexdigest()

class Settings(BaseSettings):
    database_url: str = "sqlite:///./courier.db"
    session_secret: str = "default-dev-secret-change-in-production"
    seed_file: str = "data/db.json"
    port: int = 8290

    @property
    def secret_key(self) -> str:
        """JWT access token signing key"""
        return self.session_secret

    @property
    def password_pepper(self) -> str:
        """Password pepper - derived from base secret"""
        return _derive_key(self.session_secret, "password_pepper")[:32]

    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440  # 24 hours

    password_hash_time_cost: int = 3
    password_hash_memory_cost: int = 65536

    # Forward-only pending -> processing -> loaded -> delivered when enabled
    strict_status_transitions: bool = False
    # Drivers may only query and patch their own orders when enabled
    bind_driver_identity: bool = False

    cors_origins: list = ["*"]
    max_body_bytes: int = 1024 * 1024

    class Config:
        env_file = ".env"

settings = Settings()
