import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    rate_limit: str = "60/minute"
    rate_limit_enabled: bool = True

    # Two-tower recommendation settings
    model_version: str = "two_tower_hashing_v1"  # tag written alongside cached rankings
    encoder_name: str = "two_tower_hashing"  # key in services.pipeline.model_registry
    embedding_dim: int = 64
    candidate_pool_limit: int = 1000
    default_limit: int = 20
    request_timeout_seconds: float = 10.0
    interaction_retries: int = 1  # extra attempts before an interaction write is given up

    # Hybrid (query) ranking
    hybrid_pool_size: int = 50  # recommendation pool re-scored against a query

    # In-memory cache store (the external store owns real eviction)
    cache_ttl_seconds: int = 6 * 60 * 60
    cache_max_entries: int = 10000

    # Emit per-candidate scoring trace events at DEBUG level
    trace_scoring: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
