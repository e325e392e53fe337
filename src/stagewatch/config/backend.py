"""Processing backend configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_float_env, require_env_var
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

BACKEND_URL_ENV = "STAGEWATCH_BACKEND_URL"
BACKEND_TIMEOUT_ENV = "STAGEWATCH_BACKEND_TIMEOUT"
DEFAULT_BACKEND_TIMEOUT_SECONDS = 10.0

CONTEXT_PATH = "/api/cleansed-context/{document_id}"
STATUS_PATH = "/api/cleansed-data-status/{document_id}"


@dataclass(frozen=True, slots=True)
class BackendConfig:
    resilience: ResilienceConfig
    context_path: str = CONTEXT_PATH
    status_path: str = STATUS_PATH

    @property
    def base_url(self) -> str:
        if self.resilience.base_url is None:
            raise ConfigurationError("Backend base_url missing from resilience configuration")
        return self.resilience.base_url


def get_backend_config(*, resilience: ResilienceConfig | None = None) -> BackendConfig:
    if resilience is not None:
        return BackendConfig(resilience=resilience)

    base_url = require_env_var(BACKEND_URL_ENV).rstrip("/")
    if not base_url.startswith(("http://", "https://")):
        raise ConfigurationError(f"{BACKEND_URL_ENV} must be an http(s) URL, got {base_url!r}")

    return BackendConfig(
        resilience=ResilienceConfig(
            name="backend",
            base_url=base_url,
            timeout_seconds=optional_float_env(
                BACKEND_TIMEOUT_ENV, DEFAULT_BACKEND_TIMEOUT_SECONDS
            ),
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={"Accept": "application/json, text/plain"},
        )
    )
