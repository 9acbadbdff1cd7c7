"""Commerce API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

COMMERCE_TIMEOUT_SECONDS = 30.0
DEFAULT_SCOPE_TEMPLATE = "manage_project:{project_key}"

_REQUIRED = (
    "CATALOGSYNC_API_URL",
    "CATALOGSYNC_AUTH_URL",
    "CATALOGSYNC_PROJECT_KEY",
    "CATALOGSYNC_CLIENT_ID",
    "CATALOGSYNC_CLIENT_SECRET",
)


@dataclass(frozen=True, slots=True)
class CommerceConfig:
    """Credentials and endpoints of the commerce API target."""

    api_url: str
    auth_url: str
    project_key: str
    client_id: str
    client_secret: str
    scopes: tuple[str, ...]
    resilience: ResilienceConfig


def get_commerce_config(*, resilience: ResilienceConfig | None = None) -> CommerceConfig:
    values = require_env_vars(_REQUIRED)
    project_key = values["CATALOGSYNC_PROJECT_KEY"]
    raw_scopes = optional_env_var("CATALOGSYNC_SCOPES") or ""
    scopes = tuple(raw_scopes.split()) or (DEFAULT_SCOPE_TEMPLATE.format(project_key=project_key),)
    api_url = values["CATALOGSYNC_API_URL"].rstrip("/")
    return CommerceConfig(
        api_url=api_url,
        auth_url=values["CATALOGSYNC_AUTH_URL"].rstrip("/"),
        project_key=project_key,
        client_id=values["CATALOGSYNC_CLIENT_ID"],
        client_secret=values["CATALOGSYNC_CLIENT_SECRET"],
        scopes=scopes,
        resilience=resilience
        or ResilienceConfig(
            name="commerce",
            base_url=f"{api_url}/{project_key}",
            timeout_seconds=COMMERCE_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
        ),
    )
