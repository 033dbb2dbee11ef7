"""Honeycomb v2 API client: JSON:API resources with pagination and retries."""

from honeycombio.v2.api_keys import APIKeys
from honeycombio.v2.client import Client
from honeycombio.v2.config import (
    DEFAULT_API_ENDPOINT_ENV,
    DEFAULT_API_HOST,
    DEFAULT_API_KEY_ID_ENV,
    DEFAULT_API_KEY_SECRET_ENV,
    Config,
    load_config,
)
from honeycombio.v2.environments import Environments
from honeycombio.v2.models import (
    APIKey,
    APIKeyPermissions,
    AuthMetadata,
    Environment,
    EnvironmentSettings,
    Team,
    Timestamps,
    environment_color_types,
)
from honeycombio.v2.pagination import DEFAULT_PAGE_SIZE, ListOptions, Pager, PaginationLinks

__all__ = [
    "APIKeys",
    "Client",
    "Config",
    "load_config",
    "DEFAULT_API_ENDPOINT_ENV",
    "DEFAULT_API_HOST",
    "DEFAULT_API_KEY_ID_ENV",
    "DEFAULT_API_KEY_SECRET_ENV",
    "Environments",
    "APIKey",
    "APIKeyPermissions",
    "AuthMetadata",
    "Environment",
    "EnvironmentSettings",
    "Team",
    "Timestamps",
    "environment_color_types",
    "DEFAULT_PAGE_SIZE",
    "ListOptions",
    "Pager",
    "PaginationLinks",
]
