"""Pydantic models for Honeycomb v2 API resources.

Optional fields left as ``None`` are omitted from request payloads, so an
update only touches the fields that are set.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from honeycombio.jsonapi import Resource


# ── Shared ───────────────────────────────────────────────────────

class Timestamps(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    created_at: Optional[datetime] = Field(default=None, alias="created")
    updated_at: Optional[datetime] = Field(default=None, alias="updated")


class Team(Resource):
    jsonapi_type: ClassVar[str] = "teams"

    name: str = ""
    slug: str = ""


# ── Environments ─────────────────────────────────────────────────

ENVIRONMENT_COLOR_BLUE = "blue"
ENVIRONMENT_COLOR_GREEN = "green"
ENVIRONMENT_COLOR_GOLD = "gold"
ENVIRONMENT_COLOR_RED = "red"
ENVIRONMENT_COLOR_PURPLE = "purple"
ENVIRONMENT_COLOR_LIGHT_BLUE = "lightBlue"
ENVIRONMENT_COLOR_LIGHT_GREEN = "lightGreen"
ENVIRONMENT_COLOR_LIGHT_GOLD = "lightGold"
ENVIRONMENT_COLOR_LIGHT_RED = "lightRed"
ENVIRONMENT_COLOR_LIGHT_PURPLE = "lightPurple"


def environment_color_types() -> List[str]:
    """All colors the API accepts for an Environment."""
    return [
        ENVIRONMENT_COLOR_BLUE,
        ENVIRONMENT_COLOR_GREEN,
        ENVIRONMENT_COLOR_GOLD,
        ENVIRONMENT_COLOR_RED,
        ENVIRONMENT_COLOR_PURPLE,
        ENVIRONMENT_COLOR_LIGHT_BLUE,
        ENVIRONMENT_COLOR_LIGHT_GREEN,
        ENVIRONMENT_COLOR_LIGHT_GOLD,
        ENVIRONMENT_COLOR_LIGHT_RED,
        ENVIRONMENT_COLOR_LIGHT_PURPLE,
    ]


class EnvironmentSettings(BaseModel):
    delete_protected: Optional[bool] = None


class Environment(Resource):
    jsonapi_type: ClassVar[str] = "environments"

    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    settings: Optional[EnvironmentSettings] = None


# ── API Keys ─────────────────────────────────────────────────────

class APIKeyPermissions(BaseModel):
    create_datasets: bool = False


class APIKey(Resource):
    jsonapi_type: ClassVar[str] = "api-keys"
    jsonapi_relationships: ClassVar[Tuple[str, ...]] = ("environment",)

    name: Optional[str] = None
    key_type: Optional[str] = None
    disabled: Optional[bool] = None
    secret: Optional[str] = None
    permissions: Optional[APIKeyPermissions] = None
    timestamps: Optional[Timestamps] = None
    environment: Optional[Environment] = None


# ── Auth ─────────────────────────────────────────────────────────

class AuthMetadata(Resource):
    """Identity of the credential the client authenticates with."""

    jsonapi_type: ClassVar[str] = "api-keys"
    jsonapi_relationships: ClassVar[Tuple[str, ...]] = ("team",)

    name: str = ""
    key_type: str = ""
    disabled: bool = False
    scopes: List[str] = Field(default_factory=list)
    timestamps: Optional[Timestamps] = None
    team: Optional[Team] = None
