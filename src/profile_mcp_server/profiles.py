#!/usr/bin/env python3
# src/profile_mcp_server/profiles.py
"""
Profile data sources.

``StaticProfileStore`` serves the built-in employee fixtures.
``UserProfileClient`` fetches the caller's own profile from an upstream API
using the bearer token of the current request.
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .constants import CONTENT_TYPE_JSON, DEFAULT_PROFILE_ID, DEFAULT_UPSTREAM_TIMEOUT, HEADER_AUTHORIZATION
from .errors import UpstreamError, UpstreamTimeoutError

logger = logging.getLogger(__name__)


class ProjectRecord(BaseModel):
    name: str
    status: str
    completion: int = Field(ge=0, le=100)


class ProfileRecord(BaseModel):
    """One employee profile."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    email: str
    department: str
    role: str
    join_date: date = Field(alias="joinDate")
    avatar: str
    skills: list[str]
    projects: list[ProjectRecord]

    def to_dict(self) -> dict[str, Any]:
        """Wire shape (camelCase keys, ISO dates)."""
        return self.model_dump(by_alias=True, mode="json")


PROFILES: dict[str, ProfileRecord] = {
    "default": ProfileRecord(
        id="EMP001",
        name="Sarah Johnson",
        email="sarah.johnson@techcorp.com",
        department="Engineering",
        role="Senior Full Stack Developer",
        joinDate=date(2021, 8, 15),
        avatar="https://images.unsplash.com/photo-1494790108755-2616b612b47c?w=150&h=150&fit=crop&crop=face",
        skills=["TypeScript", "React", "Node.js", "AWS Lambda", "DynamoDB", "GraphQL", "Docker", "Terraform"],
        projects=[
            ProjectRecord(name="MCP Server Implementation", status="In Progress", completion=85),
            ProjectRecord(name="Cloud Infrastructure Migration", status="Completed", completion=100),
            ProjectRecord(name="API Performance Optimization", status="In Progress", completion=60),
            ProjectRecord(name="Frontend Component Library", status="Planning", completion=25),
        ],
    ),
    "admin": ProfileRecord(
        id="ADM001",
        name="Michael Chen",
        email="michael.chen@techcorp.com",
        department="Operations",
        role="DevOps Engineer",
        joinDate=date(2020, 3, 10),
        avatar="https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=150&h=150&fit=crop&crop=face",
        skills=["Kubernetes", "AWS", "Terraform", "Jenkins", "Prometheus", "Grafana", "Python", "Bash"],
        projects=[
            ProjectRecord(name="Kubernetes Cluster Setup", status="Completed", completion=100),
            ProjectRecord(name="CI/CD Pipeline Enhancement", status="In Progress", completion=70),
            ProjectRecord(name="Monitoring Dashboard", status="Completed", completion=100),
        ],
    ),
}


class StaticProfileStore:
    """
    Read-only lookup over a fixed profile table.

    Unknown or absent ids resolve to the default id. Callers get the id that
    was actually served back so they can say so.
    """

    def __init__(self, profiles: Mapping[str, ProfileRecord] | None = None, default_id: str = DEFAULT_PROFILE_ID):
        self._profiles = dict(PROFILES if profiles is None else profiles)
        if not self._profiles:
            raise ValueError("Profile store needs at least one profile")
        if default_id not in self._profiles:
            fallback = DEFAULT_PROFILE_ID if DEFAULT_PROFILE_ID in self._profiles else next(iter(self._profiles))
            logger.warning(f"Default profile '{default_id}' not found, using '{fallback}'")
            default_id = fallback
        self.default_id = default_id

    @property
    def profile_ids(self) -> list[str]:
        return list(self._profiles)

    def resolve(self, profile_id: str | None) -> tuple[str, ProfileRecord]:
        """Return ``(served_id, profile)`` for the requested id."""
        if profile_id and profile_id in self._profiles:
            return profile_id, self._profiles[profile_id]
        if profile_id:
            logger.info(f"Unknown profile '{profile_id}', serving '{self.default_id}'")
        return self.default_id, self._profiles[self.default_id]

    def get_default(self) -> ProfileRecord:
        return self._profiles[self.default_id]

    def __len__(self) -> int:
        return len(self._profiles)


class UserProfileClient:
    """
    Upstream profile API client.

    Every call forwards the caller's token as ``Authorization: Bearer``.
    The token is never validated here.
    """

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, access_token: str) -> dict[str, Any]:
        """
        GET the profile for ``access_token``.

        Raises:
            UpstreamTimeoutError: No answer within ``timeout`` seconds
            UpstreamError: Transport failure, non-2xx status or non-JSON body
        """
        headers = {HEADER_AUTHORIZATION: f"Bearer {access_token}", "Accept": CONTENT_TYPE_JSON}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.get(self.url, headers=headers)
            except httpx.TimeoutException as e:
                logger.warning(f"Profile API timed out after {self.timeout}s: {e!r}")
                raise UpstreamTimeoutError(self.timeout) from e
            except httpx.HTTPError as e:
                logger.warning(f"Profile API request failed: {e!r}")
                raise UpstreamError(f"Profile API request failed: {e}") from e

        if not response.is_success:
            logger.warning(f"Profile API error: {response.status_code} {response.text[:200]}")
            raise UpstreamError(f"API request failed: {response.status_code}", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError("Profile API returned invalid JSON", status_code=response.status_code) from e

        if not isinstance(data, dict):
            raise UpstreamError("Profile API returned an unexpected payload", status_code=response.status_code)
        return data
