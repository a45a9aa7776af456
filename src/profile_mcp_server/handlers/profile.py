#!/usr/bin/env python3
# src/profile_mcp_server/handlers/profile.py
"""
Profile tools and resources.

``get_profile`` and ``calculate_stats`` read the static profile table.
``get_user_profile`` forwards the request's bearer token to the upstream
profile API and is only offered when such an API is configured.
"""

import logging
import math
from collections.abc import Callable
from datetime import date
from typing import Any

from ..constants import CONTENT_TYPE_HTML, CONTENT_TYPE_JSON
from ..context import RequestContext
from ..errors import InvalidInputError, MissingArgumentError
from ..profiles import ProfileRecord, StaticProfileStore, UserProfileClient
from ..types import ResourceHandler, ToolHandler, ToolResult, create_embedded_resource, create_text_content
from ..widgets import average_completion, render_profile_html

logger = logging.getLogger(__name__)

PROFILE_HTML_URI = "profile://html"
PROFILE_DATA_URI = "profile://data"

STAT_AVERAGE_COMPLETION = "average_completion"
STAT_TOTAL_PROJECTS = "total_projects"
STAT_COMPLETION_RATE = "completion_rate"
STAT_TIME_AT_COMPANY = "time_at_company"
STATS = (STAT_AVERAGE_COMPLETION, STAT_TOTAL_PROJECTS, STAT_COMPLETION_RATE, STAT_TIME_AT_COMPANY)

_PROFILE_ID_SCHEMA = {
    "type": "string",
    "description": "Profile ID to fetch (default, admin). Unknown ids fall back to the default profile.",
}


def years_between(start: date, end: date) -> int:
    """Whole years from ``start`` to ``end`` using 365.25-day years."""
    return math.floor((end - start).days / 365.25)


class ProfileHandlers:
    """Tool and resource callables bound to one profile store."""

    def __init__(
        self,
        store: StaticProfileStore,
        user_client: UserProfileClient | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.user_client = user_client
        self.today = today

    # ------------------------------------------------------------------
    # Tools
    # ------------------------------------------------------------------

    def _resolve_requested(self, arguments: dict[str, Any]) -> tuple[str | None, str, ProfileRecord]:
        """
        Look up ``profileId``; returns ``(missed_id, served_id, profile)``.

        ``missed_id`` is the requested value when it did not name a profile.
        Any non-string id is a miss.
        """
        requested = arguments.get("profileId")
        if requested is None or requested == "":
            served_id, profile = self.store.resolve(None)
            return None, served_id, profile

        if not isinstance(requested, str):
            served_id, profile = self.store.resolve(None)
            logger.info(f"Non-string profile id {requested!r}, serving '{served_id}'")
            return str(requested), served_id, profile

        served_id, profile = self.store.resolve(requested)
        return (requested if requested != served_id else None), served_id, profile

    def get_profile(self, arguments: dict[str, Any], context: RequestContext) -> ToolResult:
        """Fetch and display employee profile information with an HTML profile card"""
        missed_id, served_id, profile = self._resolve_requested(arguments)

        text = (
            f"Profile loaded for {profile.name} ({profile.id}) from {profile.department} department "
            f"[profile id: {served_id}]"
        )
        if missed_id is not None:
            text += f". Profile '{missed_id}' was not found, showing '{served_id}' instead."

        return ToolResult(
            content=[
                create_text_content(text),
                create_embedded_resource(PROFILE_HTML_URI, CONTENT_TYPE_HTML, render_profile_html(profile)),
            ],
            structured_content={"userData": profile.to_dict()},
        )

    def calculate_stats(self, arguments: dict[str, Any], context: RequestContext) -> ToolResult:
        """Calculate various statistics from profile data"""
        calculation = arguments.get("calculation")
        if calculation is None or calculation == "":
            raise MissingArgumentError("calculation", "calculate_stats")
        if calculation not in STATS:
            raise InvalidInputError(f"Invalid calculation type: {calculation!r}. Expected one of: {', '.join(STATS)}")

        _, served_id, profile = self._resolve_requested(arguments)
        value, description, suffix = self._compute(calculation, profile)

        return ToolResult(
            content=[create_text_content(f"{description}: {value}{suffix}")],
            structured_content={"calculation": calculation, "value": value, "profileId": served_id},
        )

    def _compute(self, calculation: str, profile: ProfileRecord) -> tuple[int, str, str]:
        projects = profile.projects
        if calculation == STAT_AVERAGE_COMPLETION:
            return average_completion(profile), f"Average project completion rate for {profile.name}", "%"
        if calculation == STAT_TOTAL_PROJECTS:
            return len(projects), f"Total number of projects for {profile.name}", ""
        if calculation == STAT_COMPLETION_RATE:
            completed = sum(1 for p in projects if p.status == "Completed")
            rate = round(completed / len(projects) * 100) if projects else 0
            return rate, f"Percentage of completed projects for {profile.name}", "%"
        return years_between(profile.join_date, self.today()), f"Years at company for {profile.name}", " years"

    async def get_user_profile(self, arguments: dict[str, Any], context: RequestContext) -> ToolResult:
        """Fetch the authenticated user's profile from the profile API using their OAuth token"""
        token = context.require_access_token()
        if self.user_client is None:
            raise InvalidInputError("No profile API is configured")

        data = await self.user_client.fetch(token)
        label = data.get("name") or data.get("message")
        text = f"User profile received: {label}" if label else "User profile received"
        return ToolResult(content=[create_text_content(text)], structured_content={"userData": data})

    def tools(self) -> list[ToolHandler]:
        handlers = [
            ToolHandler.from_function(
                self.get_profile,
                name="get_profile",
                input_schema={"type": "object", "properties": {"profileId": _PROFILE_ID_SCHEMA}},
            ),
            ToolHandler.from_function(
                self.calculate_stats,
                name="calculate_stats",
                input_schema={
                    "type": "object",
                    "properties": {
                        "calculation": {
                            "type": "string",
                            "enum": list(STATS),
                            "description": "Type of calculation to perform",
                        },
                        "profileId": _PROFILE_ID_SCHEMA,
                    },
                    "required": ["calculation"],
                },
            ),
        ]
        if self.user_client is not None:
            handlers.append(
                ToolHandler.from_function(
                    self.get_user_profile,
                    name="get_user_profile",
                    input_schema={"type": "object", "properties": {}},
                )
            )
        return handlers

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def profile_data(self, context: RequestContext) -> dict[str, Any]:
        return self.store.get_default().to_dict()

    def profile_html(self, context: RequestContext) -> str:
        return render_profile_html(self.store.get_default())

    def resources(self) -> list[ResourceHandler]:
        return [
            ResourceHandler.from_function(
                PROFILE_DATA_URI,
                self.profile_data,
                name="Profile Data Resource",
                description="Raw profile data of the default profile",
                mime_type=CONTENT_TYPE_JSON,
            ),
            ResourceHandler.from_function(
                PROFILE_HTML_URI,
                self.profile_html,
                name="Profile HTML Resource",
                description="Formatted HTML profile display",
                mime_type=CONTENT_TYPE_HTML,
            ),
        ]
