#!/usr/bin/env python3
"""
endpoints/profile.py - HTML profile card for browsers

``GET /profile`` serves the configured default profile; ``GET
/profile/{profile_id}`` serves the named one, falling back to the default
for unknown ids just like the ``get_profile`` tool.
"""

import logging

from starlette.requests import Request
from starlette.responses import HTMLResponse, Response

from ..profiles import StaticProfileStore
from ..widgets import render_profile_html
from .constants import HEADERS_NOCACHE

logger = logging.getLogger(__name__)


class ProfileEndpoint:
    """``GET /profile`` and ``GET /profile/{profile_id}``"""

    def __init__(self, store: StaticProfileStore):
        self.store = store

    async def handle_request(self, request: Request) -> Response:
        served_id, profile = self.store.resolve(request.path_params.get("profile_id"))
        logger.debug(f"Rendering profile page for '{served_id}'")
        return HTMLResponse(render_profile_html(profile), headers=HEADERS_NOCACHE)
