#!/usr/bin/env python3
"""
endpoints/health.py - Health check for load balancers and hosting platforms
"""

import time

from starlette.requests import Request
from starlette.responses import Response

from ..config import ServerSettings
from ..handlers.basic import utc_timestamp
from ..profiles import StaticProfileStore
from .utils import json_response


class HealthEndpoint:
    """``GET /health``"""

    def __init__(self, settings: ServerSettings, store: StaticProfileStore | None = None):
        self.settings = settings
        self.store = store
        self.started = time.monotonic()

    async def handle_request(self, request: Request) -> Response:
        data = {
            "status": "healthy",
            "server": self.settings.name,
            "version": self.settings.version,
            "environment": self.settings.environment,
            "timestamp": utc_timestamp(),
            "uptime": round(time.monotonic() - self.started, 2),
        }
        if self.store is not None:
            data["profiles"] = len(self.store)
        return json_response(data)
