#!/usr/bin/env python3
"""Tests for per-request context and bearer token parsing."""

import dataclasses

import pytest

from profile_mcp_server.context import RequestContext, anonymous_context, parse_bearer_token
from profile_mcp_server.errors import NotAuthenticatedError


class TestParseBearerToken:
    @pytest.mark.parametrize(
        "header,expected",
        [
            ("Bearer abc123", "abc123"),
            ("bearer abc123", "abc123"),
            ("BEARER abc123", "abc123"),
            ("  Bearer   abc123  ", "abc123"),
            ("Bearer a.b.c", "a.b.c"),
        ],
    )
    def test_extracts_token(self, header, expected):
        assert parse_bearer_token(header) == expected

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Bearer    ", "Basic dXNlcjpwYXNz", "abc123"])
    def test_no_token(self, header):
        assert parse_bearer_token(header) is None


class TestRequestContext:
    def test_defaults(self):
        ctx = RequestContext()
        assert ctx.access_token is None
        assert ctx.transport == "stdio"
        assert ctx.is_authenticated is False

    def test_require_access_token(self):
        ctx = RequestContext(access_token="tok", transport="http")
        assert ctx.is_authenticated is True
        assert ctx.require_access_token() == "tok"

    def test_require_access_token_missing(self):
        with pytest.raises(NotAuthenticatedError):
            RequestContext().require_access_token()

    def test_empty_token_is_not_authenticated(self):
        with pytest.raises(NotAuthenticatedError):
            RequestContext(access_token="").require_access_token()

    def test_immutable(self):
        ctx = RequestContext(access_token="tok")
        with pytest.raises(dataclasses.FrozenInstanceError):
            ctx.access_token = "other"  # type: ignore[misc]

    def test_anonymous_context(self):
        ctx = anonymous_context("http")
        assert ctx.access_token is None
        assert ctx.transport == "http"
