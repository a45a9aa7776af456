#!/usr/bin/env python3
"""
Configuration detection constants: CI indicators, container detection and
environment names.
"""

# ---------------------------------------------------------------------------
# CI/CD environment indicator variables
# ---------------------------------------------------------------------------
CI_INDICATORS = (
    "CI",
    "CONTINUOUS_INTEGRATION",
    "GITHUB_ACTIONS",
    "GITLAB_CI",
    "JENKINS_HOME",
    "TRAVIS",
    "CIRCLECI",
    "BUILDKITE",
)


# ---------------------------------------------------------------------------
# Container detection
# ---------------------------------------------------------------------------
DOCKERENV_PATH = "/.dockerenv"
ENV_KUBERNETES_HOST = "KUBERNETES_SERVICE_HOST"
ENV_CONTAINER = "CONTAINER"


# ---------------------------------------------------------------------------
# Environment type detection variables (checked in this order)
# ---------------------------------------------------------------------------
ENVIRONMENT_VARIABLES = ("NODE_ENV", "ENV", "ENVIRONMENT")

ENVIRONMENT_ALIASES = {
    "production": "production",
    "prod": "production",
    "staging": "staging",
    "stage": "staging",
    "test": "testing",
    "testing": "testing",
    "development": "development",
    "dev": "development",
}

ENVIRONMENT_DEVELOPMENT = "development"
ENVIRONMENT_TESTING = "testing"
ENVIRONMENT_PRODUCTION = "production"


# ---------------------------------------------------------------------------
# Truthy strings for boolean environment flags
# ---------------------------------------------------------------------------
TRUTHY_VALUES = ("1", "true", "yes", "on")
