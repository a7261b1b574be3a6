"""Test configuration shared by every test module."""

import os

# Must be set before the runtime context loads config.yaml
os.environ["APP_ENVIRONMENT"] = "test"
os.environ["LOG_FILE"] = ""
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DATABASE_URL"] = "sqlite://"

from tests.fixtures import *  # noqa: E402,F401,F403
