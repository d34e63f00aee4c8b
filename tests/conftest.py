"""Test configuration and fixtures for the user API."""

from tests.fixtures import *  # noqa: F401,F403
