"""Shared fixtures for the dashboard test suite."""

import pytest

from src.dashboard.fetch_orchestrator import FetchOrchestrator
from tests.helpers import DeferredExecutor, FakeScorersService


@pytest.fixture
def service():
    return FakeScorersService()


@pytest.fixture
def deferred():
    return DeferredExecutor()


@pytest.fixture
def orchestrator(service, deferred):
    return FetchOrchestrator(service, executor=deferred)
