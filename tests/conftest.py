"""Pytest configuration for privacy SDK tests."""

import pytest

from privacy_sdk import PrimitiveRegistry, PrivacyContext

from helpers import FakeClock, FakeInvoker


@pytest.fixture(autouse=True)
def configure_structlog():
    """Configure structlog for testing."""
    import structlog

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_invoker():
    return FakeInvoker()


@pytest.fixture
def context():
    return PrivacyContext()


@pytest.fixture
def registry(context) -> PrimitiveRegistry:
    return context.registry
