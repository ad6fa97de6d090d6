from unittest.mock import Mock

import pytest
from loguru import logger

from topic_binder.core.descriptor import DestinationDescriptor
from topic_binder.naming.interfaces import INamingService
from topic_binder.naming.memory import InMemoryNamingService


@pytest.fixture
def naming() -> InMemoryNamingService:
    """Provide an isolated naming directory per test."""
    return InMemoryNamingService()


@pytest.fixture
def mock_naming() -> Mock:
    """Provide a mock naming collaborator for call-count assertions."""
    return Mock(spec=INamingService)


@pytest.fixture
def order_events(naming: InMemoryNamingService) -> DestinationDescriptor:
    """Descriptor configured as in the OrderEvents scenario."""
    return DestinationDescriptor(
        destination_name="OrderEvents",
        destination_type="Topic",
        jndi_name="jms/OrderEvents",
        naming=naming,
    )


@pytest.fixture
def log_records():
    """Capture loguru records emitted during the test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
