import pytest

from topic_binder.core.errors import (
    InvalidArgumentError,
    NameAlreadyBoundError,
    NameNotFoundError,
    NamingServiceError,
    NamingServiceUnavailableError,
)
from topic_binder.naming.memory import InMemoryNamingService, default_naming_service


def test_bind_lookup_unbind(naming):
    resource = object()

    naming.bind("jms/OrderEvents", resource)
    assert naming.lookup("jms/OrderEvents") is resource
    assert naming.list_names() == ["jms/OrderEvents"]

    naming.unbind("jms/OrderEvents")
    assert naming.list_names() == []


def test_names_are_trimmed(naming):
    naming.bind("/jms/OrderEvents/", "topic")

    assert naming.lookup("jms/OrderEvents") == "topic"


def test_bind_twice_fails(naming):
    naming.bind("jms/A", 1)

    with pytest.raises(NameAlreadyBoundError) as exc_info:
        naming.bind("jms/A", 2)

    assert exc_info.value.name == "jms/A"
    assert naming.lookup("jms/A") == 1


def test_rebind_replaces(naming):
    naming.bind("jms/A", 1)
    naming.rebind("jms/A", 2)

    assert naming.lookup("jms/A") == 2


@pytest.mark.parametrize("operation", ["unbind", "lookup"])
def test_missing_name(naming, operation):
    with pytest.raises(NameNotFoundError):
        getattr(naming, operation)("jms/missing")


@pytest.mark.parametrize("name", ["", "/", "  ", None])
def test_invalid_names(naming, name):
    with pytest.raises(InvalidArgumentError):
        naming.bind(name, object())


def test_closed_service_is_unavailable(naming):
    naming.bind("jms/A", 1)
    naming.close()

    with pytest.raises(NamingServiceUnavailableError):
        naming.bind("jms/B", 2)
    with pytest.raises(NamingServiceError):
        naming.unbind("jms/A")
    assert naming.list_names() == []


def test_default_service_is_shared():
    assert default_naming_service() is default_naming_service()
    assert isinstance(default_naming_service(), InMemoryNamingService)
