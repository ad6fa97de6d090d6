"""
ManagementRegistry - explicit registration of managed objects

Managed classes publish a `MANAGEMENT_INFO` table describing which attributes
form their identity, which are read-only or required, and which methods may be
invoked remotely. The registry names every instance after its key attributes,
e.g. ``topic-binder:type=Topic,destination=OrderEvents``, and routes attribute
access and operation calls through that table only.

Objects may define `on_registered(name)` and `on_unregistered()`; the registry
calls them so an object can refuse identity changes while it is registered.

Threading: registration and removal take the lock; calls on a registered
object are delegated to the object, which does its own locking.
"""

import threading
from typing import Any
from loguru import logger

from .info import ManagementInfo
from ..core.errors import (
    AttributeNotFoundError,
    InstanceAlreadyRegisteredError,
    InstanceNotFoundError,
    InvalidArgumentError,
    OperationNotAvailableError,
    ReadOnlyAttributeError,
)

DEFAULT_DOMAIN = "topic-binder"


def management_info(obj: Any) -> ManagementInfo:
    info = getattr(type(obj), "MANAGEMENT_INFO", None)
    if not isinstance(info, ManagementInfo):
        raise InvalidArgumentError(
            f"{type(obj).__name__} does not declare MANAGEMENT_INFO"
        )
    return info


def object_name(obj: Any, domain: str = DEFAULT_DOMAIN) -> str:
    """Builds the identity of a managed object from its key attributes."""
    info = management_info(obj)
    properties = []
    for attribute in info.key_attributes:
        value = getattr(obj, attribute.name)
        if value is None or value == "":
            raise InvalidArgumentError(
                f"Key attribute '{attribute.name}' must be set before registration"
            )
        properties.append(f"{attribute.key}={value}")

    if not properties:
        raise InvalidArgumentError(f"{type(obj).__name__} declares no key attributes")
    return f"{domain}:{','.join(properties)}"


class ManagementRegistry:
    def __init__(self, domain: str = DEFAULT_DOMAIN):
        self.domain = domain
        self._objects: dict[str, Any] = {}
        self._lock = threading.Lock()

    def register(self, obj: Any) -> str:
        name = object_name(obj, self.domain)
        with self._lock:
            if name in self._objects:
                raise InstanceAlreadyRegisteredError(f"'{name}' is already registered")
            self._objects[name] = obj
        on_registered = getattr(obj, "on_registered", None)
        if on_registered is not None:
            on_registered(name)
        logger.debug(f"Registered managed object '{name}'")
        return name

    def unregister(self, name: str) -> None:
        with self._lock:
            obj = self._objects.pop(name, None)
            if obj is None:
                raise InstanceNotFoundError(f"'{name}' is not registered")
        on_unregistered = getattr(obj, "on_unregistered", None)
        if on_unregistered is not None:
            on_unregistered()
        logger.debug(f"Unregistered managed object '{name}'")

    def is_registered(self, name: str) -> bool:
        return name in self._objects

    def names(self) -> list[str]:
        return sorted(self._objects)

    def lookup(self, name: str) -> Any:
        try:
            return self._objects[name]
        except KeyError:
            raise InstanceNotFoundError(f"'{name}' is not registered") from None

    def _attribute(self, name: str, attribute: str):
        obj = self.lookup(name)
        managed = management_info(obj).attribute(attribute)
        if managed is None:
            raise AttributeNotFoundError(
                f"'{name}' has no managed attribute '{attribute}'"
            )
        return obj, managed

    def get_attribute(self, name: str, attribute: str) -> Any:
        obj, managed = self._attribute(name, attribute)
        return getattr(obj, managed.name)

    def set_attribute(self, name: str, attribute: str, value: Any) -> None:
        obj, managed = self._attribute(name, attribute)
        if managed.read_only:
            raise ReadOnlyAttributeError(f"Attribute '{attribute}' of '{name}' is read-only")
        setattr(obj, managed.name, value)
        logger.info(f"'{name}': set {attribute}={value!r}")

    def attributes(self, name: str) -> dict[str, Any]:
        obj = self.lookup(name)
        return {a.name: getattr(obj, a.name) for a in management_info(obj).attributes}

    def missing_required(self, name: str) -> list[str]:
        obj = self.lookup(name)
        return [
            a.name
            for a in management_info(obj).required_attributes
            if getattr(obj, a.name) in (None, "")
        ]

    def invoke(self, name: str, operation: str) -> Any:
        obj = self.lookup(name)
        managed = management_info(obj).operation(operation)
        if managed is None:
            available = ", ".join(o.name for o in management_info(obj).operations)
            raise OperationNotAvailableError(
                f"Operation '{operation}' not available on '{name}'. "
                f"Available operations: {available}"
            )
        logger.info(f"Invoking '{operation}' on '{name}'")
        return getattr(obj, managed.name)()

    def describe(self, name: str) -> str:
        """Human-readable summary of a registered object's management surface."""
        obj = self.lookup(name)
        info = management_info(obj)
        lines = [f"{name}: {info.description}", "Attributes:"]
        for a in info.attributes:
            flags = [
                flag
                for flag, enabled in (
                    ("key", a.key is not None),
                    ("read-only", a.read_only),
                    ("required", a.required),
                )
                if enabled
            ]
            suffix = f" [{', '.join(flags)}]" if flags else ""
            lines.append(f"  {a.name}{suffix}: {a.description}")
        lines.append("Operations:")
        for o in info.operations:
            lines.append(f"  {o.name}: {o.description}")
        return "\n".join(lines)
