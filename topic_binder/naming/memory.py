import threading
from typing import Any
from loguru import logger

from .interfaces import INamingService
from ..core.errors import (
    InvalidArgumentError,
    NameAlreadyBoundError,
    NameNotFoundError,
    NamingServiceUnavailableError,
)


class InMemoryNamingService(INamingService):
    """
    Process-local naming directory. Names are flat strings; a name such as
    'jms/OrderEvents' is stored as-is and no intermediate contexts exist.
    """

    def __init__(self):
        self._bindings: dict[str, Any] = {}
        self._lock = threading.Lock()
        self._closed = False

    @staticmethod
    def _normalize(name: str) -> str:
        if name is None:
            raise InvalidArgumentError("Naming service key cannot be None")
        normalized = name.strip().strip("/")
        if not normalized:
            raise InvalidArgumentError(f"Invalid naming service key: '{name}'")
        return normalized

    def _ensure_open(self, name: str):
        if self._closed:
            raise NamingServiceUnavailableError(name)

    def bind(self, name: str, resource: Any) -> None:
        key = self._normalize(name)
        with self._lock:
            self._ensure_open(key)
            if key in self._bindings:
                raise NameAlreadyBoundError(key)
            self._bindings[key] = resource
        logger.debug(f"Bound '{key}' -> {resource!r}")

    def rebind(self, name: str, resource: Any) -> None:
        key = self._normalize(name)
        with self._lock:
            self._ensure_open(key)
            self._bindings[key] = resource
        logger.debug(f"Rebound '{key}' -> {resource!r}")

    def unbind(self, name: str) -> None:
        key = self._normalize(name)
        with self._lock:
            self._ensure_open(key)
            if key not in self._bindings:
                raise NameNotFoundError(key)
            del self._bindings[key]
        logger.debug(f"Unbound '{key}'")

    def lookup(self, name: str) -> Any:
        key = self._normalize(name)
        with self._lock:
            self._ensure_open(key)
            try:
                return self._bindings[key]
            except KeyError:
                raise NameNotFoundError(key) from None

    def list_names(self) -> list[str]:
        with self._lock:
            return sorted(self._bindings)

    def close(self) -> None:
        with self._lock:
            if self._bindings:
                logger.warning(
                    f"Closing naming service with {len(self._bindings)} names still bound."
                )
            self._bindings.clear()
            self._closed = True
        logger.info("Naming service closed.")


_default_service: InMemoryNamingService | None = None
_default_lock = threading.Lock()


def default_naming_service() -> InMemoryNamingService:
    """Returns the process-wide naming directory, creating it on first use."""
    global _default_service
    with _default_lock:
        if _default_service is None:
            _default_service = InMemoryNamingService()
        return _default_service
