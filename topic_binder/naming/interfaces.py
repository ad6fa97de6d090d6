from abc import ABC, abstractmethod
from typing import Any


class INamingService(ABC):
    """Defines a contract for a directory that publishes resources under names."""

    @abstractmethod
    def bind(self, name: str, resource: Any) -> None:
        """
        Publishes a resource under the given name.
        Raises NameAlreadyBoundError if the name is taken.
        """
        raise NotImplementedError

    @abstractmethod
    def unbind(self, name: str) -> None:
        """
        Removes the binding for the given name.
        Raises NameNotFoundError if nothing is bound under it.
        """
        raise NotImplementedError

    @abstractmethod
    def lookup(self, name: str) -> Any:
        """Returns the resource bound under the given name."""
        raise NotImplementedError

    @abstractmethod
    def list_names(self) -> list[str]:
        """Returns all bound names, sorted."""
        raise NotImplementedError
