from abc import ABC, abstractmethod


class IService(ABC):
    """Defines a contract for managed components with a start/stop lifecycle."""

    @property
    @abstractmethod
    def is_started(self) -> bool:
        """Returns True between a successful start() and the matching stop()."""
        raise NotImplementedError

    @abstractmethod
    def start(self) -> None:
        """Activates the component."""
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        """Deactivates the component and releases its resources."""
        raise NotImplementedError
