import signal
import threading
from loguru import logger

from .core.descriptor import DestinationDescriptor
from .management.registry import ManagementRegistry


class DestinationManager:
    """Starts, supervises and stops a set of destination descriptors."""

    def __init__(
        self,
        destinations: list[DestinationDescriptor],
        registry: ManagementRegistry | None = None,
    ):
        self._destinations = destinations
        self._registry = registry or ManagementRegistry()
        self._stop_event = threading.Event()
        self._names: dict[int, str] = {}

    @property
    def registry(self) -> ManagementRegistry:
        return self._registry

    def register_all(self) -> list[str]:
        """Registers every destination with the management registry."""
        for destination in self._destinations:
            if id(destination) in self._names:
                continue
            self._names[id(destination)] = self._registry.register(destination)
        return [self._names[id(d)] for d in self._destinations]

    def start_all(self):
        """
        Starts destinations in configuration order. If one fails, the ones
        already started are stopped again and the error is re-raised.
        """
        started: list[DestinationDescriptor] = []
        for destination in self._destinations:
            if destination.is_started:
                continue
            try:
                destination.start()
            except Exception:
                logger.critical(
                    f"Could not start destination '{destination.destination_name}'. "
                    f"Rolling back {len(started)} started destination(s)."
                )
                self._stop(reversed(started))
                raise
            started.append(destination)

        logger.success(f"{len(started)} destination(s) started.")

    def stop_all(self) -> bool:
        """Stops started destinations in reverse order. Returns False if any failed."""
        return self._stop(reversed(self._destinations))

    @staticmethod
    def _stop(destinations) -> bool:
        clean = True
        for destination in destinations:
            if not destination.is_started:
                continue
            try:
                destination.stop()
            except Exception:
                clean = False
                logger.exception(
                    f"Error while stopping destination '{destination.destination_name}'"
                )
        return clean

    def request_stop(self, *_):
        self._stop_event.set()

    def run(self):
        logger.info("Starting destinations...")
        previous_handler = signal.signal(signal.SIGTERM, self.request_stop)

        try:
            self.register_all()
            self.start_all()

            logger.success("All destinations bound. Waiting for shutdown signal.")
            self._stop_event.wait()
        except KeyboardInterrupt:
            logger.info("Keyboard interruption detected. Shutting down...")
        finally:
            self.shutdown()
            if previous_handler is not None:
                signal.signal(signal.SIGTERM, previous_handler)

    def shutdown(self):
        logger.info("Unbinding destinations...")
        if self.stop_all():
            logger.success("All destinations unbound.")
        else:
            logger.error("Some destinations could not be unbound.")

        for name in self._names.values():
            if self._registry.is_registered(name):
                self._registry.unregister(name)
        self._names.clear()
