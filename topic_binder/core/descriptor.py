import threading
from typing import Any
from loguru import logger

from .errors import IllegalStateError, InvalidArgumentError
from .interfaces import IService
from ..management.info import ManagedAttribute, ManagedOperation, ManagementInfo
from ..naming.interfaces import INamingService
from ..naming.memory import default_naming_service
from ..qos.policy import DataReaderQosPolicy, DataWriterQosPolicy, TopicQosPolicy
from ..topics.factory import TopicFactory
from ..topics.interfaces import ITopicFactory
from ..topics.topic import TopicHandle

TOPIC_TYPE = "Topic"


class DestinationDescriptor(IService):
    """
    Configuration and lifecycle of one messaging destination.

    The descriptor is configured through its attributes while stopped. start()
    checks that the required attributes are present, builds a topic from the
    destination name and the three QoS policy strings and binds it in the
    naming service under `jndi_name`. stop() removes that binding.
    """

    MANAGEMENT_INFO = ManagementInfo(
        description="Topic destination bound in a naming service",
        attributes=(
            ManagedAttribute(
                "destination_type", "Destination type", read_only=True, key="type"
            ),
            ManagedAttribute(
                "destination_name", "Destination name", read_only=True, key="destination"
            ),
            ManagedAttribute("jndi_name", "Naming service key", required=True),
            ManagedAttribute("data_reader_policy", "Data reader QoS policy"),
            ManagedAttribute("data_writer_policy", "Data writer QoS policy"),
            ManagedAttribute("topic_policy", "Topic QoS policy"),
            ManagedAttribute("is_started", "Lifecycle state", read_only=True),
        ),
        operations=(
            ManagedOperation("start", "Bind the topic under its naming service key"),
            ManagedOperation("stop", "Unbind the topic"),
        ),
    )

    def __init__(
        self,
        destination_name: str | None = None,
        destination_type: str | None = None,
        jndi_name: str | None = None,
        data_reader_policy: str | None = None,
        data_writer_policy: str | None = None,
        topic_policy: str | None = None,
        naming: INamingService | None = None,
        topic_factory: ITopicFactory | None = None,
    ):
        self._lock = threading.RLock()
        self._started = False
        self._log = None
        self._topic: TopicHandle | None = None
        self._bound_name: str | None = None
        self._object_name: str | None = None

        self._naming = naming if naming is not None else default_naming_service()
        self._topic_factory = topic_factory or TopicFactory()

        self._destination_name: str | None = None
        self._destination_type: str | None = None
        self._jndi_name: str | None = None
        self._data_reader_policy: str | None = None
        self._data_writer_policy: str | None = None
        self._topic_policy: str | None = None

        if destination_name is not None:
            self.destination_name = destination_name
        if destination_type is not None:
            self.destination_type = destination_type
        if jndi_name is not None:
            self.jndi_name = jndi_name
        self.data_reader_policy = data_reader_policy
        self.data_writer_policy = data_writer_policy
        self.topic_policy = topic_policy

    @classmethod
    def from_config(
        cls,
        config: dict[str, Any],
        naming: INamingService | None = None,
        topic_factory: ITopicFactory | None = None,
    ) -> "DestinationDescriptor":
        """Builds a descriptor from one entry of the `destinations` config list."""
        return cls(
            destination_name=config.get("destination"),
            destination_type=config.get("type", TOPIC_TYPE),
            jndi_name=config.get("jndi_name"),
            data_reader_policy=config.get("data_reader_qos"),
            data_writer_policy=config.get("data_writer_qos"),
            topic_policy=config.get("topic_qos"),
            naming=naming,
            topic_factory=topic_factory,
        )

    def _ensure_key_mutable(self, attribute: str):
        if self._started:
            raise IllegalStateError(
                f"{self._destination_name}: cannot change key attribute "
                f"'{attribute}' while started"
            )
        if self._object_name is not None:
            raise IllegalStateError(
                f"{self._destination_name}: cannot change key attribute "
                f"'{attribute}' while registered as '{self._object_name}'"
            )

    def on_registered(self, name: str) -> None:
        with self._lock:
            self._object_name = name

    def on_unregistered(self) -> None:
        with self._lock:
            self._object_name = None

    @property
    def object_name(self) -> str | None:
        """The management registry name while registered, otherwise None."""
        return self._object_name

    @property
    def destination_name(self) -> str | None:
        return self._destination_name

    @destination_name.setter
    def destination_name(self, name: str | None):
        with self._lock:
            self._ensure_key_mutable("destination_name")
            self._destination_name = name

    @property
    def destination_type(self) -> str | None:
        return self._destination_type

    @destination_type.setter
    def destination_type(self, destination_type: str | None):
        # Only topics are supported; queues are rejected until they exist.
        if destination_type != TOPIC_TYPE:
            raise InvalidArgumentError(
                f"Unsupported destination type: {destination_type!r}"
            )
        with self._lock:
            self._ensure_key_mutable("destination_type")
            self._destination_type = destination_type

    @property
    def jndi_name(self) -> str | None:
        return self._jndi_name

    @jndi_name.setter
    def jndi_name(self, name: str | None):
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError(f"JNDI name cannot be empty: {name!r}")
        with self._lock:
            self._jndi_name = name

    @property
    def data_reader_policy(self) -> str | None:
        return self._data_reader_policy

    @data_reader_policy.setter
    def data_reader_policy(self, policy: str | None):
        with self._lock:
            self._data_reader_policy = policy

    @property
    def data_writer_policy(self) -> str | None:
        return self._data_writer_policy

    @data_writer_policy.setter
    def data_writer_policy(self, policy: str | None):
        with self._lock:
            self._data_writer_policy = policy

    @property
    def topic_policy(self) -> str | None:
        return self._topic_policy

    @topic_policy.setter
    def topic_policy(self, policy: str | None):
        with self._lock:
            self._topic_policy = policy

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def topic(self) -> TopicHandle | None:
        """The bound topic while started, otherwise None."""
        return self._topic

    def key_properties(self) -> dict[str, str | None]:
        return {"destination": self._destination_name, "type": self._destination_type}

    def verify(self) -> None:
        """Checks that every required attribute has been set."""
        for attribute in ("destination_name", "destination_type", "jndi_name"):
            if not getattr(self, attribute):
                raise InvalidArgumentError(
                    f"Required attribute '{attribute}' is not set"
                )

    def start(self) -> None:
        with self._lock:
            if self._started:
                raise IllegalStateError(f"{self._destination_name} already started!")

            self.verify()

            jndi_name = self._jndi_name
            self._log = logger.bind(destination=self._destination_name)
            self._log.info(f"Binding to JNDI name: {jndi_name}")

            try:
                topic = self._topic_factory.construct(
                    self._destination_name,
                    DataReaderQosPolicy(self._data_reader_policy),
                    DataWriterQosPolicy(self._data_writer_policy),
                    TopicQosPolicy(self._topic_policy),
                )
                self._naming.bind(jndi_name, topic)
            except Exception:
                self._log.error(f"Failed to bind '{self._destination_name}' to {jndi_name}")
                self._log = None
                raise

            self._topic = topic
            self._bound_name = jndi_name
            self._started = True
            self._log.success(f"'{self._destination_name}' bound to {jndi_name}")

    def stop(self) -> None:
        with self._lock:
            if not self._started:
                raise IllegalStateError(f"{self._destination_name} already stopped!")

            self._log.info(f"Unbinding JNDI name: {self._bound_name}")

            # If unbind fails the descriptor stays started so the call can be retried.
            self._naming.unbind(self._bound_name)

            self._log = None
            self._topic = None
            self._bound_name = None
            self._started = False

    def __repr__(self) -> str:
        state = "started" if self._started else "stopped"
        return (
            f"{self.__class__.__name__}(destination={self._destination_name!r}, "
            f"type={self._destination_type!r}, jndi_name={self._jndi_name!r}, {state})"
        )
