from abc import ABC, abstractmethod

from .topic import TopicHandle
from ..qos.policy import DataReaderQosPolicy, DataWriterQosPolicy, TopicQosPolicy


class ITopicFactory(ABC):
    """Defines a contract for building topic resources that can be bound by name."""

    @abstractmethod
    def construct(
        self,
        name: str,
        reader_policy: DataReaderQosPolicy,
        writer_policy: DataWriterQosPolicy,
        topic_policy: TopicQosPolicy,
    ) -> TopicHandle:
        raise NotImplementedError
