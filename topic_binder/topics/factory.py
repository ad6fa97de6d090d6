from loguru import logger

from .interfaces import ITopicFactory
from .topic import TopicHandle
from ..core.errors import InvalidArgumentError
from ..qos.policy import DataReaderQosPolicy, DataWriterQosPolicy, TopicQosPolicy


class TopicFactory(ITopicFactory):
    def construct(
        self,
        name: str,
        reader_policy: DataReaderQosPolicy,
        writer_policy: DataWriterQosPolicy,
        topic_policy: TopicQosPolicy,
    ) -> TopicHandle:
        if not name:
            raise InvalidArgumentError("Topic name cannot be empty")

        topic = TopicHandle(
            name=name,
            reader_policy=reader_policy,
            writer_policy=writer_policy,
            topic_policy=topic_policy,
        )
        logger.debug(f"Constructed topic '{name}' with topic QoS [{topic_policy}]")
        return topic
