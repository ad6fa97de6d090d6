from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..qos.policy import DataReaderQosPolicy, DataWriterQosPolicy, TopicQosPolicy


@dataclass(frozen=True)
class TopicHandle:
    """
    Represents an immutable, bindable topic resource.
    Clients that look the name up receive this handle and read the QoS
    settings their readers and writers should be created with.
    """

    name: str
    reader_policy: DataReaderQosPolicy = field(default_factory=DataReaderQosPolicy)
    writer_policy: DataWriterQosPolicy = field(default_factory=DataWriterQosPolicy)
    topic_policy: TopicQosPolicy = field(default_factory=TopicQosPolicy)

    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), compare=False
    )
