"""
QoS policy strings.

A policy string is a comma-separated list of ``key=value`` pairs, for example
``"reliability.kind=RELIABLE, history.kind=KEEP_LAST, history.depth=10"``.
Keys are dotted ``policy.field`` names and are matched case-insensitively.
An absent or blank string yields an empty policy, i.e. all defaults apply.

Each policy kind accepts its own set of keys; anything else is rejected with
a QosPolicyError so that typos surface when a destination is started rather
than when the first sample is published.
"""

import math
from typing import Callable, Iterator
from ..core.errors import QosPolicyError

Validator = Callable[[str], str]

UNLIMITED = "-1"
INFINITE = "INFINITE"


def _enum(*choices: str) -> Validator:
    def validate(value: str) -> str:
        normalized = value.upper()
        if normalized not in choices:
            raise ValueError(f"expected one of {', '.join(choices)}, got '{value}'")
        return normalized

    return validate


def _integer(value: str) -> str:
    if value.upper() == "UNLIMITED":
        return UNLIMITED
    try:
        number = int(value)
    except ValueError:
        raise ValueError(f"expected an integer, got '{value}'") from None
    if number < 0 and str(number) != UNLIMITED:
        raise ValueError(f"expected a non-negative integer, got '{value}'")
    return str(number)


def _signed_integer(value: str) -> str:
    try:
        return str(int(value))
    except ValueError:
        raise ValueError(f"expected an integer, got '{value}'") from None


def _duration(value: str) -> str:
    # Seconds, fractional allowed.
    if value.upper() == INFINITE:
        return INFINITE
    try:
        seconds = float(value)
    except ValueError:
        raise ValueError(f"expected seconds or {INFINITE}, got '{value}'") from None
    if not math.isfinite(seconds):
        raise ValueError(f"expected seconds or {INFINITE}, got '{value}'")
    if seconds < 0:
        raise ValueError(f"duration cannot be negative, got '{value}'")
    return repr(seconds) if seconds != int(seconds) else str(int(seconds))


def _boolean(value: str) -> str:
    normalized = value.lower()
    if normalized not in ("true", "false"):
        raise ValueError(f"expected true or false, got '{value}'")
    return normalized


def _text(value: str) -> str:
    return value


_DURABILITY_KIND = _enum("VOLATILE", "TRANSIENT_LOCAL", "TRANSIENT", "PERSISTENT")
_HISTORY_KIND = _enum("KEEP_LAST", "KEEP_ALL")

_COMMON_FIELDS: dict[str, Validator] = {
    "durability.kind": _DURABILITY_KIND,
    "deadline.period": _duration,
    "latency_budget.duration": _duration,
    "liveliness.kind": _enum(
        "AUTOMATIC", "MANUAL_BY_PARTICIPANT", "MANUAL_BY_TOPIC"
    ),
    "liveliness.lease_duration": _duration,
    "reliability.kind": _enum("BEST_EFFORT", "RELIABLE"),
    "reliability.max_blocking_time": _duration,
    "destination_order.kind": _enum(
        "BY_RECEPTION_TIMESTAMP", "BY_SOURCE_TIMESTAMP"
    ),
    "history.kind": _HISTORY_KIND,
    "history.depth": _integer,
    "resource_limits.max_samples": _integer,
    "resource_limits.max_instances": _integer,
    "resource_limits.max_samples_per_instance": _integer,
    "ownership.kind": _enum("SHARED", "EXCLUSIVE"),
}

_DURABILITY_SERVICE_FIELDS: dict[str, Validator] = {
    "durability_service.service_cleanup_delay": _duration,
    "durability_service.history_kind": _HISTORY_KIND,
    "durability_service.history_depth": _integer,
    "durability_service.max_samples": _integer,
    "durability_service.max_instances": _integer,
    "durability_service.max_samples_per_instance": _integer,
}


class QosPolicy:
    """Immutable, validated view of a QoS policy string."""

    KIND = "generic"
    FIELDS: dict[str, Validator] = {}

    def __init__(self, spec: str | None = None):
        self._source = spec
        self._values = self._parse(spec)

    @classmethod
    def _parse(cls, spec: str | None) -> dict[str, str]:
        values: dict[str, str] = {}
        if spec is None or not spec.strip():
            return values

        for item in spec.split(","):
            item = item.strip()
            if not item:
                continue
            if "=" not in item:
                raise QosPolicyError(cls.KIND, f"missing '=' in '{item}'")

            key, _, raw_value = item.partition("=")
            key = key.strip().lower()
            raw_value = raw_value.strip()

            validator = cls.FIELDS.get(key)
            if validator is None:
                raise QosPolicyError(cls.KIND, f"unknown property '{key}'")
            if key in values:
                raise QosPolicyError(cls.KIND, f"duplicate property '{key}'")
            if not raw_value:
                raise QosPolicyError(cls.KIND, f"property '{key}' has no value")

            try:
                values[key] = validator(raw_value)
            except ValueError as e:
                raise QosPolicyError(cls.KIND, f"property '{key}': {e}") from e

        return values

    @property
    def source(self) -> str | None:
        """The string this policy was parsed from."""
        return self._source

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._values.get(key.lower(), default)

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)

    def __contains__(self, key: str) -> bool:
        return key.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __bool__(self) -> bool:
        return bool(self._values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, QosPolicy):
            return NotImplemented
        return self.KIND == other.KIND and self._values == other._values

    def __hash__(self) -> int:
        return hash((self.KIND, tuple(sorted(self._values.items()))))

    def __str__(self) -> str:
        return ",".join(f"{key}={value}" for key, value in sorted(self._values.items()))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"


class DataReaderQosPolicy(QosPolicy):
    KIND = "data reader"
    FIELDS = {
        **_COMMON_FIELDS,
        "user_data.value": _text,
        "time_based_filter.minimum_separation": _duration,
        "reader_data_lifecycle.autopurge_nowriter_samples_delay": _duration,
        "reader_data_lifecycle.autopurge_disposed_samples_delay": _duration,
    }


class DataWriterQosPolicy(QosPolicy):
    KIND = "data writer"
    FIELDS = {
        **_COMMON_FIELDS,
        **_DURABILITY_SERVICE_FIELDS,
        "transport_priority.value": _signed_integer,
        "lifespan.duration": _duration,
        "user_data.value": _text,
        "ownership_strength.value": _signed_integer,
        "writer_data_lifecycle.autodispose_unregistered_instances": _boolean,
    }


class TopicQosPolicy(QosPolicy):
    KIND = "topic"
    FIELDS = {
        **_COMMON_FIELDS,
        **_DURABILITY_SERVICE_FIELDS,
        "topic_data.value": _text,
        "transport_priority.value": _signed_integer,
        "lifespan.duration": _duration,
    }
