from dataclasses import dataclass, field


@dataclass(frozen=True)
class ManagedAttribute:
    """
    One attribute exposed through the management registry.

    `name` is the Python attribute read and written on the managed object.
    `key` is the object-name property the attribute contributes to the
    instance identity, or None for ordinary attributes.
    """

    name: str
    description: str = ""
    read_only: bool = False
    required: bool = False
    key: str | None = None


@dataclass(frozen=True)
class ManagedOperation:
    name: str
    description: str = ""


@dataclass(frozen=True)
class ManagementInfo:
    """Declarative registration table for a managed class."""

    description: str
    attributes: tuple[ManagedAttribute, ...] = field(default_factory=tuple)
    operations: tuple[ManagedOperation, ...] = field(default_factory=tuple)

    def attribute(self, name: str) -> ManagedAttribute | None:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    def operation(self, name: str) -> ManagedOperation | None:
        for operation in self.operations:
            if operation.name == name:
                return operation
        return None

    @property
    def key_attributes(self) -> tuple[ManagedAttribute, ...]:
        return tuple(a for a in self.attributes if a.key is not None)

    @property
    def required_attributes(self) -> tuple[ManagedAttribute, ...]:
        return tuple(a for a in self.attributes if a.required)
