class InvalidArgumentError(ValueError):
    """Raised when a configuration value is malformed or missing."""

    pass


class QosPolicyError(InvalidArgumentError):
    """Raised when a QoS policy string cannot be parsed."""

    def __init__(self, kind: str, message: str):
        self.kind = kind
        super().__init__(f"Invalid {kind} QoS policy: {message}")


class IllegalStateError(RuntimeError):
    """Raised when a lifecycle operation is invoked in the wrong state."""

    pass


class NamingServiceError(Exception):
    """Base class for bind/unbind failures reported by the naming service."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(message)


class NameAlreadyBoundError(NamingServiceError):
    def __init__(self, name: str):
        super().__init__(name, f"Name '{name}' is already bound")


class NameNotFoundError(NamingServiceError):
    def __init__(self, name: str):
        super().__init__(name, f"Name '{name}' is not bound")


class NamingServiceUnavailableError(NamingServiceError):
    def __init__(self, name: str):
        super().__init__(name, f"Naming service unavailable while resolving '{name}'")


class ManagementError(Exception):
    """Base class for errors raised by the management registry."""

    pass


class AttributeNotFoundError(ManagementError):
    pass


class ReadOnlyAttributeError(ManagementError):
    pass


class OperationNotAvailableError(ManagementError):
    pass


class InstanceAlreadyRegisteredError(ManagementError):
    pass


class InstanceNotFoundError(ManagementError):
    pass
