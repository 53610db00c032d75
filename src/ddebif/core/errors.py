"""Exceptions raised by ddebif."""


class DelayConfigurationError(ValueError):
    """
    The delay slots of a problem are inconsistent.

    Raised when the delay function returns a different number of delays than
    there are configured slots, or when the vector field does not map the state
    space onto itself for the configured replicas.
    """
