"""Exceptions raised while resolving cluster API resources."""


class FederateError(Exception):
    """Base exception for kube-federate errors."""

    pass


class DiscoveryError(FederateError):
    """The cluster's discovery endpoints could not be queried or understood.

    Raised when a client cannot be constructed from the connection context,
    when listing the server-preferred resources fails, or when the server
    reports a malformed group/version string.
    """

    pass


class NotFoundError(FederateError):
    """No API resource matched the requested name."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unable to find api resource named {key!r}.")
        self.key = key
