"""Base domain exceptions."""


class DomainException(Exception):
    """
    Base exception for all domain-level errors.

    `code` is the stable machine-readable identifier returned to API
    clients; `message` is the human-readable explanation.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundException(DomainException):
    """
    A user-owned resource, or a fixed catalog entry, that does not exist.

    Resources owned by another user are reported the same way.
    """

    def __init__(self, resource: str, identifier: str, code: str):
        super().__init__(
            message=f"{resource} not found: {identifier}",
            code=code,
        )
        self.resource = resource
        self.identifier = identifier
