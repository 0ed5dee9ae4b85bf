"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """User input rejected before any network call"""

    pass


class InvalidAmount(ValidationError):
    """Payment amount is not a positive decimal number"""

    def __init__(self, message: str = "Please enter a valid positive amount."):
        super().__init__(message)


class MissingRecipient(ValidationError):
    """Payment has no recipient account"""

    def __init__(self, message: str = "Please enter a recipient account ID."):
        super().__init__(message)


class EmptyAccountId(ValidationError):
    """Account lookup requested without an account identifier"""

    def __init__(self, message: str = "Please enter an account number"):
        super().__init__(message)


class NoSenderAccount(DomainException):
    """Payment submitted without a resolved sender account"""

    def __init__(self, message: str = "Error: Sender account not found."):
        super().__init__(message)


class GatewayError(DomainException):
    """Backend service returned an error or is unavailable"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AccountNotFound(GatewayError):
    """Account service has no account with the requested number"""

    pass


class SessionStateError(DomainException):
    """Requested action is not allowed in the current session state"""

    pass


class SessionBusyError(SessionStateError):
    """Another network operation is still in flight"""

    pass


class InvalidTransitionError(SessionStateError):
    """Transition is not defined from the current screen"""

    pass
