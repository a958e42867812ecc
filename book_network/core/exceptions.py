"""Domain errors raised by the credential store, authentication and token services."""


class BookNetworkError(Exception):
    """Base class for request-scoped domain failures; routes map these to HTTP errors."""

    default_message = "Request failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationFailedError(BookNetworkError):
    """Unknown email or wrong password. Both cases share one message on purpose."""

    default_message = "Invalid email or password."


class AccountLockedError(BookNetworkError):
    default_message = "User account is locked."


class AccountDisabledError(BookNetworkError):
    default_message = "User account is not activated."


class TokenNotFoundError(BookNetworkError):
    default_message = "Invalid token."


class TokenExpiredError(BookNetworkError):
    default_message = "Token has expired."


class TokenAlreadyValidatedError(BookNetworkError):
    default_message = "Token has already been used."


class DuplicateEmailError(BookNetworkError):
    default_message = "A user with this email already exists."


class DuplicateRoleNameError(BookNetworkError):
    default_message = "A role with this name already exists."


class RoleNotFoundError(BookNetworkError):
    default_message = "Role not found."


class ImmutableFieldError(BookNetworkError):
    default_message = "created_date is set once on create and cannot be changed."
