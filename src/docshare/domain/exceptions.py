"""Domain exceptions.

Every exception carries a stable machine-readable ``code``. The HTTP layer
maps exception classes to status codes in one place
(``docshare.interfaces.api.errors``).
"""


class DocShareError(Exception):
    """Base exception for docshare."""

    code = "INTERNAL_ERROR"
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


# --- validation (400) ---


class ValidationError(DocShareError):
    """Validation failed for input data."""

    code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class EmailAlreadyRegistered(DocShareError):
    """An account with this e-mail already exists."""

    code = "EMAIL_ALREADY_REGISTERED"
    default_message = "Email already registered"


# --- OTP lifecycle (400) ---


class OtpError(DocShareError):
    """Base for one-time code verification failures."""

    code = "OTP_ERROR"


class AlreadyVerified(OtpError):
    code = "ALREADY_VERIFIED"
    default_message = "Email already verified"


class NoPendingCode(OtpError):
    code = "NO_PENDING_CODE"
    default_message = "No OTP generated for this user"


class OtpExpired(OtpError):
    code = "OTP_EXPIRED"
    default_message = "OTP expired"


class OtpMismatch(OtpError):
    code = "OTP_MISMATCH"
    default_message = "Invalid OTP"


# --- authentication (401) ---


class AuthenticationFailed(DocShareError):
    """Request could not be attributed to a live, verified account."""

    code = "NOT_AUTHENTICATED"
    default_message = "Not authorized to access this route"


class MissingToken(AuthenticationFailed):
    code = "MISSING_TOKEN"
    default_message = "No authorization token provided"


class InvalidToken(AuthenticationFailed):
    code = "INVALID_TOKEN"
    default_message = "Invalid authorization token"


class TokenExpired(InvalidToken):
    code = "TOKEN_EXPIRED"
    default_message = "Authorization token expired"


class UnknownUser(AuthenticationFailed):
    code = "UNKNOWN_USER"
    default_message = "User not found"


class AccountNotVerified(AuthenticationFailed):
    code = "ACCOUNT_NOT_VERIFIED"
    default_message = "Please verify your email before continuing"


class InvalidCredentials(AuthenticationFailed):
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid credentials"


# --- authorization and sharing state ---


class PermissionDenied(DocShareError):
    """User does not have permission for the requested action."""

    code = "FORBIDDEN"
    default_message = "Permission denied"


class NotFound(DocShareError):
    """Requested resource was not found."""

    code = "NOT_FOUND"

    def __init__(
        self,
        resource: str = "Resource",
        identifier: str | None = None,
        message: str | None = None,
    ) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(message or f"{resource} not found")


class AccountNotFound(NotFound):
    code = "ACCOUNT_NOT_FOUND"

    def __init__(self, email: str | None = None) -> None:
        super().__init__("User", email)


class TargetNotFound(NotFound):
    """Share target e-mail does not belong to a registered user."""

    code = "TARGET_NOT_FOUND"

    def __init__(self, email: str | None = None) -> None:
        super().__init__("User", email)


class NotShared(NotFound):
    """Document has no share entry for the given user."""

    code = "NOT_SHARED"

    def __init__(self, user_id: str | None = None) -> None:
        super().__init__("Share", user_id, "Document not shared with this user")


class AlreadyShared(DocShareError):
    code = "ALREADY_SHARED"
    default_message = "Document already shared with this user"


class SelfShare(DocShareError):
    code = "SELF_SHARE"
    default_message = "Cannot share document with yourself"


# --- external collaborators (500) ---


class DependencyError(DocShareError):
    """An external collaborator (content store, mail) failed."""

    code = "DEPENDENCY_ERROR"
    default_message = "External service failure"


class StorageError(DependencyError):
    code = "STORAGE_ERROR"
    default_message = "Failed to upload file to cloud storage"


class NotificationError(DependencyError):
    code = "NOTIFICATION_ERROR"
    default_message = "Failed to send verification email"
