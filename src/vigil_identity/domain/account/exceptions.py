"""Account domain exceptions.

Custom exceptions for the account domain, used for validation
and business rule violations.
"""

from vigil_identity.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ForbiddenError,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_EMAIL, field="email")


class EmailAlreadyRegisteredError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Email address is already registered",
            code=ErrorCode.EMAIL_ALREADY_REGISTERED,
            details={"email": email},
        )


class AccountNotFoundError(EntityNotFoundError):
    """Account not found."""

    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__(
            f"Account not found: {account_id}",
            code=ErrorCode.ACCOUNT_NOT_FOUND,
        )


class RoleNotFoundError(EntityNotFoundError):
    """Role not found."""

    def __init__(self, role: str) -> None:
        self.role = role
        super().__init__(f"Role not found: {role}", code=ErrorCode.ROLE_NOT_FOUND)


class RoleAlreadyExistsError(ConflictError):
    """Role name already taken."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Role already exists: {name}",
            code=ErrorCode.ROLE_ALREADY_EXISTS,
        )


class SystemRoleProtectedError(BusinessRuleViolation):
    """System roles cannot be modified or deleted."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Cannot modify system role: {name}",
            code=ErrorCode.SYSTEM_ROLE_PROTECTED,
        )


class RoleInUseError(BusinessRuleViolation):
    """Role still has members."""

    def __init__(self, name: str, member_count: int) -> None:
        self.name = name
        self.member_count = member_count
        super().__init__(
            f"Cannot delete role that is assigned to accounts: {name}",
            code=ErrorCode.ROLE_IN_USE,
            details={"member_count": member_count},
        )


class SuperAdminRequiredError(ForbiddenError):
    """Only a super admin may grant, revoke or manage the super_admin role."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(
            f"Super admin privileges required to {action}",
            details={"action": action},
        )
