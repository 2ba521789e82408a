from __future__ import annotations


class MotoFinanceError(Exception):
    """Base class for errors raised by the back-office services."""


class NotFoundError(MotoFinanceError):
    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' not found")


class ConflictError(MotoFinanceError):
    """A row with the same unique identifier already exists."""


class BusinessRuleError(MotoFinanceError):
    """The request is well formed but breaks a financing rule (e.g. bike not available)."""


class AuthenticationError(MotoFinanceError):
    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class PermissionDeniedError(MotoFinanceError):
    def __init__(self, role: str, action: str) -> None:
        self.role = role
        self.action = action
        super().__init__(f"Role '{role}' is not permitted to {action}")


class SmsGatewayError(MotoFinanceError):
    def __init__(self, recipient_phone: str, message: str) -> None:
        self.recipient_phone = recipient_phone
        super().__init__(f"SMS to '{recipient_phone}' failed: {message}")
