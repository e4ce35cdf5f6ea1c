"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class PlanNotFoundError(DomainException):
    """Requested plan does not exist"""

    pass


class MemberNotFoundError(DomainException):
    """Requested member does not exist"""

    pass


class StatusDriftError(DomainException):
    """Persisted payment status no longer matches the status derived from its dates"""

    def __init__(self, payment_id: int, stored: str, derived: str):
        super().__init__(
            f"Payment {payment_id} stored status '{stored}' but its dates derive '{derived}'"
        )
        self.payment_id = payment_id
        self.stored = stored
        self.derived = derived
