from reportdesk.domain.exceptions import ValidationError


class InvariantViolation(ValidationError):
    pass
