"""
Domain errors of the event spot sales service.

Every failure the domain can report has its own class so callers (and the HTTP layer)
branch on the type or its `kind`, never on the message text.
"""

from src.platform.exception.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)


# Spot name validation
class InvalidSpotNameError(ValidationError):
    pass


class SpotNameRequiredError(InvalidSpotNameError):
    def __init__(self) -> None:
        super().__init__('spot name is required')


class SpotNameTooShortError(InvalidSpotNameError):
    def __init__(self) -> None:
        super().__init__('spot name must be at least 2 characters long')


class SpotNameMustStartWithLetterError(InvalidSpotNameError):
    def __init__(self) -> None:
        super().__init__('spot name must start with a letter')


class SpotNameMustEndWithNumberError(InvalidSpotNameError):
    def __init__(self) -> None:
        super().__init__('spot name must end with a number')


class InvalidSpotNumberError(ValidationError):
    def __init__(self) -> None:
        super().__init__('spot number is invalid')


class InvalidTicketTypeError(ValidationError):
    def __init__(self, ticket_type: object) -> None:
        super().__init__(f'ticket type is invalid: {ticket_type}')


class InvalidEventError(ValidationError):
    pass


# Lookups
class EventNotFoundError(NotFoundError):
    def __init__(self, event_id: str) -> None:
        super().__init__('event not found')
        self.event_id = event_id


class SpotNotFoundError(NotFoundError):
    def __init__(self, spot_ref: str) -> None:
        super().__init__('spot not found')
        self.spot_ref = spot_ref


# Reservation
class SpotAlreadyReservedError(ConflictError):
    def __init__(self, spot_id: str) -> None:
        super().__init__('spot is already reserved')
        self.spot_id = spot_id


class PartnerPricingUnavailableError(ServiceUnavailableError):
    def __init__(self, partner_id: int, reason: str) -> None:
        super().__init__(f'partner {partner_id} pricing unavailable: {reason}')
        self.partner_id = partner_id
