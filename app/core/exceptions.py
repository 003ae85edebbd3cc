"""Domain-specific exception types."""


class SalonBookingError(Exception):
    """Base application error."""


class InvalidTimeError(SalonBookingError, ValueError):
    """Raised when a wall-clock string is not HH:MM or HH:MM:SS."""


class InvalidAvailabilityRequest(SalonBookingError, ValueError):
    """Raised when an availability or conflict query fails its preconditions."""


class AvailabilityLookupError(SalonBookingError):
    """Raised when one of the calendar, slot or booking lookups fails."""


class BookingNotFound(SalonBookingError):
    """Raised when a booking does not exist for the salon."""


class BookingConflict(SalonBookingError):
    """Raised when a proposed booking overlaps a committed one."""

    def __init__(self, conflicts):
        super().__init__("Time slot overlaps with existing booking")
        self.conflicts = conflicts


class InvalidStatusTransition(SalonBookingError):
    """Raised when a booking status change is not allowed."""

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move booking from '{current}' to '{target}'")
        self.current = current
        self.target = target


class ArchiveNotAllowed(SalonBookingError):
    """Raised when archiving a booking that is not completed."""


class SlotValidationError(SalonBookingError, ValueError):
    """Raised when a submitted slot list is malformed."""


class WorkingHoursValidationError(SalonBookingError, ValueError):
    """Raised when a submitted working week is malformed."""

    def __init__(self, errors):
        super().__init__("; ".join(errors))
        self.errors = errors


class SalonNotFound(SalonBookingError):
    """Raised when a salon does not exist or is inactive."""


class ServiceNotFound(SalonBookingError):
    """Raised when a service or home service is missing, inactive or foreign."""


class BookingNotBookable(SalonBookingError):
    """Raised when a public booking falls outside the salon's bookable hours."""

    def __init__(self, code: str, details: str = ""):
        super().__init__(details or code)
        self.code = code
        self.details = details
