class ServiceError(Exception):
    """Base class for domain errors raised by the service layer."""


class BookingNotAllowed(ServiceError):
    """
    Raised when a booking is attempted against a class that fails validation:
    the class is missing, not Available, or already started.
    """

    def __init__(self, message="This class is not available for booking."):
        super().__init__(message)
