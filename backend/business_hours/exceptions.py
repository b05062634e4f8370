"""
Custom exceptions for the business hours system.

Every exception carries a stable ``code`` so API callers can branch on the
kind of failure instead of matching message text.
"""


class BusinessHoursError(Exception):
    """Base exception for business-hours-related errors."""

    code = "business_hours_error"


class InvalidTimeFormat(BusinessHoursError):
    """Raised when a time string is not H:MM / HH:MM within 00:00-26:59."""

    code = "invalid_time_format"

    def __init__(self, value, message=None):
        self.value = value
        if message is None:
            message = (
                f"Invalid time '{value}'. Use H:MM or HH:MM with hour 0-26 "
                f"and a two-digit minute 00-59"
            )
        super().__init__(message)


class InvalidBusinessHours(BusinessHoursError):
    """Raised when an open/close pair cannot describe a business day."""

    code = "invalid_business_hours"

    def __init__(self, open_time, close_time, message=None):
        self.open_time = open_time
        self.close_time = close_time
        if message is None:
            message = f"Invalid business hours {open_time} - {close_time}"
        super().__init__(message)


class NoBusinessHoursConfigured(BusinessHoursError):
    """Raised when a store has no active business hours to resolve against."""

    code = "no_business_hours_configured"

    def __init__(self, store_location_id, message=None):
        self.store_location_id = store_location_id
        if message is None:
            message = f"No business hours configured for store {store_location_id}"
        super().__init__(message)
