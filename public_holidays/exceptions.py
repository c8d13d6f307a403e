from django.core.exceptions import ImproperlyConfigured


class PublicHolidayError(Exception):
    """Base exception for public holiday errors"""

    default_message = ""

    def __init__(self, message: str | None = None):
        if message is None:
            message = self.default_message
        super().__init__(message)


class HolidayApiError(PublicHolidayError):
    """Raised when the holiday API can't be reached or returns an unusable payload"""

    default_message = "Public holiday API request failed"


class HolidayLookupError(PublicHolidayError):
    """Raised when holidays can't be loaded for a date"""

    default_message = "Unable to determine public holidays"


class HolidayServiceNotInjectedError(ImproperlyConfigured):
    pass
