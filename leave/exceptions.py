from django.core.exceptions import ImproperlyConfigured

from rest_framework.exceptions import ValidationError


class LeaveServiceNotInjectedError(ImproperlyConfigured):
    pass


# API Validation Errors
class LeaveRequestValidationError(ValidationError):
    default_detail = "Invalid leave request."
    default_code = "invalid_leave_request"


class ExtendedLeaveRequestValidationError(ValidationError):
    default_detail = "Invalid extended leave request."
    default_code = "invalid_extended_leave_request"
