from django.db.models import TextChoices


class LeaveStatus(TextChoices):
    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    DENIED = "denied", "Denied"


# Requests in these states hold a training date and count towards the limit.
ACTIVE_LEAVE_STATUSES = (LeaveStatus.PENDING, LeaveStatus.APPROVED)

DEFAULT_LEAVE_MAX_PENDING = 3
DEFAULT_UPCOMING_LIMIT = 3
MAX_UPCOMING_LIMIT = 10
DEFAULT_UPCOMING_MAX_WEEKS = 20
