import datetime

from django.db.models.query import QuerySet

from leave.constants import ACTIVE_LEAVE_STATUSES, LeaveStatus


class BaseLeaveQuerySet(QuerySet):
    def filter_by_brigade(self, brigade_id: int):
        return self.filter(member__brigade_id=brigade_id)

    def for_member(self, member_id: int):
        return self.filter(member_id=member_id)

    def active(self):
        return self.filter(status__in=ACTIVE_LEAVE_STATUSES)

    def pending(self):
        return self.filter(status=LeaveStatus.PENDING)


class LeaveRequestQuerySet(BaseLeaveQuerySet):
    def upcoming(self, today: datetime.date):
        return self.filter(training_date__gte=today)


class ExtendedLeaveRequestQuerySet(BaseLeaveQuerySet):
    def overlapping(self, start_date: datetime.date, end_date: datetime.date):
        return self.filter(start_date__lte=end_date, end_date__gte=start_date)
