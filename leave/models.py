from django.db import models

from brigades.models import Member
from common.models import BaseModel
from leave.constants import LeaveStatus
from leave.querysets import ExtendedLeaveRequestQuerySet, LeaveRequestQuerySet


class LeaveDecisionMixin(BaseModel):
    """
    Status and decision fields shared by leave requests. A request leaves
    `pending` at most once; cancelling a pending request deletes it.
    """

    reason = models.TextField(blank=True)
    status = models.CharField(
        max_length=20, choices=LeaveStatus.choices, default=LeaveStatus.PENDING, db_index=True
    )
    decided_by = models.ForeignKey(
        Member,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="decided_%(class)ss",
    )
    decided_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        abstract = True

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.PENDING


class LeaveRequest(LeaveDecisionMixin):
    member = models.ForeignKey(Member, on_delete=models.CASCADE, related_name="leave_requests")
    training_date = models.DateField()

    objects = LeaveRequestQuerySet.as_manager()

    class Meta:
        ordering = ("training_date",)
        constraints = (
            models.UniqueConstraint(
                fields=("member", "training_date"),
                condition=~models.Q(status=LeaveStatus.DENIED),
                name="unique_active_leave_per_member_date",
            ),
        )

    def __str__(self):
        return f"Leave for {self.member} on {self.training_date} ({self.status})"


class ExtendedLeaveRequest(LeaveDecisionMixin):
    """
    Leave covering every training in a date range. `trainings_affected` is
    counted once when the request is created.
    """

    member = models.ForeignKey(
        Member, on_delete=models.CASCADE, related_name="extended_leave_requests"
    )
    start_date = models.DateField()
    end_date = models.DateField()
    trainings_affected = models.PositiveIntegerField(default=0)

    objects = ExtendedLeaveRequestQuerySet.as_manager()

    class Meta:
        ordering = ("start_date",)

    def __str__(self):
        return f"Extended leave for {self.member} {self.start_date} to {self.end_date} ({self.status})"
