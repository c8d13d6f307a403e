import datetime
import logging
from typing import TYPE_CHECKING, Annotated

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from dependency_injector.wiring import Provide, inject

from brigades.models import Member
from leave.constants import DEFAULT_LEAVE_MAX_PENDING, LeaveStatus
from leave.exceptions import (
    ExtendedLeaveRequestValidationError,
    LeaveRequestValidationError,
    LeaveServiceNotInjectedError,
)
from leave.models import ExtendedLeaveRequest, LeaveRequest
from leave.services.dataclasses import LeaveQuota
from scheduling.date_utils import localize


if TYPE_CHECKING:
    from leave.services.leave_window_service import LeaveWindowService


logger = logging.getLogger(__name__)

DUPLICATE_LEAVE_MESSAGE = "Leave request already exists for this date"


class LeaveRequestService:
    """
    Validation, creation and decisions for single-training and extended leave
    requests.

    Validation returns field-keyed error messages; `create_*` raise them as a
    DRF `ValidationError`. Decisions and cancellations only apply to pending
    requests and report whether they did, so when two officers decide the
    same request at once exactly one of them wins.
    """

    @inject
    def __init__(
        self,
        leave_window_service: Annotated[
            "LeaveWindowService | None", Provide["leave_window_service"]
        ] = None,
    ) -> None:
        self.leave_window_service = leave_window_service

    @staticmethod
    def local_today(member: Member, now: datetime.datetime | None = None) -> datetime.date:
        return localize(now or timezone.now(), member.brigade.tzinfo).date()

    @staticmethod
    def max_pending() -> int:
        return getattr(settings, "LEAVE_MAX_PENDING", DEFAULT_LEAVE_MAX_PENDING)

    def quota(self, member: Member, now: datetime.datetime | None = None) -> LeaveQuota:
        """
        Pending or approved requests the member holds for today onwards.
        """
        today = self.local_today(member, now)
        return LeaveQuota(
            active_count=LeaveRequest.objects.for_member(member.pk).active().upcoming(today).count(),
            max_pending=self.max_pending(),
        )

    def validate_leave_request(
        self,
        member: Member,
        training_date: datetime.date | None,
        reason: str = "",
        now: datetime.datetime | None = None,
    ) -> dict[str, str]:
        errors: dict[str, str] = {}
        today = self.local_today(member, now)

        if training_date is None:
            errors["training_date"] = "Training date is required"
        elif training_date < today:
            errors["training_date"] = "Cannot request leave for past dates"
        elif (
            LeaveRequest.objects.for_member(member.pk)
            .active()
            .filter(training_date=training_date)
            .exists()
        ):
            errors["training_date"] = DUPLICATE_LEAVE_MESSAGE

        quota = self.quota(member, now)
        if not quota.can_request_more:
            errors["limit"] = (
                f"You can only have {quota.max_pending} pending or approved leave requests at a time"
            )

        if getattr(settings, "LEAVE_REQUIRE_REASON", False) and not (reason or "").strip():
            errors["reason"] = "Reason is required"

        return errors

    def create_leave_request(
        self,
        member: Member,
        training_date: datetime.date | None,
        reason: str = "",
        now: datetime.datetime | None = None,
    ) -> LeaveRequest:
        errors = self.validate_leave_request(member, training_date, reason, now)
        if errors:
            raise LeaveRequestValidationError(errors)

        try:
            with transaction.atomic():
                leave_request = LeaveRequest.objects.create(
                    member=member, training_date=training_date, reason=reason or ""
                )
        except IntegrityError as e:
            raise LeaveRequestValidationError({"training_date": DUPLICATE_LEAVE_MESSAGE}) from e

        logger.info("Member %s requested leave for %s", member.pk, training_date)
        return leave_request

    def approve_leave_request(
        self, leave_request_id: int, decided_by: Member, now: datetime.datetime | None = None
    ) -> bool:
        return self._decide(LeaveRequest, leave_request_id, LeaveStatus.APPROVED, decided_by, now)

    def deny_leave_request(
        self, leave_request_id: int, decided_by: Member, now: datetime.datetime | None = None
    ) -> bool:
        return self._decide(LeaveRequest, leave_request_id, LeaveStatus.DENIED, decided_by, now)

    def cancel_leave_request(self, leave_request_id: int) -> bool:
        """
        Deletes the request if it is still pending.
        """
        return self._cancel(LeaveRequest, leave_request_id)

    def validate_extended_leave_request(
        self,
        member: Member,
        start_date: datetime.date | None,
        end_date: datetime.date | None,
        now: datetime.datetime | None = None,
    ) -> dict[str, str]:
        errors: dict[str, str] = {}

        if start_date is None:
            errors["start_date"] = "Start date is required"
        elif start_date < self.local_today(member, now):
            errors["start_date"] = "Start date cannot be in the past"

        if end_date is None:
            errors["end_date"] = "End date is required"

        if start_date is not None and end_date is not None and "start_date" not in errors:
            if end_date < start_date:
                errors["end_date"] = "End date must be after start date"
            elif (
                ExtendedLeaveRequest.objects.for_member(member.pk)
                .active()
                .overlapping(start_date, end_date)
                .exists()
            ):
                errors["dates"] = (
                    "You already have an extended leave request that overlaps with these dates"
                )

        return errors

    def create_extended_leave_request(
        self,
        member: Member,
        start_date: datetime.date | None,
        end_date: datetime.date | None,
        reason: str = "",
        now: datetime.datetime | None = None,
    ) -> ExtendedLeaveRequest:
        if self.leave_window_service is None:
            raise LeaveServiceNotInjectedError("leave_window_service was not injected")

        errors = self.validate_extended_leave_request(member, start_date, end_date, now)
        if errors:
            raise ExtendedLeaveRequestValidationError(errors)

        summary = self.leave_window_service.range_count(member.brigade, start_date, end_date)
        extended_leave_request = ExtendedLeaveRequest.objects.create(
            member=member,
            start_date=start_date,
            end_date=end_date,
            reason=reason or "",
            trainings_affected=summary.count,
        )
        logger.info(
            "Member %s requested extended leave %s to %s covering %s trainings",
            member.pk,
            start_date,
            end_date,
            summary.count,
        )
        return extended_leave_request

    def approve_extended_leave_request(
        self, extended_leave_request_id: int, decided_by: Member, now: datetime.datetime | None = None
    ) -> bool:
        return self._decide(
            ExtendedLeaveRequest, extended_leave_request_id, LeaveStatus.APPROVED, decided_by, now
        )

    def deny_extended_leave_request(
        self, extended_leave_request_id: int, decided_by: Member, now: datetime.datetime | None = None
    ) -> bool:
        return self._decide(
            ExtendedLeaveRequest, extended_leave_request_id, LeaveStatus.DENIED, decided_by, now
        )

    def cancel_extended_leave_request(self, extended_leave_request_id: int) -> bool:
        return self._cancel(ExtendedLeaveRequest, extended_leave_request_id)

    def _decide(
        self,
        model: type[LeaveRequest] | type[ExtendedLeaveRequest],
        request_id: int,
        status: str,
        decided_by: Member,
        now: datetime.datetime | None,
    ) -> bool:
        updated = model.objects.filter(id=request_id, status=LeaveStatus.PENDING).update(
            status=status,
            decided_by=decided_by,
            decided_at=now or timezone.now(),
            modified=timezone.now(),
        )
        if updated:
            logger.info("%s %s %s by member %s", model.__name__, request_id, status, decided_by.pk)
        return updated > 0

    def _cancel(
        self, model: type[LeaveRequest] | type[ExtendedLeaveRequest], request_id: int
    ) -> bool:
        deleted, _ = model.objects.filter(id=request_id, status=LeaveStatus.PENDING).delete()
        return deleted > 0
