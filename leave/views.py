from typing import Annotated

from dependency_injector.wiring import Provide, inject
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from brigades.permissions import IsBrigadeChief, IsBrigadeMember, IsBrigadeOfficer, get_member
from common.utils.view_utils import NoUpdateBrigadeModelViewSet
from leave.filtersets import ExtendedLeaveRequestFilterSet, LeaveRequestFilterSet
from leave.models import ExtendedLeaveRequest, LeaveRequest
from leave.serializers import (
    DateRangeQuerySerializer,
    ExtendedLeaveRequestCreateSerializer,
    ExtendedLeaveRequestSerializer,
    LeaveQuotaSerializer,
    LeaveRequestCreateSerializer,
    LeaveRequestSerializer,
    TrainingDateSerializer,
    TrainingRangeSummarySerializer,
    UpcomingTrainingsQuerySerializer,
)
from leave.services.leave_request_service import LeaveRequestService
from leave.services.leave_window_service import LeaveWindowService


NOT_PENDING_MESSAGE = "Leave request is not pending"
NOT_CANCELLABLE_MESSAGE = "Only pending requests can be cancelled"


class BaseLeaveViewSet(NoUpdateBrigadeModelViewSet):
    """
    Members see and cancel their own requests. Officers see the brigade's
    pending requests and may cancel any pending request in the brigade.
    """

    permission_classes = (IsBrigadeMember,)
    decision_permission_class: type[IsBrigadeMember] = IsBrigadeOfficer
    brigade_wide_actions = ("approve", "deny", "pending")

    def get_permissions(self):
        if self.action in ("approve", "deny"):
            return [self.decision_permission_class()]
        if self.action == "pending":
            return [IsBrigadeOfficer()]
        return super().get_permissions()

    def get_queryset(self):
        member = get_member(self.request.user)
        if member is None:
            return self.queryset.none()

        queryset = (
            self.queryset.model.objects.filter_by_brigade(member.brigade_id)
            .select_related("member", "decided_by")
        )
        if self.action in self.brigade_wide_actions:
            return queryset
        if self.action == "destroy" and member.is_officer:
            return queryset
        return queryset.for_member(member.pk)

    def decision_response(self, instance, decided: bool) -> Response:
        if not decided:
            return Response({"error": NOT_PENDING_MESSAGE}, status=status.HTTP_409_CONFLICT)
        instance.refresh_from_db()
        return Response(self.get_read_serializer(instance).data)

    def cancel_response(self, cancelled: bool) -> Response:
        if not cancelled:
            return Response({"error": NOT_CANCELLABLE_MESSAGE}, status=status.HTTP_409_CONFLICT)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(summary="List pending requests of the brigade")
    @action(methods=["GET"], detail=False, url_path="pending", url_name="pending")
    def pending(self, request):
        queryset = self.get_queryset().pending()
        serializer = self.get_read_serializer(queryset, many=True)
        return Response({"data": serializer.data, "meta": {"total": len(serializer.data)}})


class LeaveRequestViewSet(BaseLeaveViewSet):
    """
    ViewSet for leave from a single training night.
    """

    filterset_class = LeaveRequestFilterSet
    queryset = LeaveRequest.objects.all()
    serializer_class = LeaveRequestCreateSerializer
    read_serializer_class = LeaveRequestSerializer

    @inject
    def list(
        self,
        request,
        *args,
        leave_request_service: Annotated[LeaveRequestService, Provide["leave_request_service"]],
        **kwargs,
    ):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_read_serializer(queryset, many=True)
        quota = leave_request_service.quota(get_member(request.user))
        return Response(
            {
                "data": serializer.data,
                "meta": {"total": len(serializer.data), **LeaveQuotaSerializer(quota).data},
            }
        )

    @inject
    def perform_create(
        self,
        serializer,
        leave_request_service: Annotated[LeaveRequestService, Provide["leave_request_service"]],
    ):
        serializer.instance = leave_request_service.create_leave_request(
            get_member(self.request.user),
            training_date=serializer.validated_data.get("training_date"),
            reason=serializer.validated_data.get("reason", ""),
        )

    @extend_schema(
        summary="Cancel leave request",
        description="Delete a leave request while it is still pending.",
        responses={204: None, 409: None},
    )
    @inject
    def destroy(
        self,
        request,
        *args,
        leave_request_service: Annotated[LeaveRequestService, Provide["leave_request_service"]],
        **kwargs,
    ):
        instance = self.get_object()
        return self.cancel_response(leave_request_service.cancel_leave_request(instance.pk))

    @extend_schema(
        summary="Upcoming trainings available for leave",
        parameters=[
            OpenApiParameter(
                name="limit",
                type=int,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Number of trainings to return (default 3, at most 10)",
            ),
        ],
        responses={200: TrainingDateSerializer(many=True)},
    )
    @action(methods=["GET"], detail=False, url_path="upcoming", url_name="upcoming")
    @inject
    def upcoming(
        self,
        request,
        leave_window_service: Annotated[LeaveWindowService, Provide["leave_window_service"]],
        leave_request_service: Annotated[LeaveRequestService, Provide["leave_request_service"]],
    ):
        query = UpcomingTrainingsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        member = get_member(request.user)
        trainings = leave_window_service.upcoming(member, limit=query.validated_data["limit"])
        quota = leave_request_service.quota(member)
        return Response(
            {
                "data": TrainingDateSerializer(trainings, many=True).data,
                "meta": LeaveQuotaSerializer(quota).data,
            }
        )

    @extend_schema(summary="Approve leave request", request=None, responses={200: LeaveRequestSerializer})
    @action(methods=["POST"], detail=True, url_path="approve", url_name="approve")
    @inject
    def approve(
        self,
        request,
        pk,
        leave_request_service: Annotated[LeaveRequestService, Provide["leave_request_service"]],
    ):
        instance = self.get_object()
        decided = leave_request_service.approve_leave_request(
            instance.pk, decided_by=get_member(request.user)
        )
        return self.decision_response(instance, decided)

    @extend_schema(summary="Deny leave request", request=None, responses={200: LeaveRequestSerializer})
    @action(methods=["POST"], detail=True, url_path="deny", url_name="deny")
    @inject
    def deny(
        self,
        request,
        pk,
        leave_request_service: Annotated[LeaveRequestService, Provide["leave_request_service"]],
    ):
        instance = self.get_object()
        decided = leave_request_service.deny_leave_request(
            instance.pk, decided_by=get_member(request.user)
        )
        return self.decision_response(instance, decided)


class ExtendedLeaveRequestViewSet(BaseLeaveViewSet):
    """
    ViewSet for leave covering a date range. Decisions belong to the chief.
    """

    filterset_class = ExtendedLeaveRequestFilterSet
    queryset = ExtendedLeaveRequest.objects.all()
    serializer_class = ExtendedLeaveRequestCreateSerializer
    read_serializer_class = ExtendedLeaveRequestSerializer
    decision_permission_class = IsBrigadeChief

    @inject
    def perform_create(
        self,
        serializer,
        leave_request_service: Annotated[LeaveRequestService, Provide["leave_request_service"]],
    ):
        serializer.instance = leave_request_service.create_extended_leave_request(
            get_member(self.request.user),
            start_date=serializer.validated_data.get("start_date"),
            end_date=serializer.validated_data.get("end_date"),
            reason=serializer.validated_data.get("reason", ""),
        )

    @extend_schema(
        summary="Cancel extended leave request",
        responses={204: None, 409: None},
    )
    @inject
    def destroy(
        self,
        request,
        *args,
        leave_request_service: Annotated[LeaveRequestService, Provide["leave_request_service"]],
        **kwargs,
    ):
        instance = self.get_object()
        return self.cancel_response(leave_request_service.cancel_extended_leave_request(instance.pk))

    @extend_schema(
        summary="Preview trainings in a date range",
        parameters=[
            OpenApiParameter(
                name="start_date",
                type=str,
                location=OpenApiParameter.QUERY,
                required=True,
                description="First day of the leave (YYYY-MM-DD)",
            ),
            OpenApiParameter(
                name="end_date",
                type=str,
                location=OpenApiParameter.QUERY,
                required=True,
                description="Last day of the leave, inclusive (YYYY-MM-DD)",
            ),
        ],
        responses={200: TrainingRangeSummarySerializer},
    )
    @action(methods=["GET"], detail=False, url_path="preview", url_name="preview")
    @inject
    def preview(
        self,
        request,
        leave_window_service: Annotated[LeaveWindowService, Provide["leave_window_service"]],
    ):
        query = DateRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        summary = leave_window_service.range_count(
            get_member(request.user).brigade,
            start_date=query.validated_data["start_date"],
            end_date=query.validated_data["end_date"],
        )
        return Response(TrainingRangeSummarySerializer(summary).data)

    @extend_schema(
        summary="Approve extended leave request",
        request=None,
        responses={200: ExtendedLeaveRequestSerializer},
    )
    @action(methods=["POST"], detail=True, url_path="approve", url_name="approve")
    @inject
    def approve(
        self,
        request,
        pk,
        leave_request_service: Annotated[LeaveRequestService, Provide["leave_request_service"]],
    ):
        instance = self.get_object()
        decided = leave_request_service.approve_extended_leave_request(
            instance.pk, decided_by=get_member(request.user)
        )
        return self.decision_response(instance, decided)

    @extend_schema(
        summary="Deny extended leave request",
        request=None,
        responses={200: ExtendedLeaveRequestSerializer},
    )
    @action(methods=["POST"], detail=True, url_path="deny", url_name="deny")
    @inject
    def deny(
        self,
        request,
        pk,
        leave_request_service: Annotated[LeaveRequestService, Provide["leave_request_service"]],
    ):
        instance = self.get_object()
        decided = leave_request_service.deny_extended_leave_request(
            instance.pk, decided_by=get_member(request.user)
        )
        return self.decision_response(instance, decided)
