from typing import Annotated

from dependency_injector.wiring import Provide, inject
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.decorators import action
from rest_framework.response import Response

from brigades.permissions import IsBrigadeMember, get_member
from common.utils.view_utils import ReadOnlyBrigadeModelViewSet
from scheduling.filtersets import EventFilterSet
from scheduling.models import Event
from scheduling.serializers import (
    EventSerializer,
    OccurrenceSerializer,
    OccurrenceWindowSerializer,
)
from scheduling.services.calendar_service import CalendarService


class EventViewSet(ReadOnlyBrigadeModelViewSet):
    """
    Read-only access to the brigade calendar.
    """

    filterset_class = EventFilterSet
    permission_classes = (IsBrigadeMember,)
    queryset = Event.objects.all()
    serializer_class = EventSerializer

    def get_queryset(self):
        """
        Visible events of the requesting member's brigade.
        """
        member = get_member(self.request.user)
        if member is None:
            return Event.objects.none()
        return (
            Event.objects.filter_by_brigade(member.brigade_id)
            .visible()
            .prefetch_related("exceptions")
        )

    @extend_schema(
        summary="List event occurrences",
        description=(
            "Expands the brigade's visible events, recurring ones included, into the "
            "occurrences falling inside the window."
        ),
        parameters=[
            OpenApiParameter(
                name="window_from",
                type=str,
                location=OpenApiParameter.QUERY,
                required=True,
                description="First date of the window (YYYY-MM-DD)",
            ),
            OpenApiParameter(
                name="window_to",
                type=str,
                location=OpenApiParameter.QUERY,
                required=True,
                description="Last date of the window, inclusive (YYYY-MM-DD)",
            ),
        ],
        responses={200: OccurrenceSerializer(many=True)},
    )
    @action(
        methods=["GET"],
        detail=False,
        url_path="occurrences",
        url_name="occurrences",
    )
    @inject
    def occurrences(
        self,
        request,
        calendar_service: Annotated[CalendarService, Provide["calendar_service"]],
    ):
        window = OccurrenceWindowSerializer(data=request.query_params)
        window.is_valid(raise_exception=True)

        member = get_member(request.user)
        occurrences = calendar_service.get_occurrences(
            member.brigade,
            window_from=window.validated_data["window_from"],
            window_to=window.validated_data["window_to"],
        )
        return Response(OccurrenceSerializer(occurrences, many=True).data)
