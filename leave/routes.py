from common.types import RouteDict

from .views import ExtendedLeaveRequestViewSet, LeaveRequestViewSet


routes: list[RouteDict] = [
    {
        "regex": r"leave-requests",
        "viewset": LeaveRequestViewSet,
        "basename": "LeaveRequests",
    },
    {
        "regex": r"extended-leave-requests",
        "viewset": ExtendedLeaveRequestViewSet,
        "basename": "ExtendedLeaveRequests",
    },
]
