from rest_framework.permissions import BasePermission


def get_member(user):
    """
    Returns the active brigade member linked to the user, if any.
    """
    if not user or not user.is_authenticated:
        return None
    member = getattr(user, "member", None)
    if member is None or member.status != "active":
        return None
    return member


class IsBrigadeMember(BasePermission):
    """
    Only authenticated users linked to an active brigade member.
    """

    def has_permission(self, request, view):
        return get_member(request.user) is not None

    def has_object_permission(self, request, view, obj):
        member = get_member(request.user)
        if member is None:
            return False
        brigade_id = getattr(obj, "brigade_id", None)
        if brigade_id is None and hasattr(obj, "member"):
            brigade_id = obj.member.brigade_id
        return brigade_id == member.brigade_id


class IsBrigadeOfficer(IsBrigadeMember):
    """
    Officers, admins and superadmins of the brigade.
    """

    def has_permission(self, request, view):
        member = get_member(request.user)
        return member is not None and member.is_officer


class IsBrigadeChief(IsBrigadeMember):
    """
    The Chief Fire Officer or a brigade admin.
    """

    def has_permission(self, request, view):
        member = get_member(request.user)
        return member is not None and member.is_chief
