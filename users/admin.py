from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.utils.translation import gettext_lazy as _

from .models import User


@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ("id", "email", "get_full_name", "brigade", "is_staff", "created")
    list_filter = ("is_active", "is_staff", "member__brigade")
    list_select_related = ("member__brigade",)
    search_fields = ("email", "first_name", "last_name", "member__name")
    ordering = ("email",)
    filter_horizontal = ("groups", "user_permissions")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (_("Personal Info"), {"fields": ("first_name", "last_name", "phone_number")}),
        (_("Permissions"), {"fields": ("is_active", "is_staff", "is_superuser", "groups")}),
    )
    add_fieldsets = ((None, {"classes": ("wide",), "fields": ("email", "password1", "password2")}),)

    @admin.display(description=_("Brigade"), ordering="member__brigade__name")
    def brigade(self, obj):
        member = getattr(obj, "member", None)
        return member.brigade if member is not None else "-"
