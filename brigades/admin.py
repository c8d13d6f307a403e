from django.contrib import admin

from .models import Brigade, Member


@admin.register(Brigade)
class BrigadeAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "training_weekday", "training_time", "holiday_region")
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}  # noqa: RUF012


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "brigade", "role", "rank", "status")
    list_filter = ("brigade", "role", "status")
    search_fields = ("name", "email")
    raw_id_fields = ("user",)
