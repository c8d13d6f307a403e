from django.contrib import admin

from .models import PublicHoliday


@admin.register(PublicHoliday)
class PublicHolidayAdmin(admin.ModelAdmin):
    list_display = ("date", "name", "region", "year", "source")
    list_filter = ("year", "region", "source")
    search_fields = ("name",)
    ordering = ("date",)
