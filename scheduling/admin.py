from django.contrib import admin

from .models import Event, EventException


class EventExceptionInline(admin.TabularInline):
    model = EventException
    extra = 0
    fields = ("exception_date", "is_cancelled", "replacement_date", "notes")


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ("title", "brigade", "start_time", "event_type", "is_training", "is_visible")
    list_filter = ("brigade", "event_type", "is_training", "is_visible")
    search_fields = ("title", "location")
    readonly_fields = ("training_date",)
    inlines = (EventExceptionInline,)
