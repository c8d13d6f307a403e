from django.apps import AppConfig


class PublicHolidaysConfig(AppConfig):
    name = "public_holidays"
