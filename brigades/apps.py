from django.apps import AppConfig


class BrigadesConfig(AppConfig):
    name = "brigades"
