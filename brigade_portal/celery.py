import os

from django.apps import apps

from celery import Celery

from brigade_portal.celerybeat_schedule import CELERYBEAT_SCHEDULE


os.environ.setdefault("DJANGO_SETTINGS_MODULE", "brigade_portal.settings.local")

app = Celery("brigade_portal_tasks")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks(lambda: [n.name for n in apps.get_app_configs()])
app.conf.beat_schedule = CELERYBEAT_SCHEDULE
