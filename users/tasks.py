from django.core import management

from brigade_portal.celery import app


@app.task
def clearsessions():
    management.call_command("clearsessions")
