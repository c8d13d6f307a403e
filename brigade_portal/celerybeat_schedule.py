from celery.schedules import crontab  # type: ignore


CELERYBEAT_SCHEDULE = {
    # Internal tasks
    "clearsessions": {
        "schedule": crontab(hour=3, minute=0),
        "task": "users.tasks.clearsessions",
    },
    "refresh_public_holidays": {
        "schedule": crontab(day_of_month=1, hour=1, minute=0),
        "task": "public_holidays.tasks.refresh_public_holidays_task",
    },
    "materialize_training_horizons": {
        "schedule": crontab(day_of_month=1, hour=2, minute=0),
        "task": "scheduling.tasks.materialize_training_horizons_task",
    },
}
