from .base import *


SECRET_KEY = "test"  # nosec

DATABASES = {
    "default": config(
        "TEST_DATABASE_URL", cast=db_url, default="sqlite://:memory:"
    ),
}

STATIC_ROOT = base_dir_join("staticfiles")
STATIC_URL = "/static/"

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

# Speed up password hashing
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Celery
CELERY_BROKER_URL = "memory://"
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

# Tests never reach the holiday API
HOLIDAYS_API_URL = "http://holidays.test/api/v3/PublicHolidays"
HOLIDAYS_API_TIMEOUT = 1.0

LEAVE_MAX_PENDING = 3
LEAVE_REQUIRE_REASON = False
