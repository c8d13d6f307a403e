from django.core.exceptions import ImproperlyConfigured


class TrainingSchedulerServiceNotInjectedError(ImproperlyConfigured):
    pass
