from django.db import models
from django.utils.translation import gettext_lazy as _

from model_utils.fields import AutoCreatedField, AutoLastModifiedField


class BaseModel(models.Model):
    """
    Timestamps plus a free-form `meta` JSON field, shared by every table.
    """

    created = AutoCreatedField(_("created"), db_index=True)
    modified = AutoLastModifiedField(_("modified"), db_index=True)
    meta = models.JSONField(_("meta"), default=dict, blank=True)

    class Meta:
        abstract = True
