"""
Option model backing the durable option store.
"""
from django.db import models


class Option(models.Model):
    """
    A named, JSON-encoded value owned by the host application.
    """

    name = models.CharField(max_length=191, unique=True, db_index=True)
    value = models.JSONField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "core"
        db_table = "license_client_options"
        ordering = ["name"]

    def __str__(self):
        return self.name
