"""
Django model registry for the core app.

Models live in core.infrastructure.models; importing them here lets
Django's app loading pick them up.
"""
from core.infrastructure.models import Option  # noqa: F401
