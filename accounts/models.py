"""
Model registry for the accounts app.
"""
from accounts.infrastructure.models import Admin  # noqa: F401
