"""
Repository for admin endpoints that are not tied to one entity.
"""
from utils.api_client import ApiClient


class AdminRepository:
    """Backend status checks."""

    def __init__(self, api: ApiClient):
        self.api = api

    def health_check(self) -> str:
        """Return the backend's health message, e.g. "Admin service is healthy"."""
        return str(self.api.get("/admin/health"))
