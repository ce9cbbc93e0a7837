"""
Repository for server-rendered assessment reports.
"""
from models.base import EntityId
from models.plan import Report
from utils.api_client import ApiClient, parse_model

DEFAULT_REPORT_TITLE = "AI Readiness Assessment Report"


class ReportRepository:
    """Repository for report generation, lookup and delivery."""

    def __init__(self, api: ApiClient):
        self.api = api

    def request(self, assessment_id: EntityId, title: str = DEFAULT_REPORT_TITLE) -> Report:
        """Generate a report for a completed assessment."""
        data = self.api.post(
            f"/assessments/{assessment_id}/report",
            json={"title": title, "includeCharts": True, "includeRecommendations": True},
        )
        return parse_model(Report, data)

    def get(self, report_id: EntityId) -> Report:
        return parse_model(Report, self.api.get(f"/reports/{report_id}"))

    def email(self, report_id: EntityId, email: str) -> None:
        self.api.post(f"/reports/{report_id}/email", json={"email": email})

    def download_url(self, report: Report) -> str:
        """
        Absolute URL the browser can open to download the report.

        Uses the server-provided URL when it is absolute, otherwise builds
        one from the API base URL.
        """
        if report.download_url and report.download_url.startswith(("http://", "https://")):
            return report.download_url
        base = str(self.api.http.base_url).rstrip("/")
        return f"{base}/reports/{report.report_id}/download"
