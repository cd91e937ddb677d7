"""Human-readable reports of batch runs."""

from .payloads import build_posting_context, build_report_context
from .renderer import MatchReportRenderer, ReportRenderError

__all__ = [
    "MatchReportRenderer",
    "ReportRenderError",
    "build_report_context",
    "build_posting_context",
]
