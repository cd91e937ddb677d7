"""Plain-text match report rendering using Jinja2.

Templates live in the ``jobmatch.reporting`` package under ``templates/``
and are rendered with strict undefined checking so a missing context key
fails loudly instead of printing blanks.
"""

from typing import Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from jobmatch.logging import get_logger
from jobmatch.pipeline.models import BatchRunResult

from .payloads import build_report_context

logger = get_logger(__name__, component="reporting")


class ReportRenderError(Exception):
    """Raised when the report template cannot be rendered."""

    pass


class MatchReportRenderer:
    """Renders a ranked, human-readable report of a batch run."""

    def __init__(
        self,
        template_dir: str = "templates",
        template_name: str = "match_report.txt.j2",
    ):
        """Initialize the renderer.

        Args:
            template_dir: Directory name within the jobmatch.reporting package
            template_name: Report template filename
        """
        self.template_name = template_name
        self.env = Environment(
            loader=PackageLoader("jobmatch.reporting", template_dir),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, result: BatchRunResult, limit: Optional[int] = None) -> str:
        """Render the report for a completed batch.

        Args:
            result: Completed batch run
            limit: Maximum ranked postings to list (None for all)

        Returns:
            Report text

        Raises:
            ReportRenderError: If template loading or rendering fails
        """
        context = build_report_context(result, limit)
        try:
            template = self.env.get_template(self.template_name)
            text = template.render(context)
        except TemplateError as e:
            logger.error(f"Report rendering failed: {e}", exc_info=True)
            raise ReportRenderError(f"Report rendering failed: {e}") from e

        logger.debug(
            "Rendered match report",
            extra={"event": "report.rendered", "postings": len(context["postings"])},
        )
        return text
