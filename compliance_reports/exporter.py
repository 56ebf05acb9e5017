"""Report Export Pipeline

Orchestrates one report export: validate, load assets, render, write.
"""
import logging
import os
import tempfile
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Optional

import requests

from .config import PROGRESS_STEPS, Settings
from .exceptions import ComplianceReportsError, ExportStepError
from .export_options import ExportOptions
from .export_result import ExportResult
from .layout import FontManager
from .report_data import SupervisionQuestionsConfig
from .reports import AnnualAppraisalReport, SupervisionReport, get_builder
from .utils import format_file_size

logger = logging.getLogger(__name__)


class ReportExporter:
    """Report export orchestrator.

    Steps:
    1. Validation - report kind and input shape
    2. Assets - fonts (cached process-wide) and the company logo
    3. Rendering - lay out the report with its builder
    4. Saving - write the PDF atomically into the output directory

    Attributes:
        font_manager: Font resolver shared by every export
        settings: Environment settings (HTTP timeout, font sources)
        progress_callback: Optional callback for progress updates (progress, desc)
    """

    def __init__(
        self,
        font_manager: Optional[FontManager] = None,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        progress_callback: Optional[Callable[[float, str], None]] = None,
    ):
        self.settings = settings or Settings.from_env()
        self.session = session or requests.Session()
        self.font_manager = font_manager or FontManager(
            font_dir=self.settings.font_dir,
            regular_url=self.settings.font_regular_url,
            bold_url=self.settings.font_bold_url,
            http_timeout=self.settings.http_timeout,
            session=self.session,
        )
        self.progress = progress_callback or (lambda p, d: None)

    def export(self, options: ExportOptions) -> ExportResult:
        """Export one report to a PDF file.

        Args:
            options: Export options

        Returns:
            ExportResult with the output path and status

        Raises:
            Does not raise - all errors are captured in ExportResult.error
        """
        try:
            self.progress(PROGRESS_STEPS["VALIDATE"], "Validating report data...")
            builder = self._step("validate", lambda: self._create_builder(options))
            record = self._step("validate", lambda: builder.coerce(options.data))
            if options.employee_name and isinstance(builder, AnnualAppraisalReport) and not record.employee_name:
                record = replace(record, employee_name=options.employee_name)

            self.progress(PROGRESS_STEPS["LOAD_ASSETS"], "Loading fonts...")
            self._step("load_assets", self.font_manager.get_fonts)

            self.progress(PROGRESS_STEPS["RENDER"], "Rendering report...")
            generated_at = options.generated_at or datetime.now()
            report = self._step("render", lambda: builder.render(record, options.company, generated_at))

            self.progress(PROGRESS_STEPS["SAVE"], "Saving PDF...")
            output_path = self._step(
                "save", lambda: write_atomic(options.output_dir, report.filename, report.pdf_bytes)
            )

            self.progress(PROGRESS_STEPS["COMPLETE"], "Complete!")
            size = len(report.pdf_bytes)
            return ExportResult(
                status="completed",
                status_message=(
                    f"✅ {report.filename} ({report.page_count} pages, {format_file_size(size)})"
                ),
                output_path=output_path,
                filename=report.filename,
                page_count=report.page_count,
                file_size=size,
                layout_summary=report.document.layout_summary(),
            )

        except Exception as e:
            logger.error("Export of %s report failed: %s", options.report_kind, e)
            return ExportResult(
                status="failed",
                status_message=f"Export failed: {str(e)}",
                error=str(e),
            )

    def _create_builder(self, options: ExportOptions):
        builder_class = get_builder(options.report_kind)
        kwargs = dict(font_manager=self.font_manager, session=self.session,
                      http_timeout=self.settings.http_timeout)
        if builder_class is SupervisionReport:
            kwargs["questions"] = self._questions(options.supervision_questions)
        return builder_class(**kwargs)

    @staticmethod
    def _questions(config: Any) -> SupervisionQuestionsConfig:
        if isinstance(config, SupervisionQuestionsConfig):
            return config
        if isinstance(config, str):
            return SupervisionQuestionsConfig.from_json(config)
        if config:
            return SupervisionQuestionsConfig.from_dict(config)
        return SupervisionQuestionsConfig.default()

    @staticmethod
    def _step(name: str, func: Callable[[], Any]) -> Any:
        """Run one export step, wrapping unexpected errors with the step name."""
        try:
            return func()
        except ComplianceReportsError:
            raise
        except Exception as e:
            raise ExportStepError(name, e) from e


def write_atomic(output_dir: str, filename: str, content: bytes) -> str:
    """
    Write bytes to output_dir/filename via a temporary file and rename.

    The temporary file is removed on every path, including failures.

    Args:
        output_dir: Target directory (created if missing)
        filename: Target filename
        content: File content

    Returns:
        Path of the written file
    """
    os.makedirs(output_dir, exist_ok=True)
    final_path = os.path.join(output_dir, filename)
    fd, tmp_path = tempfile.mkstemp(dir=output_dir, prefix=".export-", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.replace(tmp_path, final_path)
    finally:
        if os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError as e:
                logger.warning("Could not remove temporary file %s: %s", tmp_path, e)
    logger.info("Wrote %s", final_path)
    return final_path
