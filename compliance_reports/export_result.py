"""Export Result Dataclass

Outcome of one report export.
"""
from dataclasses import dataclass
from typing import Optional

import pandas as pd


@dataclass
class ExportResult:
    """Result of ReportExporter.export().

    Attributes:
        status: "completed" or "failed"
        status_message: Human-readable status message

        # Output
        output_path: Path of the written PDF (None on failure)
        filename: Report filename
        page_count: Number of pages
        file_size: Size of the PDF in bytes
        layout_summary: Per-page summary table for previews

        # Error Handling
        error: Error message if the export failed (None otherwise)
    """

    # Status
    status: str  # "completed", "failed"
    status_message: str

    # Output
    output_path: Optional[str] = None
    filename: Optional[str] = None
    page_count: int = 0
    file_size: int = 0
    layout_summary: Optional[pd.DataFrame] = None

    # Error Handling
    error: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """True if the report was written."""
        return self.status == "completed" and self.output_path is not None

    @property
    def is_failed(self) -> bool:
        return self.status == "failed"

    def to_gradio_outputs(self) -> tuple:
        """Convert to Gradio UI outputs format.

        Returns:
            Tuple of (output_file, layout_summary_table, status)
        """
        import gradio as gr

        if self.is_failed:
            return (
                None,  # output_file
                gr.update(value=None, visible=False),  # layout_summary
                self.status_message,
            )

        return (
            self.output_path,
            gr.update(value=self.layout_summary, visible=self.layout_summary is not None),
            self.status_message,
        )
