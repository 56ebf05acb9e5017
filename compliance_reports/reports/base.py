"""Report Builder Base

Shared render pipeline for all report kinds: resolve fonts and logo, set up
the document, cursor and section renderer, let the concrete builder write
its sections, then serialize.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

import requests

from ..config import DEFAULT_HTTP_TIMEOUT, REPORT_KINDS
from ..exceptions import InvalidReportDataError
from ..layout import (
    Document,
    FontManager,
    LayoutStyle,
    LeftAlignedHeader,
    PageCursor,
    PageFooter,
    PageGeometry,
    SectionRenderer,
    load_logo,
)
from ..report_data import CompanyInfo, Record
from ..utils import build_report_filename

logger = logging.getLogger(__name__)


@dataclass
class RenderedReport:
    """Output of one report render.

    Attributes:
        filename: Download filename, <ReportKind>_<Name>_<DD-MM-YYYY>.pdf
        pdf_bytes: Serialized PDF
        page_count: Number of pages
        document: The laid-out document (for inspection and previews)
    """

    filename: str
    pdf_bytes: bytes
    page_count: int
    document: Document


class ReportBuilder:
    """Base class for report builders.

    Subclasses set the class attributes and implement write().

    Attributes:
        kind: Registry key, e.g. "job_application"
        title: Report title shown in the header
        default_name: Person name used in the filename when none is given
        data_class: Record class the input is converted to
    """

    kind = ""
    title = ""
    default_name = "Report"
    data_class = Record
    footer_note: Optional[str] = None
    header_date_format = "%d-%m-%Y"

    def __init__(
        self,
        font_manager: Optional[FontManager] = None,
        geometry: Optional[PageGeometry] = None,
        session: Optional[requests.Session] = None,
        http_timeout: float = DEFAULT_HTTP_TIMEOUT,
    ):
        self.session = session or requests.Session()
        self.http_timeout = http_timeout
        self.font_manager = font_manager or FontManager(http_timeout=http_timeout, session=self.session)
        self.geometry = geometry or PageGeometry()

    def coerce(self, data: Any):
        """
        Convert raw input into this builder's record type.

        Raises:
            InvalidReportDataError: If data is neither a mapping nor a record
        """
        if data is None:
            return self.data_class()
        if isinstance(data, self.data_class):
            return data
        if not isinstance(data, Mapping):
            raise InvalidReportDataError(self.kind, type(data).__name__)
        return self.data_class.from_dict(data)

    def render(self, data: Any, company: Any = None, generated_at: Optional[datetime] = None) -> RenderedReport:
        """
        Lay out and serialize one report.

        Args:
            data: Record or form JSON mapping for this report kind
            company: CompanyInfo or mapping with name/logo
            generated_at: Generation time (defaults to now); drives the
                          filename date and "Generated" lines

        Returns:
            RenderedReport with filename and PDF bytes

        Raises:
            InvalidReportDataError: If data has the wrong shape
            AssetError: If a configured font or the logo cannot be loaded
        """
        record = self.coerce(data)
        company = CompanyInfo.from_dict(company) if company is not None else CompanyInfo()
        generated_at = generated_at or datetime.now()

        # Assets are resolved before any drawing
        fonts = self.font_manager.get_fonts()
        logo = load_logo(company.logo, session=self.session, timeout=self.http_timeout)

        document = Document(fonts, page_size=(self.geometry.width, self.geometry.height),
                            title=self.title, author=company.name or "")
        style = LayoutStyle(fonts)
        header = self.build_header(record, company, style, logo, generated_at)
        footer = self.build_footer(record, style, generated_at)
        cursor = PageCursor(document, self.geometry, header=header, footer=footer)
        renderer = SectionRenderer(cursor, style)

        logger.info("Rendering %s report", self.kind)
        cursor.start()
        self.write(renderer, record, generated_at)
        renderer.finish()
        document.resolve_page_numbers()

        pdf_bytes = document.save()
        filename = build_report_filename(self.filename_prefix(record), self.person_name(record),
                                         generated_at, self.default_name)
        logger.info("Rendered %s (%d pages)", filename, document.page_count)
        return RenderedReport(filename=filename, pdf_bytes=pdf_bytes,
                              page_count=document.page_count, document=document)

    def build_header(self, record, company: CompanyInfo, style: LayoutStyle, logo, generated_at: datetime):
        return LeftAlignedHeader(style, self.geometry, company.name or "Company", self.title,
                                 generated_at=generated_at, logo=logo, date_format=self.header_date_format)

    def build_footer(self, record, style: LayoutStyle, generated_at: datetime) -> PageFooter:
        return PageFooter(style, self.geometry, note=self.footer_note)

    def filename_prefix(self, record) -> str:
        return REPORT_KINDS[self.kind]

    def person_name(self, record) -> Any:
        return None

    def write(self, renderer: SectionRenderer, record, generated_at: datetime) -> None:
        raise NotImplementedError
