"""
PDF Renderer - Playwright-based HTML to PDF conversion
"""
import logging
from typing import Optional

from playwright.async_api import async_playwright, Browser, Page, Playwright

from ..config import settings
from ..models.report import TestReport
from .report_html import render_report_html

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


class PdfRenderer:
    """
    Headless Chromium used to print HTML pages to PDF.
    """

    def __init__(self):
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.page: Optional[Page] = None

    async def start(self):
        """Start the browser."""
        self.playwright = await async_playwright().start()
        self.browser = await self.playwright.chromium.launch(
            headless=True,
            args=['--no-sandbox', '--disable-setuid-sandbox']
        )
        self.page = await self.browser.new_page()
        self.page.set_default_timeout(settings.PDF_TIMEOUT)

    async def stop(self):
        """Stop the browser and clean up resources."""
        if self.browser:
            await self.browser.close()
        if self.playwright:
            await self.playwright.stop()
        self.page = None
        self.browser = None
        self.playwright = None

    async def render(self, html: str) -> bytes:
        """
        Print an HTML document.

        Args:
            html: Complete HTML document

        Returns:
            PDF file content
        """
        await self.page.set_content(html, wait_until="networkidle")
        margin = settings.PDF_MARGIN
        return await self.page.pdf(
            format=settings.PDF_FORMAT,
            print_background=True,
            margin={"top": margin, "right": margin, "bottom": margin, "left": margin},
        )


async def render_report_pdf(report: TestReport, renderer: Optional[PdfRenderer] = None) -> bytes:
    """Render a test report to PDF bytes, starting and stopping a browser for the call."""
    renderer = renderer or PdfRenderer()
    logger.info(f"Rendering PDF report for {report.api_method} {report.api_endpoint}")
    await renderer.start()
    try:
        return await renderer.render(render_report_html(report))
    finally:
        await renderer.stop()
