"""Export package"""
from .downloads import Download, ARTIFACT_FORMATS, available_downloads, build_download, cases_download
from .pdf import PdfRenderer, render_report_pdf
from .report_html import render_report_html

__all__ = [
    "Download",
    "ARTIFACT_FORMATS",
    "available_downloads",
    "build_download",
    "cases_download",
    "PdfRenderer",
    "render_report_pdf",
    "render_report_html",
]
