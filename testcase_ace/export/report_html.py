"""
HTML rendition of a TestReport, used as the source page for PDF export.
"""
from html import escape

from ..models.execution_result import TestResult, TestStatus
from ..models.report import TestReport

STATUS_CHIP_STYLES = {
    TestStatus.PASSED: "background-color: #dcfce7; color: #166534; border: 1px solid #86efac;",
    TestStatus.FAILED: "background-color: #fee2e2; color: #991b1b; border: 1px solid #fca5a5;",
    TestStatus.ERROR: "background-color: #fef9c3; color: #854d0e; border: 1px solid #fde047;",
}

REPORT_CSS = """
body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif; margin: 40px; color: #333; }
.report-header { text-align: center; margin-bottom: 40px; }
.report-header h1 { font-size: 28px; margin-bottom: 8px; }
.report-header p { font-size: 14px; color: #666; margin: 0; }
.summary { display: flex; justify-content: space-around; padding: 20px; background-color: #f9fafb; border-radius: 8px; margin-bottom: 30px; border: 1px solid #e5e7eb; }
.summary-item { text-align: center; }
.summary-item .value { font-size: 24px; font-weight: 600; }
.summary-item .label { font-size: 14px; color: #666; }
.test-case { border: 1px solid #e5e7eb; border-radius: 8px; margin-bottom: 20px; overflow: hidden; page-break-inside: avoid; }
.test-case-header { display: flex; justify-content: space-between; align-items: center; padding: 12px 16px; background-color: #f9fafb; border-bottom: 1px solid #e5e7eb; }
.test-case-header h3 { margin: 0; font-size: 16px; }
.details, .results { padding: 16px; }
h4 { font-size: 15px; margin-top: 0; margin-bottom: 12px; border-bottom: 1px solid #eee; padding-bottom: 4px; }
.divider { height: 1px; background-color: #e5e7eb; margin: 0 16px; }
p { font-size: 14px; line-height: 1.6; }
pre { background-color: #f3f4f6; padding: 12px; border-radius: 6px; white-space: pre-wrap; word-wrap: break-word; font-family: "SFMono-Regular", Consolas, "Liberation Mono", Menlo, Courier, monospace; font-size: 13px; }
"""


def status_chip(status: TestStatus) -> str:
    return (
        '<span style="display: inline-block; padding: 2px 8px; border-radius: 9999px; '
        f'font-size: 12px; font-weight: 500; {STATUS_CHIP_STYLES[status]}">{status.value}</span>'
    )


def _result_html(result: TestResult) -> str:
    case = result.test_case
    return f"""
    <div class="test-case">
      <div class="test-case-header">
        <h3>Test Case ID: {escape(case.test_case_id)}</h3>
        {status_chip(result.status)}
      </div>
      <div class="details">
        <p><strong>Preconditions:</strong> {escape(case.preconditions)}</p>
        <p><strong>Steps to Reproduce:</strong></p>
        <pre>{escape(case.steps_to_reproduce)}</pre>
        <p><strong>Expected Results:</strong></p>
        <pre>{escape(case.expected_results)}</pre>
      </div>
      <div class="divider"></div>
      <div class="results">
        <h4>Execution Details</h4>
        <p><strong>Status:</strong> {result.status.value}</p>
        <p><strong>Reasoning:</strong> {escape(result.reasoning)}</p>
        <p><strong>Actual Response:</strong></p>
        <pre>{escape(result.actual_response)}</pre>
      </div>
    </div>"""


def render_report_html(report: TestReport) -> str:
    """
    Render the fixed report page.

    Args:
        report: Executed test report

    Returns:
        A standalone HTML document with inline styles
    """
    summary = report.summary
    results_html = "".join(_result_html(r) for r in report.results)
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>API Test Report</title>
  <style>{REPORT_CSS}</style>
</head>
<body>
  <div class="report-header">
    <h1>API Test Execution Report</h1>
    <p><strong>API Endpoint:</strong> {escape(report.api_endpoint)} ({escape(report.api_method)})</p>
    <p>Generated on: {report.generated_at.strftime("%Y-%m-%d %H:%M:%S")}</p>
  </div>
  <div class="summary">
    <div class="summary-item"><div class="value">{summary.total_tests}</div><div class="label">Total Tests</div></div>
    <div class="summary-item" style="color: #16a34a;"><div class="value">{summary.passed}</div><div class="label">Passed</div></div>
    <div class="summary-item" style="color: #dc2626;"><div class="value">{summary.failed}</div><div class="label">Failed</div></div>
    <div class="summary-item" style="color: #d97706;"><div class="value">{summary.errors}</div><div class="label">Errors</div></div>
  </div>
  {results_html}
</body>
</html>
"""
