"""HTML rendering command."""

from pathlib import Path
from typing import Optional

from replkit2.textkit import markdown

from playwright_sniff.app import app
from playwright_sniff.commands._utils import markdown_error_response
from playwright_sniff.config import load_options
from playwright_sniff.errors import ReportError
from playwright_sniff.sinks import read_collection, write_html
from playwright_sniff.sinks.html import summarize


@app.command(display="markdown")
def html(state, output: Optional[str] = None, file: Optional[str] = None) -> dict:
    """Render the results file to an HTML report.

    Args:
        output: HTML file (default: configured output_html)
        file: Results file (default: configured output_file)

    Examples:
        html()                          # Render to sniffing-report.html
        html(output="report/index.html")
    """
    target = Path(output) if output else (load_options().output_html or Path("sniffing-report.html"))

    try:
        collection = read_collection(state.resolve(file))
        action = write_html(collection, target)
    except ReportError as e:
        return markdown_error_response(str(e))

    info = summarize(collection)
    builder = markdown().heading("HTML Report", level=2)
    builder.text(f"**Report {action}:** {target}")
    builder.text(f"**Tests:** {info.passed_tests} passed, {info.failed_tests} failed")
    builder.text(f"**Showstoppers:** {len(info.show_stoppers)}")
    return builder.build()
