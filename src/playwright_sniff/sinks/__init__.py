"""Report sinks: JSON results file and HTML rendering.

PUBLIC API:
  - JsonReportStore: Append reports to a run-scoped JSON file
  - read_collection: Strictly read a results file
  - write_collection: Write a results file
  - render_html: Render a collection to HTML text
  - write_html: Render a collection to an HTML file
"""

from .json_store import JsonReportStore, read_collection, write_collection
from .html import render_html, write_html

__all__ = ["JsonReportStore", "read_collection", "write_collection", "render_html", "write_html"]
