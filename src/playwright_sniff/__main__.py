"""Results browser for playwright-sniff.

Runs a command directly when one is given on the command line
(``playwright-sniff summary``), the MCP server with ``--mcp``, and the
interactive REPL otherwise.
"""

import logging
import sys

from .app import app

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
)


def main():
    """Run playwright-sniff as CLI, MCP server or REPL."""
    if "--mcp" in sys.argv:
        app.mcp.run()
    elif len(sys.argv) > 1:
        app.cli()
    else:
        app.run(title="playwright-sniff - Monitoring Results")


if __name__ == "__main__":
    main()
