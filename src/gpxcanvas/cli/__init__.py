"""Command-line interface for the GPX track poster renderer."""

import logging
import sys
import typer

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)

logger = logging.getLogger(__name__)

# Create typer app
app = typer.Typer(invoke_without_command=True, no_args_is_help=True,
                  help="GPX track poster renderer - draws stylized images of GPX routes")

# Import commands
from .render import render  # noqa: E402
from .info import info  # noqa: E402
from .sample import sample  # noqa: E402

if __name__ == "__main__":
    app()
