"""Main entry point for pointlegend."""

import sys
import logging
from pathlib import Path

from pointlegend.config import LOG_FILE
from pointlegend.data import DataReader
from pointlegend.data.sample import make_sample_point_cloud


def setup_logging(log_level: str = "INFO") -> None:
    """Configure logging for the application.

    Logs go to a file only; a StreamHandler would draw over the Textual
    display. Use `textual console` in a separate terminal to watch the app.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(LOG_FILE, mode='w'),
        ],
        force=True  # Override any existing configuration
    )

    logging.getLogger('pointlegend').setLevel(numeric_level)

    # Reduce noise from external libraries
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('textual').setLevel(logging.WARNING)


def main() -> None:
    """Main entry point."""
    setup_logging(log_level="INFO")

    logger = logging.getLogger(__name__)
    logger.info("Starting pointlegend")

    # Deferred so logging is configured before the UI stack loads
    from pointlegend.app import LegendApp

    if len(sys.argv) > 1:
        file_path = sys.argv[1]
        if not Path(file_path).exists():
            print(f"Error: File not found: {file_path}")
            sys.exit(1)
        logger.info(f"Loading file: {file_path}")
        try:
            data = DataReader.read_file(file_path)
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        logger.info("No file given, using sample data")
        data = make_sample_point_cloud()

    app = LegendApp(data)
    app.run()

    logger.info("pointlegend exited")


if __name__ == "__main__":
    main()
