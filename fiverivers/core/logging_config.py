import logging
import sys

def setup_logging():
    """
    Configure logging for the application.

    Sends records to stdout with timestamps, levels and logger names so the
    output works the same under uvicorn, Docker and the test runner.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    # Reduce SQLAlchemy noise in logs
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logging.getLogger("fiverivers")


# Create global logger instance
logger = setup_logging()
