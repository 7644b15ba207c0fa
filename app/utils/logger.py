import logging
import sys

from app.config import LOG_LEVEL

# -------------------------------------------------------------------
# Logging configuration
# -------------------------------------------------------------------
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("syllabus_planner")
logger.setLevel(LOG_LEVEL)

# uvicorn --reload re-imports modules; one handler only
if not logger.handlers:
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(stdout_handler)

# Avoid duplicate logs through the root logger
logger.propagate = False
