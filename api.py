"""
NRYLI registration HTTP API
Serves POST/GET /register for the public registration form.
"""
import logging
import os

from src.api.register_api import create_app
from src.utils.config import configure_logging, load_settings

logger = logging.getLogger(__name__)

settings = load_settings()
configure_logging(settings.log_level)
app = create_app(settings=settings)


if __name__ == "__main__":
    port = int(os.getenv("PORT", "5000"))
    logger.info(f"Starting registration API on port {port}")
    app.run(host="0.0.0.0", port=port)
