import logging
import os

from .main import create_app

logger = logging.getLogger(__name__)

# Create Flask app
app = create_app()

if __name__ == "__main__":
    port = int(os.getenv("PORT", 5000))
    logger.info("Starting clinic service", extra={"context": {"port": port}})
    app.run(host="0.0.0.0", port=port, debug=not app.config.get("TESTING", False))
