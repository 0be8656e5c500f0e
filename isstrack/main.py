import logging
import logging.config
import os

import uvicorn

from isstrack.application import create_app
from isstrack.core.constants import HOST, PORT
from isstrack.core.logging_config import LOGGING_CONFIG

# The file handlers write into logs/
os.makedirs("logs", exist_ok=True)

logging.config.dictConfig(LOGGING_CONFIG)

logger = logging.getLogger("isstrack")

app = create_app()


def run():
    logger.info("Starting FastAPI server with uvicorn")
    uvicorn.run("isstrack.main:app", host=HOST, port=PORT)


if __name__ == "__main__":
    run()
