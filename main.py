#!/usr/bin/env python3
import logging
import sys

import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from app.app import create_app
from app.core.config import HOST, PORT

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("report_builder")


def main() -> None:
    try:
        app = create_app()
    except SQLAlchemyError as e:
        logger.critical(f"Failed to connect to database: {e}")
        sys.exit(1)

    logger.info(f"Server running at http://{HOST}:{PORT}")
    # Idle keep-alive connections are closed after 30s
    uvicorn.run(app, host=HOST, port=PORT, timeout_keep_alive=30)


if __name__ == "__main__":
    main()
