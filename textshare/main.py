# textshare/main.py

import uvicorn

import textshare.config as config
from textshare.utils.logger import log_info
from textshare.observability.logger import configure_logging


def main():
    """ Main entry point for the application startup. """
    # Configure structured JSON logging as early as possible
    configure_logging(config)

    from textshare.main_fastapi import app

    log_info(f"Server starting at http://{config.HOST}:{config.PORT}")
    print(f"Server starting at http://{config.HOST}:{config.PORT}")
    # uvicorn handles SIGINT/SIGTERM and shuts down gracefully
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_config=None)


if __name__ == "__main__":
    main()
