"""
Process entrypoint for the Mentor HTTP service.

Architectural role:
- Load `.env`, configure root logging, and bind uvicorn to the configured port.
- Fail on startup when the deployment variant is malformed.

Side effects:
- Reads `HOST`, `PORT` and `LOG_LEVEL` from the environment.
- Blocks in the uvicorn server loop until the process exits.
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os

import uvicorn

from mentor_api.llm.provider_config import load_evaluation_variant, load_provider_settings


logger = logging.getLogger(__name__)


def configure_logging():
    """Configure root logging from `LOG_LEVEL` (default `INFO`)."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main():
    configure_logging()

    variant = load_evaluation_variant()
    settings = load_provider_settings()
    if not settings.api_key:
        # Requests will answer 500 until the key is configured.
        logger.warning("%s is not set", settings.api_key_name)

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))

    logger.info(
        "Mentor API listening on %s:%d (model=%s, gentle_task_shape=%s)",
        host,
        port,
        settings.model,
        variant.gentle_task_shape,
    )
    uvicorn.run("mentor_api.api.http_api:app", host=host, port=port)


if __name__ == "__main__":
    main()
