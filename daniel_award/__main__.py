"""
Lance le service d'inscription avec uvicorn.

Usage:
    python -m daniel_award

Réglages lus dans daniel_award.config (PORT, UVICORN_RELOAD, LOG_LEVEL).
Le logger daniel_award.confirmations suit LOG_LEVEL: c'est la seule trace
des paiements confirmés.
"""
import logging

import uvicorn

from daniel_award import config

if __name__ == "__main__":
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "daniel_award.asgi:app",
        host="0.0.0.0",
        port=config.PORT,
        reload=config.UVICORN_RELOAD,
        log_level=config.LOG_LEVEL,
    )
