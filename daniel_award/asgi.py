"""
ASGI entrypoint: `daniel_award.asgi:app` pour uvicorn / gunicorn (UvicornWorker).
La construction de l'app reste dans daniel_award.app_setup.factory.
"""

from daniel_award.app import app

__all__ = ["app"]
