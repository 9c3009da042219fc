"""
Factory d'application utilisée par les entrypoints (daniel_award.app, daniel_award.asgi).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from fastapi import FastAPI

from .exceptions import register_exception_handlers
from .lifespan import lifespan
from .middlewares import register_cors_middleware, register_security_middleware
from .routers import register_routers
from .routes import register_routes


def create_app() -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - middlewares de sécurité puis CORS (CORS ajouté en dernier => exécuté en premier)
      - gestionnaires d'exceptions et routes simples
      - routers (API paiements, health)
    Retour:
      FastAPI prêt à être utilisé par le serveur ASGI.
    """
    app = FastAPI(title="Daniel Award Registration", lifespan=lifespan)
    register_security_middleware(app)
    register_cors_middleware(app)
    register_exception_handlers(app)
    register_routes(app)
    register_routers(app)
    return app
