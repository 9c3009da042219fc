"""
Gestionnaires d'exceptions.
- RegistrationError (et sous-classes): {"error": message} avec le code porté par l'erreur.
- HTTPException Starlette (404 routage, 405...): {"error": detail}.
- Toute autre exception: 500 {"error": "Internal error"}, détail complet dans les logs uniquement.
  Ce gestionnaire s'exécute hors du middleware CORS: il pose lui-même les en-têtes CORS.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from daniel_award.errors import ConfigurationError, RegistrationError
from .middlewares import cors_headers

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les gestionnaires d'erreurs JSON de l'API.
    """
    @app.exception_handler(RegistrationError)
    async def registration_error(request: Request, exc: RegistrationError):
        if isinstance(exc, ConfigurationError):
            logger.error("Configuration manquante pour %s %s", request.method, request.url.path)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Erreur non gérée sur %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal error"},
            headers=cors_headers(request.headers.get("origin")),
        )
