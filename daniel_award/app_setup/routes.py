"""
Routes simples (hors routers): page d'inscription et favicon.
- / : page rendue depuis le document de contenu (templates/index.html), cache public court.
- /favicon.ico: pas de contenu (204) pour éviter des 404 dans les logs.
"""
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import Response
from starlette.status import HTTP_204_NO_CONTENT

from daniel_award import config
from daniel_award.content import CONFIG
from daniel_award.offerings import get_catalog
from daniel_award.utils.templates import templates


def page_context() -> Dict[str, Any]:
    """
    Contexte du template de la page d'inscription.
    - Seule la clé publique Stripe est exposée au navigateur.
    """
    catalog = get_catalog()
    return {
        "content": CONFIG,
        "hero": CONFIG["hero"],
        "honoree": CONFIG["honoree"],
        "award": CONFIG["award"],
        "cta": CONFIG["cta"],
        "confirmation": CONFIG["confirmation"],
        "host": CONFIG["host"],
        "featured_tiers": catalog.featured,
        "grid_tiers": catalog.grid,
        "individual": catalog.individual,
        "stripe_publishable_key": config.STRIPE_PUBLISHABLE_KEY,
        "payment_api_url": "/api/payment",
    }


def register_routes(app: FastAPI) -> None:
    """
    Enregistre la page racine et le favicon.
    - Laisse l'OpenAPI propre (include_in_schema=False).
    """
    @app.get("/", include_in_schema=False)
    def registration_page(request: Request):
        response = templates.TemplateResponse(request, "index.html", page_context())
        response.headers["Cache-Control"] = f"public, max-age={config.PAGE_CACHE_SECONDS}"
        return response

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=HTTP_204_NO_CONTENT)
