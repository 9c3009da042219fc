from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import Response

from daniel_award import config

"""
Middlewares transverses de l'application.
- register_cors_middleware: en-têtes CORS sur toutes les réponses, OPTIONS court-circuité
  (en-têtes seuls, corps vide).
- register_security_middleware: en-têtes de sécurité et CSP (autorise Stripe.js et Google Fonts).
Notes:
- Le dernier middleware ajouté s'exécute en premier: la factory ajoute CORS en dernier
  pour que les pré-vols ne traversent pas le reste de la pile.
"""

CORS_ALLOW_METHODS = "GET, POST, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type"


def resolve_allowed_origin(origin: Optional[str]) -> str:
    """
    Origine renvoyée dans Access-Control-Allow-Origin.
    - CORS_ORIGINS contient "*": renvoie l'origine de la requête, ou "*" si absente
    - Sinon: l'origine si elle est autorisée, à défaut la première origine configurée
    """
    allowed = config.CORS_ORIGINS or ["*"]
    if "*" in allowed:
        return origin or "*"
    if origin and origin in allowed:
        return origin
    return allowed[0]


def cors_headers(origin: Optional[str]) -> Dict[str, str]:
    headers = {
        "Access-Control-Allow-Origin": resolve_allowed_origin(origin),
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
    }
    if origin:
        headers["Vary"] = "Origin"
    return headers


def register_cors_middleware(app: FastAPI) -> None:
    """
    Ajoute les en-têtes CORS à chaque réponse.
    - OPTIONS (pré-vol): 200, en-têtes CORS, aucun corps, sans passer par le routage.
    """
    @app.middleware("http")
    async def cors(request: Request, call_next):
        headers = cors_headers(request.headers.get("origin"))
        if request.method.upper() == "OPTIONS":
            return Response(status_code=200, headers=headers)
        response = await call_next(request)
        for key, value in headers.items():
            response.headers[key] = value
        return response


def register_security_middleware(app: FastAPI) -> None:
    """
    Middleware de sécurité:
    - En-têtes: X-Frame-Options, X-Content-Type-Options, Referrer-Policy, Permissions-Policy.
    - CSP: Stripe.js (script + iframes du Payment Element), API Stripe, Google Fonts.
    """
    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        if "X-Frame-Options" not in response.headers:
            response.headers["X-Frame-Options"] = "DENY"
        if "X-Content-Type-Options" not in response.headers:
            response.headers["X-Content-Type-Options"] = "nosniff"
        if "Referrer-Policy" not in response.headers:
            response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if "Permissions-Policy" not in response.headers:
            response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"

        stripe_js = "https://js.stripe.com"
        csp = (
            "default-src 'self'; "
            "base-uri 'self'; object-src 'none'; frame-ancestors 'none'; "
            "img-src 'self' data: https:; "
            "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com; "
            "font-src 'self' data: https://fonts.gstatic.com; "
            f"script-src 'self' 'unsafe-inline' {stripe_js}; "
            f"frame-src {stripe_js} https://hooks.stripe.com; "
            "connect-src 'self' https://api.stripe.com"
        )
        response.headers["Content-Security-Policy"] = csp
        return response
