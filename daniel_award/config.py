# daniel_award.config
from pathlib import Path
import os
from typing import Dict
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
PACKAGE_DIR = Path(__file__).resolve().parent
BASE_DIR = PACKAGE_DIR.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

TEMPLATES_DIR = PACKAGE_DIR / "templates"

"""
Configuration centrale du service d'inscription.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets Stripe (clé secrète, clé publique, secret webhook)
- Expose les réglages réseau (timeout Stripe), CORS, cache de la page et tolérance des webhooks
- Les services lisent ces valeurs via le module (config.X) au moment de l'appel,
  ce qui permet aux tests de les monkeypatcher.
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _env_int(name: str, default: int) -> int:
    try:
        return int(_clean_env(os.getenv(name) or "") or default)
    except ValueError:
        return default

def _env_flag(name: str, default: str = "false") -> bool:
    return _clean_env(os.getenv(name) or default).lower() in ("1", "true", "yes")

# Stripe: clés publiques/privées et secret webhook
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")
STRIPE_PUBLISHABLE_KEY = _clean_env(os.getenv("STRIPE_PUBLISHABLE_KEY") or os.getenv("STRIPE_PUBLIC_KEY") or "")
STRIPE_WEBHOOK_SECRET = _clean_env(os.getenv("STRIPE_WEBHOOK_SECRET") or "")

# Appels sortants Stripe: timeout borné, pas de retry automatique
STRIPE_TIMEOUT_SECONDS = _env_int("STRIPE_TIMEOUT_SECONDS", 20)
STRIPE_CURRENCY = _clean_env(os.getenv("STRIPE_CURRENCY") or "usd").lower()

# Webhooks: fenêtre de tolérance sur l'horodatage de la signature (anti-rejeu)
WEBHOOK_TOLERANCE_SECONDS = _env_int("WEBHOOK_TOLERANCE_SECONDS", 300)

# Montant recalculé côté serveur à partir du catalogue (désactivé par défaut)
STRICT_PRICING = _env_flag("STRICT_PRICING")

# Libellé de l'événement repris dans la description et les metadata Stripe
EVENT_NAME = _clean_env(os.getenv("EVENT_NAME") or "Daniel Award")

# CORS: "*" => renvoie l'origine de la requête
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Page d'inscription: durée de cache publique
PAGE_CACHE_SECONDS = _env_int("PAGE_CACHE_SECONDS", 300)

# Serveur (python -m daniel_award)
PORT = _env_int("PORT", 8000)
UVICORN_RELOAD = _env_flag("UVICORN_RELOAD")
LOG_LEVEL = _clean_env(os.getenv("LOG_LEVEL") or "info").lower()


def describe() -> Dict[str, bool]:
    """
    Indique quels secrets sont présents, sans jamais exposer leurs valeurs.
    - Utilisé par le lifespan (log de démarrage) et /health.
    """
    return {
        "secret_key": bool(STRIPE_SECRET_KEY),
        "publishable_key": bool(STRIPE_PUBLISHABLE_KEY),
        "webhook_secret": bool(STRIPE_WEBHOOK_SECRET),
        "strict_pricing": STRICT_PRICING,
    }
