from fastapi import APIRouter

from daniel_award import config

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    # Présence des secrets uniquement (booléens), jamais leurs valeurs
    return {"ok": True, "stripe": config.describe()}
