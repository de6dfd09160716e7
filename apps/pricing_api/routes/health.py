from fastapi import APIRouter

from apps.pricing_api.settings import settings


router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health_root():
    return {"ok": True}


@router.get("/config")
def health_config():
    # presence only, never values
    return {
        "ok": True,
        "cardapioweb_base_url": bool(settings.CARDAPIOWEB_BASE_URL),
        "cardapioweb_api_key": bool(settings.CARDAPIOWEB_API_KEY),
        "default_km_band": settings.DEFAULT_KM_BAND,
    }
