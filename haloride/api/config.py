"""Frontend configuration endpoint."""

from fastapi import APIRouter

from haloride.core.settings import get_settings

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("")
def read_config():
    # Only the public Supabase credentials are exposed
    settings = get_settings()
    return {
        "supabaseUrl": settings.supabase_url,
        "supabaseAnonKey": settings.supabase_anon_key,
    }
