# HaloRide lead capture backend entrypoint.

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from haloride.api import config
from haloride.api import leads
from haloride.core.logging import configure_logging
from haloride.core.settings import get_settings
from haloride.services.lead_store import get_lead_store

settings = get_settings()
configure_logging(settings.log_level, settings.log_file)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.lead_store == "database":
        from haloride.db.base import Base
        from haloride.db.session import engine

        Base.metadata.create_all(bind=engine)
    yield
    if settings.lead_store == "supabase":
        get_lead_store().close()


app = FastAPI(title=settings.app_name, version=settings.api_version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(config.router)
app.include_router(leads.router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.setdefault(".".join(loc) or "body", error.get("msg", "Invalid request"))
    return leads.validation_error_response(errors)


@app.get("/")
def read_root():
    return {"app": "HaloRide lead capture backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}
