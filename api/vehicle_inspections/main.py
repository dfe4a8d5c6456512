import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from .config import get_settings
from .middleware.request_logging import register_request_logging
from .routers import inspection_items, inspections, inspectors, reports, vehicles

settings = get_settings()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


configure_logging(settings.log_level)

app = FastAPI(title="Vehicle Inspection API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_request_logging(app)

app.include_router(vehicles.router)
app.include_router(inspectors.router)
app.include_router(inspections.router)
app.include_router(inspection_items.router)
app.include_router(reports.router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/__routes")
def list_routes():
    routes = []
    for r in app.routes:
        if isinstance(r, APIRoute):
            routes.append({"path": r.path, "methods": list(r.methods)})
        else:
            routes.append({"path": r.path, "methods": []})
    return routes
