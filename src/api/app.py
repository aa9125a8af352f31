"""FastAPI application factory for the checklist REST API."""

from fastapi import APIRouter, FastAPI

from api.checklist_routes import register_checklist_routes


def create_app(cache) -> FastAPI:
    """Build and return a FastAPI app wired to the given DocumentCache."""
    app = FastAPI(title="checklist-mcp", docs_url="/api/docs", openapi_url="/api/openapi.json")

    api = APIRouter(prefix="/api")
    register_checklist_routes(api, cache)
    app.include_router(api)

    return app
