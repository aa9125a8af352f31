"""REST API routes for checklist operations."""

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from tools.checklist_tools import (
    handle_cache_status,
    handle_checkbox_line,
    handle_document_get,
    handle_extract_labels,
    handle_item_add,
    handle_item_delete,
    handle_parse_text,
)


class ParseBody(BaseModel):
    content: str
    labels: bool = True
    allow_label_bullet: bool = True


class CheckboxBody(BaseModel):
    line: str
    allow_label_bullet: bool = True


class LabelsBody(BaseModel):
    text: str


class ItemAddBody(BaseModel):
    path: str
    memo: str
    mark: str = " "
    nest: int = 0


def register_checklist_routes(app_router: APIRouter, cache) -> None:
    """Attach checklist REST routes that use the shared cache."""

    @app_router.post("/parse")
    def parse_text(body: ParseBody):
        return handle_parse_text(
            body.content, labels=body.labels, allow_label_bullet=body.allow_label_bullet
        )

    @app_router.post("/checkbox")
    def parse_checkbox(body: CheckboxBody):
        result = handle_checkbox_line(body.line, allow_label_bullet=body.allow_label_bullet)
        if "error" in result:
            raise HTTPException(status_code=404, detail=result["error"])
        return result

    @app_router.post("/labels")
    def extract_labels(body: LabelsBody):
        return handle_extract_labels(body.text)

    @app_router.get("/documents")
    def get_document(path: str = Query(...)):
        result = handle_document_get(cache, path=path)
        if "error" in result:
            raise HTTPException(status_code=404, detail=result["error"])
        return result

    @app_router.post("/documents/items", status_code=201)
    def add_item(body: ItemAddBody):
        try:
            return handle_item_add(cache, **body.model_dump())
        except Exception as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app_router.delete("/documents/items/{index}")
    def delete_item(index: int, path: str = Query(...)):
        result = handle_item_delete(cache, path=path, index=index)
        if "error" in result:
            raise HTTPException(status_code=404, detail=result["error"])
        return result

    @app_router.get("/cache/status")
    def get_cache_status():
        return handle_cache_status(cache)
