"""Client collection endpoints."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status

from ...container import AppContainer
from ...errors import UnknownClientError
from ...schemas.clients import (
    ClientCreateRequest,
    ClientCreateResponse,
    ClientModel,
    ImportSummaryModel,
    LedgerSummaryModel,
    NavigationLinksModel,
)
from ...services.clients import (
    create_client,
    directions_url,
    export_clients,
    import_clients,
    ledger_summary,
    require_client,
    search_url,
)
from ...services.search import search_clients
from ..dependencies import get_container

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _not_found(exc: UnknownClientError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("", response_model=List[ClientModel], status_code=status.HTTP_200_OK)
def list_clients(
    q: str | None = Query(default=None, description="Free-text query; every word must match"),
    container: AppContainer = Depends(get_container),
) -> List[ClientModel]:
    matches = search_clients(container.store.snapshot(), q)
    return [ClientModel.from_domain(record) for record in matches]


@router.post("", response_model=ClientCreateResponse, status_code=status.HTTP_201_CREATED)
def add_client(
    payload: ClientCreateRequest,
    container: AppContainer = Depends(get_container),
) -> ClientCreateResponse:
    record, approximate = create_client(payload, container.store, container.geocoder)
    return ClientCreateResponse(client=ClientModel.from_domain(record), approximate_location=approximate)


@router.get("/export", status_code=status.HTTP_200_OK)
def export_workbook(container: AppContainer = Depends(get_container)) -> Response:
    content = export_clients(container.store.snapshot())
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="clients.xlsx"'},
    )


@router.post("/import", response_model=ImportSummaryModel, status_code=status.HTTP_201_CREATED)
async def import_workbook(
    file: UploadFile = File(...),
    container: AppContainer = Depends(get_container),
) -> ImportSummaryModel:
    """Append every row of an Excel sheet as a new client."""
    if not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Filename is required.")
    if Path(file.filename).suffix.lower() != ".xlsx":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only .xlsx files are supported.")

    try:
        records = import_clients(await file.read())
    except Exception as exc:
        logger.exception(f"Failed to read workbook {file.filename}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unable to read workbook: {exc}",
        ) from exc

    if records:
        container.store.add_many(records)
    logger.info(f"Imported {len(records)} clients from {file.filename}")
    return ImportSummaryModel(imported=len(records), client_ids=[r.id for r in records])


@router.get("/{client_id}", response_model=ClientModel, status_code=status.HTTP_200_OK)
def get_client(client_id: str, container: AppContainer = Depends(get_container)) -> ClientModel:
    try:
        return ClientModel.from_domain(require_client(container.store, client_id))
    except UnknownClientError as exc:
        raise _not_found(exc) from exc


@router.put("/{client_id}", response_model=ClientModel, status_code=status.HTTP_200_OK)
def replace_client(
    client_id: str,
    payload: ClientModel,
    container: AppContainer = Depends(get_container),
) -> ClientModel:
    if payload.id != client_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Client id in path and body differ.")
    try:
        container.store.update(payload.to_domain())
    except UnknownClientError as exc:
        raise _not_found(exc) from exc
    return payload


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_client(client_id: str, container: AppContainer = Depends(get_container)) -> Response:
    try:
        container.store.delete(client_id)
    except UnknownClientError as exc:
        raise _not_found(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{client_id}/ledger", response_model=LedgerSummaryModel, status_code=status.HTTP_200_OK)
def get_ledger_summary(client_id: str, container: AppContainer = Depends(get_container)) -> LedgerSummaryModel:
    try:
        return LedgerSummaryModel(**ledger_summary(require_client(container.store, client_id)))
    except UnknownClientError as exc:
        raise _not_found(exc) from exc


@router.get("/{client_id}/navigation", response_model=NavigationLinksModel, status_code=status.HTTP_200_OK)
def get_navigation_links(client_id: str, container: AppContainer = Depends(get_container)) -> NavigationLinksModel:
    try:
        record = require_client(container.store, client_id)
    except UnknownClientError as exc:
        raise _not_found(exc) from exc
    return NavigationLinksModel(
        client_id=record.id,
        search_url=search_url(record),
        directions_url=directions_url(record),
    )
