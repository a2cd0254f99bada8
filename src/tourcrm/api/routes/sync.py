"""Remote sync endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...container import AppContainer
from ...errors import ConfirmationRequiredError, SyncNotConfiguredError
from ...schemas.sync import CloudConfigModel, CloudConfigView, SyncActionResponse, SyncStatusModel
from ...services.sync import CloudConfig
from ..dependencies import get_container

router = APIRouter(prefix="/sync", tags=["sync"])


def _config_view(config: CloudConfig) -> CloudConfigView:
    return CloudConfigView(provider=config.provider, url=config.url, key_configured=bool(config.key))


@router.get("/status", response_model=SyncStatusModel, status_code=status.HTTP_200_OK)
def get_status(container: AppContainer = Depends(get_container)) -> SyncStatusModel:
    sync = container.sync
    return SyncStatusModel(
        status=sync.status.value,
        configured=sync.configured,
        pending_upload=sync.pending_upload,
        last_synced_at=sync.last_synced_at,
    )


@router.get("/config", response_model=CloudConfigView, status_code=status.HTTP_200_OK)
def get_config(container: AppContainer = Depends(get_container)) -> CloudConfigView:
    return _config_view(container.sync.config)


@router.put("/config", response_model=CloudConfigView, status_code=status.HTTP_200_OK)
def set_config(payload: CloudConfigModel, container: AppContainer = Depends(get_container)) -> CloudConfigView:
    container.sync.update_config(CloudConfig(provider=payload.provider, url=payload.url, key=payload.key))
    return _config_view(container.sync.config)


@router.post("/upload", response_model=SyncActionResponse, status_code=status.HTTP_200_OK)
def force_upload(container: AppContainer = Depends(get_container)) -> SyncActionResponse:
    try:
        result = container.sync.force_upload()
    except SyncNotConfiguredError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return SyncActionResponse(status=result.value, clients=len(container.store))


@router.post("/download", response_model=SyncActionResponse, status_code=status.HTTP_200_OK)
def force_download(
    confirm: bool = Query(default=False, description="Must be true: local clients are overwritten."),
    container: AppContainer = Depends(get_container),
) -> SyncActionResponse:
    try:
        result = container.sync.force_download(confirmed=confirm)
    except SyncNotConfiguredError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ConfirmationRequiredError as exc:
        raise HTTPException(status_code=status.HTTP_428_PRECONDITION_REQUIRED, detail=str(exc)) from exc
    return SyncActionResponse(status=result.value, clients=len(container.store))
