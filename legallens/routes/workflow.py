from __future__ import annotations

from fastapi import APIRouter, File, HTTPException, Query, Request, UploadFile

from legallens.application import UploadController, get_upload_controller
from legallens.core.files import SelectedFile, UnsupportedFileTypeError
from legallens.presentation import ResultRevealSignal, present

router = APIRouter(prefix="/workflow", tags=["workflow"])

IN_PROGRESS_DETAIL = "An analysis is already in progress"


def _render(request: Request, controller: UploadController) -> dict:
    payload = present(controller.state).model_dump()
    payload["status"] = controller.state.status
    reveal: ResultRevealSignal | None = getattr(request.app.state, "reveal_signal", None)
    payload["reveal_results"] = reveal.consume() if reveal is not None else False
    return payload


@router.get("")
async def get_workflow(request: Request, wait: bool = Query(default=False)) -> dict:
    """Return the current view, optionally after the in-flight analysis settles."""
    controller = get_upload_controller()
    if wait:
        await controller.wait_until_settled()
    return _render(request, controller)


@router.post("/file")
async def select_workflow_file(request: Request, file: UploadFile = File(...)) -> dict:
    """Select a document and start its analysis."""
    controller = get_upload_controller()
    try:
        if controller.is_busy:
            raise HTTPException(status_code=409, detail=IN_PROGRESS_DETAIL)
        if not file.filename:
            raise HTTPException(status_code=400, detail="Uploaded file must have a filename")

        content = await file.read()
        try:
            selected = SelectedFile.from_upload(file.filename, content, file.content_type)
        except UnsupportedFileTypeError as exc:
            raise HTTPException(status_code=415, detail=str(exc)) from exc
    finally:
        await file.close()

    # Reading and closing the upload may yield to another request.
    if controller.is_busy:
        raise HTTPException(status_code=409, detail=IN_PROGRESS_DETAIL)
    controller.select_file(selected)
    return _render(request, controller)


@router.post("/reset")
async def reset_workflow(request: Request) -> dict:
    """Return to the upload prompt; refused while an analysis is running."""
    controller = get_upload_controller()
    if controller.is_busy:
        raise HTTPException(status_code=409, detail=IN_PROGRESS_DETAIL)
    controller.reset()
    return _render(request, controller)
