from typing import Literal

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status

from app.schemas.holidays import (
    MONTHS,
    HolidayDeleteResponse,
    HolidayFormRequest,
    HolidayFormResponse,
    HolidayFormUpdateRequest,
    HolidayImportResponse,
    HolidayListResponse,
    HolidaySubmitResponse,
)
from app.services.file_transfer import FileTransferError
from app.services.tracker import EntryNotFoundError, HolidayTracker, get_tracker

router = APIRouter(prefix="/holidays", tags=["holidays"])


@router.get(
    "",
    response_model=HolidayListResponse,
)
def list_holidays(
    order: Literal["year", "stored"] = "year",
    tracker: HolidayTracker = Depends(get_tracker),
) -> HolidayListResponse:
    entries = tracker.list_entries(display=order == "year")
    return HolidayListResponse(entries=entries, count=len(entries))


@router.post(
    "",
    response_model=HolidaySubmitResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_holiday(
    payload: HolidayFormRequest,
    response: Response,
    tracker: HolidayTracker = Depends(get_tracker),
) -> HolidaySubmitResponse:
    entry = tracker.add_holiday(
        year=payload.year,
        month=payload.month,
        location=payload.location,
    )
    if entry is None:
        response.status_code = status.HTTP_200_OK
    return HolidaySubmitResponse(
        added=entry is not None,
        entry=entry,
        form=HolidayFormResponse(**tracker.form_fields()),
    )


@router.get("/months", response_model=list[str])
def list_months() -> list[str]:
    return list(MONTHS)


@router.get("/form", response_model=HolidayFormResponse)
def get_form(
    tracker: HolidayTracker = Depends(get_tracker),
) -> HolidayFormResponse:
    return HolidayFormResponse(**tracker.form_fields())


@router.patch("/form", response_model=HolidayFormResponse)
def update_form(
    payload: HolidayFormUpdateRequest,
    tracker: HolidayTracker = Depends(get_tracker),
) -> HolidayFormResponse:
    fields = tracker.update_form(
        year=payload.year,
        month=payload.month,
        location=payload.location,
    )
    return HolidayFormResponse(**fields)


@router.post("/form/submit", response_model=HolidaySubmitResponse)
def submit_form(
    tracker: HolidayTracker = Depends(get_tracker),
) -> HolidaySubmitResponse:
    entry = tracker.submit_form()
    return HolidaySubmitResponse(
        added=entry is not None,
        entry=entry,
        form=HolidayFormResponse(**tracker.form_fields()),
    )


@router.get("/export")
def export_holidays(
    tracker: HolidayTracker = Depends(get_tracker),
) -> Response:
    try:
        exported = tracker.save_to_file()
    except FileTransferError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=exc.description,
        ) from exc
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )


@router.post(
    "/import",
    response_model=HolidayImportResponse,
)
def import_holidays(
    file: UploadFile | None = File(None),
    tracker: HolidayTracker = Depends(get_tracker),
) -> HolidayImportResponse:
    contents = file.file.read() if file is not None else None
    try:
        entries = tracker.load_from_file(contents)
    except FileTransferError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.description,
        ) from exc

    if entries is None:
        return HolidayImportResponse(loaded=False, count=len(tracker.list_entries()))
    return HolidayImportResponse(loaded=True, count=len(entries))


@router.delete(
    "/{entry_id}",
    response_model=HolidayDeleteResponse,
)
def delete_holiday(
    entry_id: str,
    confirm: bool = False,
    tracker: HolidayTracker = Depends(get_tracker),
) -> HolidayDeleteResponse:
    prompt = ""

    def _answer(message: str) -> bool:
        nonlocal prompt
        prompt = message
        return confirm

    try:
        deleted = tracker.delete_entry(entry_id, _answer)
    except EntryNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Holiday not found.",
        ) from exc
    return HolidayDeleteResponse(deleted=deleted, confirmation=prompt)
