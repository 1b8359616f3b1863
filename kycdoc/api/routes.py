import uuid
from datetime import datetime, timezone

from fastapi import (
    APIRouter,
    File,
    Form,
    HTTPException,
    Request,
    UploadFile,
    WebSocket,
    WebSocketDisconnect,
    status,
)

from kycdoc.api.schemas import StatusResponse, UploadResponse, VerifyRequest, VerifyResponse
from kycdoc.logging.logger import Log
from kycdoc.processor.exceptions import ConfirmationError, SubmissionNotFoundError
from kycdoc.processor.file_store import validate_path_segment
from kycdoc.processor.models import DocumentSubmission, ProcessingStage

ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/png"})

router = APIRouter()


@router.get("/health")
def health_check() -> dict[str, str]:
    """Liveness probe for load balancers."""
    return {"status": "healthy"}


@router.post("/kyc/upload", response_model=UploadResponse, response_model_by_alias=True)
async def upload_document(
    request: Request,
    document: UploadFile = File(...),
    owner_id: str = Form(...),
    document_type: str = Form("unknown"),
) -> UploadResponse:
    """Accept an identity document image and run it through the pipeline."""
    state = request.app.state
    try:
        validate_path_segment(owner_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if document.content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Only JPEG and PNG images are supported",
        )
    # One byte past the limit is enough to reject without buffering the whole body.
    data = await document.read(state.settings.max_upload_bytes + 1)
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")
    if len(data) > state.settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds {state.settings.max_upload_bytes} bytes",
        )

    submission_id = str(uuid.uuid4())
    raw_image_ref: str | None = None
    try:
        raw_image_ref = str(
            state.file_store.save(owner_id, submission_id, data, document.content_type)
        )
    except OSError as exc:
        Log.warning(f"Could not store image for submission {submission_id}: {exc}")

    submission = DocumentSubmission(
        id=submission_id,
        owner_id=owner_id,
        document_type=document_type,
        submitted_at=datetime.now(timezone.utc),
        raw_image_ref=raw_image_ref,
    )
    outcome = await state.processor.process(submission, data)
    if outcome.stage is ProcessingStage.ERROR:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=outcome.error_message or "Document processing failed",
        )
    return UploadResponse.from_outcome(outcome)


@router.post("/kyc/verify", response_model=VerifyResponse, response_model_by_alias=True)
def verify_identity(body: VerifyRequest, request: Request) -> VerifyResponse:
    """Store owner-confirmed identity fields."""
    try:
        outcome = request.app.state.confirmer.confirm(
            body.owner_id,
            body.id_number,
            body.date_of_birth,
            submission_id=body.submission_id,
            name=body.name,
            country_code=body.country_code,
        )
    except SubmissionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConfirmationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return VerifyResponse.from_outcome(outcome)


@router.get(
    "/kyc/status/{owner_id}", response_model=StatusResponse, response_model_by_alias=True
)
def submission_status(owner_id: str, request: Request) -> StatusResponse:
    """Latest submission for an owner, with any confirmed fields applied."""
    current = request.app.state.confirmer.status(owner_id)
    if current is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No KYC submission found"
        )
    return StatusResponse.from_status(current)


@router.websocket("/ws/kyc/{owner_id}")
async def kyc_updates(websocket: WebSocket, owner_id: str) -> None:
    """Join the owner's room and stream stage events until the client leaves."""
    notifier = websocket.app.state.notifier
    await websocket.accept()
    notifier.subscribe(owner_id, websocket)
    Log.info(f"Client joined KYC room for owner {owner_id}")
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        Log.info(f"Client left KYC room for owner {owner_id}")
    finally:
        notifier.disconnect(websocket)
