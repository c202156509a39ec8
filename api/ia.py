"""
AI assistant HTTP endpoints.

  POST /api/ia/ask    {"prompt": "...", "context": "..."}  → answer
  POST /api/ia/voice  multipart "audioFile"                 → transcription

This module is I/O only: it enforces upload limits, maps InvalidInputError
to 400 and delegates everything else to the AIRequestOrchestrator.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel, Field

from agent.errors import InvalidInputError
from agent.orchestrator import AIRequestOrchestrator
from config import Config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ia", tags=["ia"])


class AskRequest(BaseModel):
    """Question for the assistant, with optional context."""
    prompt: str = Field(default="", description="Question or prompt (required, non-blank)")
    context: Optional[str] = Field(default=None, description="Extra context for the question")


class AskResponse(BaseModel):
    response: str
    timestamp: datetime


class VoiceTranscriptionResponse(BaseModel):
    file_name: str
    file_size: int
    content_type: Optional[str] = None
    transcription: str
    timestamp: datetime


def get_orchestrator() -> AIRequestOrchestrator:
    """Dependency: the process-wide orchestrator."""
    from infra import bootstrap_infrastructure
    return bootstrap_infrastructure().get_orchestrator()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _reject_oversized(size: int, limit: int):
    logger.warning(f"Audio file too large: at least {size} bytes")
    raise HTTPException(
        status_code=400,
        detail=f"El archivo de audio no debe exceder los {limit // (1024 * 1024)}MB",
    )


@router.post("/ask", response_model=AskResponse)
async def ask(
    request: AskRequest,
    orchestrator: AIRequestOrchestrator = Depends(get_orchestrator),
):
    """
    Ask the assistant a question.

    Example:
        POST /api/ia/ask
        {"prompt": "¿Qué temas debo repasar?",
         "context": "Tengo un examen de matemáticas la próxima semana"}
    """
    if not request.prompt.strip():
        logger.warning("Received request with empty prompt")
        raise HTTPException(status_code=400, detail="El prompt no puede estar vacío")

    logger.info(f"Processing AI question: {request.prompt[:100]}")

    try:
        if request.context and request.context.strip():
            answer = await orchestrator.ask_with_context(request.prompt, request.context)
        else:
            answer = await orchestrator.ask(request.prompt)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AskResponse(response=answer, timestamp=_utcnow())


@router.post("/voice", response_model=VoiceTranscriptionResponse)
async def transcribe_voice(
    audioFile: Optional[UploadFile] = File(None),
    orchestrator: AIRequestOrchestrator = Depends(get_orchestrator),
):
    """
    Transcribe an uploaded audio file (MP3, WAV, M4A, OGG; 10MB max).

    Example:
        curl -X POST http://localhost:8000/api/ia/voice -F "audioFile=@clase.mp3"
    """
    if audioFile is None:
        logger.warning("No audio file received")
        raise HTTPException(status_code=400, detail="Debe proporcionar un archivo de audio")

    limit = Config.MAX_AUDIO_BYTES
    if audioFile.size is not None and audioFile.size > limit:
        _reject_oversized(audioFile.size, limit)

    # Fully buffered: every provider in the chain reads the same bytes.
    # Reading one byte past the limit is enough to detect an oversized upload.
    data = await audioFile.read(limit + 1)
    filename = audioFile.filename or ""

    if not data:
        logger.warning("Received empty audio file")
        raise HTTPException(status_code=400, detail="Debe proporcionar un archivo de audio")

    if len(data) > limit:
        _reject_oversized(len(data), limit)

    logger.info(
        f"Processing audio file: {filename}, size: {len(data)} bytes, type: {audioFile.content_type}"
    )

    try:
        transcription = await orchestrator.transcribe(data, filename)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return VoiceTranscriptionResponse(
        file_name=filename,
        file_size=len(data),
        content_type=audioFile.content_type,
        transcription=transcription,
        timestamp=_utcnow(),
    )
