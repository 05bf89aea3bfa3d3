"""FastAPI application for fake call generation.

This module provides:
- Conversation script generation with Gemini, falling back to canned scripts
- Audio synthesis of a script in a character's ElevenLabs voice
- Diagnostic passthroughs for both upstream providers
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel

from .characters import get_fallback_script
from .config import get_settings
from .conversation import FALLBACK_NOTE, ConversationResolver
from .diagnostics import Diagnostics
from .log_context import (
    configure_logging,
    log_credential_status,
    new_request_id,
    request_id_var,
)
from .models import UpstreamError
from .speech import SpeechSynthesizer

configure_logging(get_settings())
logger = logging.getLogger(__name__)


class ConversationRequest(BaseModel):
    """Input model for conversation generation."""

    convoType: str


class AudioRequest(BaseModel):
    """Input model for conversation audio synthesis."""

    text: str
    character: str | None = None


# Global instances
conversation_resolver: ConversationResolver | None = None
speech_synthesizer: SpeechSynthesizer | None = None
diagnostics: Diagnostics | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    global conversation_resolver, speech_synthesizer, diagnostics

    settings = get_settings()
    configure_logging(settings)
    log_credential_status(settings, logger)

    conversation_resolver = ConversationResolver(settings)
    speech_synthesizer = SpeechSynthesizer(settings)
    diagnostics = Diagnostics(settings)

    logger.info(f"Fake call backend started on {settings.server_host}:{settings.server_port}")
    yield

    # Cleanup
    await conversation_resolver.close()
    await speech_synthesizer.close()
    await diagnostics.close()

    logger.info("Fake call backend stopped")


app = FastAPI(
    title="Fake Call Backend",
    description="Generates and voices one-sided phone conversations",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Tag every log line of a request with its id and log the outcome."""
    request_id = request.headers.get("X-Request-ID") or new_request_id()
    token = request_id_var.set(request_id)
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {status_code} ({elapsed_ms:.0f} ms)"
        )
        request_id_var.reset(token)


def upstream_error_response(error: UpstreamError, label: str) -> JSONResponse:
    """Render an upstream failure as a 500 with the upstream status attached."""
    return JSONResponse(
        status_code=500,
        content={
            "error": label,
            "status": error.status,
            "message": error.status_text or error.message,
        },
    )


# =============================================================================
# Liveness
# =============================================================================

@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness check."""
    return "Backend running 🚀"


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "fake-call-backend",
        "components": {
            "conversation_resolver": conversation_resolver is not None,
            "speech_synthesizer": speech_synthesizer is not None,
            "diagnostics": diagnostics is not None,
        },
        "credentials": get_settings().credential_status(),
    }


# =============================================================================
# Conversation generation
# =============================================================================

@app.post("/generate-conversation")
async def generate_conversation(body: ConversationRequest):
    """Generate a one-sided phone conversation for the requested caller type.

    Always answers 200; when generation fails the canned script is returned
    with a note and the last upstream error.
    """
    if not conversation_resolver:
        raise HTTPException(status_code=503, detail="Service not initialized")

    try:
        result = await conversation_resolver.resolve(body.convoType)
    except Exception as e:
        logger.error(f"Conversation generation failed unexpectedly: {e}")
        return {
            "conversation": get_fallback_script(body.convoType),
            "note": FALLBACK_NOTE,
            "error": str(e),
        }

    return result.to_dict()


@app.post("/generate-conversation-audio")
async def generate_conversation_audio(body: AudioRequest):
    """Synthesize conversation text in the character's voice.

    Returns:
        Audio in MP3 format, or a 500 JSON error carrying the upstream status.
    """
    if not speech_synthesizer:
        raise HTTPException(status_code=503, detail="Service not initialized")

    try:
        result = await speech_synthesizer.synthesize(body.text, body.character)
    except UpstreamError as e:
        return upstream_error_response(e, "ElevenLabs API failed")

    return Response(content=result.audio, media_type=result.content_type)


# =============================================================================
# Diagnostics
# =============================================================================

@app.get("/test-api-key")
async def check_api_key():
    """Check that the ElevenLabs API key is accepted."""
    if not diagnostics:
        raise HTTPException(status_code=503, detail="Service not initialized")

    try:
        account = await diagnostics.check_elevenlabs_key()
    except UpstreamError as e:
        return JSONResponse(status_code=500, content={"status": "invalid", "error": e.detail})

    return {"status": "valid", "account": account}


@app.get("/list-gemini-models")
async def list_gemini_models():
    """List Gemini models available to the configured key."""
    if not diagnostics:
        raise HTTPException(status_code=503, detail="Service not initialized")

    try:
        return await diagnostics.list_gemini_models()
    except UpstreamError as e:
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to list models", "details": e.detail},
        )


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)
