"""FastAPI application for the audio segment permutation codec.

Endpoints:
- GET /health: Service health check
- GET /descriptor: Parse and validate an encoding code
- POST /descriptor: Build the encoding code for a parameter set
- POST /encode: Permute the segments of an uploaded WAV
- POST /decode: Restore an encoded WAV from its encoding code

Example:
    Run with uvicorn:

    $ uvicorn api.main:app --host 0.0.0.0 --port 8000
"""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import PurePath
from typing import Annotated

from fastapi import FastAPI, File, Form, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from audioio import wav_bytes
from segcodec import (
    CodecResult,
    EncodingParameters,
    Scheme,
    decode_audio,
    encode_audio,
    parse_descriptor,
    serialize_descriptor,
)

from .config import Settings, get_settings
from .deps import get_audio_config
from .errors import InvalidInputError, InvalidParameterApiError, register_exception_handlers
from .logging import add_middleware, batch_progress_logger, setup_logging
from .schemas import CodeResponse, DescriptorResponse, HealthResponse


logger = logging.getLogger(__name__)

ENCODABLE_SCHEMES = [Scheme.SPLIT.value, Scheme.ODD_EVEN.value]

WAV_MEDIA_TYPE = "audio/wav"


# =============================================================================
# Helpers
# =============================================================================


def build_params(
    settings: Settings,
    scheme: str,
    parts: int | None,
    interval: float | None,
    reversed: bool,
) -> EncodingParameters:
    """Turn form fields into validated encoding parameters.

    Missing ``interval`` and, for split, missing ``parts`` fall back to the
    settings defaults. ``parts`` is ignored for schemes other than split.

    Raises:
        InvalidParameterError: If the scheme is unknown or a value is out of range.
        InvalidParameterApiError: If the scheme is ``none``.
    """
    resolved = Scheme.from_name(scheme)
    if resolved is Scheme.NONE:
        raise InvalidParameterApiError(
            message="Scheme 'none' has no encoding code; choose one of " + ", ".join(ENCODABLE_SCHEMES),
            details={"parameter": "scheme", "value": scheme, "allowed": ENCODABLE_SCHEMES},
        )

    if interval is None:
        interval = settings.default_interval_sec

    if resolved is Scheme.SPLIT:
        return EncodingParameters.split(
            parts=settings.default_parts if parts is None else parts,
            interval=interval,
            reversed=reversed,
        )
    return EncodingParameters.odd_even(interval=interval, reversed=reversed)


async def read_upload(file: UploadFile) -> bytes:
    """Read an uploaded file, rejecting empty uploads."""
    data = await file.read()
    if not data:
        raise InvalidInputError(
            message="Empty file uploaded",
            details={"filename": file.filename},
        )
    return data


def download_name(prefix: str, filename: str | None) -> str:
    """Name of the returned file: ``<prefix>_<original name>``."""
    name = PurePath(filename or "audio.wav").name or "audio.wav"
    return f"{prefix}_{name}"


def wav_response(result: CodecResult, filename: str, settings: Settings) -> Response:
    body = wav_bytes(result.waveform, result.sample_rate, subtype=settings.output_subtype)
    headers = {
        "Content-Disposition": f'attachment; filename="{filename}"',
        "X-Segment-Count": str(result.segment_count),
        "X-Duration-Sec": f"{result.duration_sec:.6f}",
    }
    if result.code is not None:
        headers["X-Encoding-Code"] = result.code
    return Response(content=body, media_type=WAV_MEDIA_TYPE, headers=headers)


# =============================================================================
# Application Factory
# =============================================================================


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        logger.info("Starting %s v%s", settings.app_name, settings.app_version)
        yield
        logger.info("Application shutdown")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Reversible audio segment permutation codec - encode WAV files by reordering fixed-length segments and decode them from a short encoding code.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Encoding-Code", "X-Segment-Count", "X-Duration-Sec", "X-Request-ID", "Content-Disposition"],
    )

    add_middleware(app)
    register_exception_handlers(app)
    register_routes(app, settings)

    return app


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register all API routes on the application."""

    # =========================================================================
    # Health Endpoint
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            app_name=settings.app_name,
            version=settings.app_version,
            schemes=ENCODABLE_SCHEMES,
        )

    # =========================================================================
    # Descriptor Endpoints
    # =========================================================================

    @app.get(
        "/descriptor",
        response_model=DescriptorResponse,
        tags=["Descriptor"],
        summary="Parse an encoding code",
        description="Validate an encoding code and return the parameters it describes.",
    )
    async def parse_code(
        code: Annotated[str, Query(description="Encoding code, e.g. sb3b0.5t")],
    ) -> DescriptorResponse:
        params = parse_descriptor(code)
        return DescriptorResponse.from_params(params, serialize_descriptor(params))

    @app.post(
        "/descriptor",
        response_model=CodeResponse,
        tags=["Descriptor"],
        summary="Build an encoding code",
    )
    async def build_code(
        scheme: Annotated[str, Form(description="Permutation scheme: split or oddEven")],
        parts: Annotated[int | None, Form(description="Number of blocks for split (2-10)")] = None,
        interval: Annotated[float | None, Form(description="Segment duration in seconds (0.001-10)")] = None,
        reversed: Annotated[bool, Form(description="Time-reverse the encoded buffer")] = False,
    ) -> CodeResponse:
        params = build_params(settings, scheme, parts, interval, reversed)
        return CodeResponse(code=serialize_descriptor(params))

    # =========================================================================
    # Codec Endpoints
    # =========================================================================

    @app.post(
        "/encode",
        tags=["Codec"],
        summary="Encode a WAV file",
        description="Permute the segments of a WAV file. The encoding code is returned in the X-Encoding-Code header.",
        response_class=Response,
        responses={200: {"content": {WAV_MEDIA_TYPE: {}}}},
    )
    async def encode(
        file: Annotated[UploadFile, File(description="WAV audio file")],
        scheme: Annotated[str, Form(description="Permutation scheme: split or oddEven")] = Scheme.SPLIT.value,
        parts: Annotated[int | None, Form(description="Number of blocks for split (2-10)")] = None,
        interval: Annotated[float | None, Form(description="Segment duration in seconds (0.001-10)")] = None,
        reversed: Annotated[bool, Form(description="Time-reverse the encoded buffer")] = False,
    ) -> Response:
        params = build_params(settings, scheme, parts, interval, reversed)
        audio_bytes = await read_upload(file)

        start_time = time.perf_counter()
        result = await run_in_threadpool(
            encode_audio,
            audio_bytes,
            params,
            audio_config=get_audio_config(settings),
            batch_size=settings.batch_size,
            on_batch=batch_progress_logger("encode"),
        )
        logger.info(
            "Encode complete: code=%s segments=%d duration_sec=%.3f encode_ms=%.2f",
            result.code,
            result.segment_count,
            result.duration_sec,
            (time.perf_counter() - start_time) * 1000,
        )

        return wav_response(result, download_name("encoded", file.filename), settings)

    @app.post(
        "/decode",
        tags=["Codec"],
        summary="Decode a WAV file",
        description="Restore the original segment order of an encoded WAV file.",
        response_class=Response,
        responses={200: {"content": {WAV_MEDIA_TYPE: {}}}},
    )
    async def decode(
        file: Annotated[UploadFile, File(description="Encoded WAV audio file")],
        code: Annotated[str, Form(description="Encoding code returned by /encode")],
    ) -> Response:
        params = parse_descriptor(code)
        audio_bytes = await read_upload(file)

        start_time = time.perf_counter()
        result = await run_in_threadpool(
            decode_audio,
            audio_bytes,
            params,
            audio_config=get_audio_config(settings),
            batch_size=settings.batch_size,
            on_batch=batch_progress_logger("decode"),
        )
        logger.info(
            "Decode complete: code=%s segments=%d duration_sec=%.3f decode_ms=%.2f",
            result.code,
            result.segment_count,
            result.duration_sec,
            (time.perf_counter() - start_time) * 1000,
        )

        return wav_response(result, download_name("decoded", file.filename), settings)


# =============================================================================
# Application Instance
# =============================================================================


app = create_app()
