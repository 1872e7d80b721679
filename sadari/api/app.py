"""
FastAPI Application - REST API for the ladder game.

Endpoints:
    POST   /api/v1/ladder/sessions                 Create session (setup)
    GET    /api/v1/ladder/sessions                 List sessions
    GET    /api/v1/ladder/sessions/{id}            Get session status
    DELETE /api/v1/ladder/sessions/{id}            End session
    GET    /api/v1/ladder/sessions/{id}/ladder     Get ladder layout
    POST   /api/v1/ladder/sessions/{id}/select     Start a player's reveal
    POST   /api/v1/ladder/sessions/{id}/commit     Commit the reveal
    POST   /api/v1/ladder/sessions/{id}/reset      New ladder, same players
    GET    /api/v1/games/result/me                 Personal result history
    GET    /api/v1/games/result/group/{group_id}   Group result history

Reveal Flow:
    1. POST /select returns the path and a suggested animation delay
    2. The app animates the path
    3. POST /commit applies the outcome
    Until /commit, further /select and /reset calls get INVALID_TRANSITION.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import logging
import os

# Environment configuration
SADARI_ENV = os.getenv("SADARI_ENV", "development")
SADARI_LOG_LEVEL = os.getenv("SADARI_LOG_LEVEL", "INFO")
SADARI_SEED = os.getenv("SADARI_SEED")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)


def _env_seed(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring non-integer SADARI_SEED=%r", value)
        return None


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from .. import __version__
    from .service import APIService
    from .schemas import (
        CreateSessionRequest,
        SelectPlayerRequest,
        SessionResponse,
        LadderResponse,
        RevealResponse,
        CommitResponse,
        GameResultListResponse,
        SessionListResponse,
        EndSessionResponse,
        ErrorResponse,
        ErrorCode,
        HealthResponse,
    )

    logging.basicConfig(level=SADARI_LOG_LEVEL.upper())

    app = FastAPI(
        title="Sadari Ladder API",
        description="""
Penalty ladder game - build a random ladder, reveal players one by one,
and record who gets the penalty.

## Error Codes

| Code | Description |
|------|-------------|
| `VALIDATION_ERROR` | Setup rejected (player count, blank names, blank penalty) |
| `INVALID_TRANSITION` | Action not allowed in the current session state |
| `SESSION_NOT_FOUND` | Session does not exist |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(seed=_env_seed(SADARI_SEED))

    status_codes = {
        ErrorCode.VALIDATION_ERROR: 400,
        ErrorCode.SESSION_NOT_FOUND: 404,
        ErrorCode.INVALID_TRANSITION: 409,
        ErrorCode.INTERNAL_ERROR: 500,
    }

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Turn an ErrorResponse into a JSON response with the right status."""
        return JSONResponse(
            status_code=status_codes[error.error_code],
            content=error.model_dump(mode="json"),
        )

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/ladder/sessions",
        response_model=SessionResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Create a ladder session",
    )
    async def create_session(request: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Confirm the setup screen and build the ladder.

        The last player's column (`penalty_column`) is the penalty outcome.
        """
        return respond(api_service.create_session(request))

    @app.get(
        "/api/v1/ladder/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List sessions",
    )
    async def list_sessions() -> SessionListResponse:
        session_ids = api_service.list_sessions()
        return SessionListResponse(session_ids=session_ids, count=len(session_ids))

    @app.get(
        "/api/v1/ladder/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/ladder/sessions/{session_id}",
        response_model=EndSessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="End a session",
    )
    async def end_session(session_id: str) -> Union[EndSessionResponse, JSONResponse]:
        if not api_service.end_session(session_id):
            return make_error_response(ErrorResponse(
                error="Session not found",
                error_code=ErrorCode.SESSION_NOT_FOUND,
                details={"session_id": session_id},
            ))
        return EndSessionResponse(success=True, session_id=session_id)

    @app.get(
        "/api/v1/ladder/sessions/{session_id}/ladder",
        response_model=LadderResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Ladder"],
        summary="Get the ladder layout",
    )
    async def get_ladder(session_id: str) -> Union[LadderResponse, JSONResponse]:
        return respond(api_service.get_ladder(session_id))

    @app.post(
        "/api/v1/ladder/sessions/{session_id}/select",
        response_model=RevealResponse,
        responses={
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Player already revealed, game over, or reveal in flight"},
        },
        tags=["Ladder"],
        summary="Start a player's reveal",
    )
    async def select_player(
        session_id: str,
        request: SelectPlayerRequest,
    ) -> Union[RevealResponse, JSONResponse]:
        """
        Trace a player down the ladder.

        Animate `waypoints` for about `suggested_delay_ms`, then call /commit.
        """
        return respond(api_service.select_player(session_id, request))

    @app.post(
        "/api/v1/ladder/sessions/{session_id}/commit",
        response_model=CommitResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Ladder"],
        summary="Commit the reveal in flight",
    )
    async def commit_reveal(session_id: str) -> Union[CommitResponse, JSONResponse]:
        return respond(api_service.commit_reveal(session_id))

    @app.post(
        "/api/v1/ladder/sessions/{session_id}/reset",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Ladder"],
        summary="Build a new ladder for the same players",
    )
    async def reset(session_id: str) -> Union[SessionResponse, JSONResponse]:
        return respond(api_service.reset(session_id))

    # =========================================================================
    # Result History
    # =========================================================================

    @app.get(
        "/api/v1/games/result/me",
        response_model=GameResultListResponse,
        tags=["Results"],
        summary="Personal game results",
    )
    async def get_my_results() -> GameResultListResponse:
        return api_service.get_my_results()

    @app.get(
        "/api/v1/games/result/group/{group_id}",
        response_model=GameResultListResponse,
        tags=["Results"],
        summary="Group game results",
    )
    async def get_group_results(group_id: str) -> GameResultListResponse:
        return api_service.get_group_results(group_id)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            service="sadari-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Sadari Ladder API",
            "version": __version__,
            "env": SADARI_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
