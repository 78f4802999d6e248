"""
API Dependencies

Provides dependency injection for API endpoints.
Manages singleton instances of core components and the auth gate.
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from mockprep.config.settings import get_settings
from mockprep.core.ai_reasoning import AIReasoningLayer
from mockprep.core.evaluation_engine import EvaluationEngine
from mockprep.core.feedback_orchestrator import FeedbackOrchestrator
from mockprep.core.feedback_store import FeedbackStore
from mockprep.core.security import decode_access_token


# ============================================================================
# SINGLETON INSTANCES
# ============================================================================

_ai_reasoning: AIReasoningLayer | None = None
_store: FeedbackStore | None = None
_orchestrator: FeedbackOrchestrator | None = None


def get_ai_reasoning() -> AIReasoningLayer:
    """Get the AI reasoning layer singleton."""
    global _ai_reasoning

    if _ai_reasoning is None:
        _ai_reasoning = AIReasoningLayer()

    return _ai_reasoning


def get_store() -> FeedbackStore:
    """Get the feedback store singleton."""
    global _store

    if _store is None:
        _store = FeedbackStore()

    return _store


def get_orchestrator() -> FeedbackOrchestrator:
    """
    Get the feedback orchestrator singleton.

    Lazily initializes all required components.
    """
    global _orchestrator

    if _orchestrator is None:
        evaluation_engine = EvaluationEngine(get_ai_reasoning())
        _orchestrator = FeedbackOrchestrator(
            evaluation_engine=evaluation_engine,
            store=get_store(),
        )

    return _orchestrator


# ============================================================================
# AUTH GATE
# ============================================================================

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """
    Resolve the authenticated user id.

    Accepts the session token as a bearer credential or in the session cookie.
    """
    settings = get_settings()
    token = credentials.credentials if credentials else request.cookies.get(settings.session_cookie_name)

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = decode_access_token(token, settings)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user_id


async def cleanup():
    """Cleanup resources on shutdown."""
    global _ai_reasoning, _store, _orchestrator

    if _ai_reasoning:
        await _ai_reasoning.close()
        _ai_reasoning = None

    _orchestrator = None
    _store = None
