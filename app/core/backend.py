import logging
from typing import Any, Callable

from supabase import Client, create_client

from app.core.errors import BackendNotConfiguredError, ConfigurationError

logger = logging.getLogger(__name__)

"""
SUPABASE CLIENT BOOTSTRAP

Built once per process by the app factory and kept on app.state.
Missing or malformed configuration fails startup unless the stub is
explicitly allowed (BACKEND_ALLOW_STUB).
"""


# -------------------------------------------------------------------
# Stub client (explicit opt-in only)
# -------------------------------------------------------------------
class StubSubscription:
    def unsubscribe(self) -> None:
        return None


class StubAuth:
    def get_session(self) -> None:
        return None

    def on_auth_state_change(self, callback: Callable[..., Any]) -> StubSubscription:
        return StubSubscription()

    def sign_up(self, credentials: dict | None = None) -> None:
        raise BackendNotConfiguredError("Supabase not configured")

    def sign_in_with_password(self, credentials: dict | None = None) -> None:
        raise BackendNotConfiguredError("Supabase not configured")

    def sign_out(self, options: dict | None = None) -> None:
        return None


class StubBackendClient:
    is_stub = True

    def __init__(self):
        self.auth = StubAuth()


# -------------------------------------------------------------------
# Bootstrap
# -------------------------------------------------------------------
def _config_problems(url: str | None, key: str | None) -> list[str]:
    problems = []
    if not url or not url.startswith("http"):
        problems.append("Missing or invalid SUPABASE_URL")
    if not key:
        problems.append("Missing SUPABASE_ANON_KEY")
    return problems


def create_backend_client(
    url: str | None,
    key: str | None,
    *,
    allow_stub: bool = False,
) -> Client | StubBackendClient:
    problems = _config_problems(url, key)
    cause = None

    if not problems:
        try:
            return create_client(url, key)
        except Exception as e:
            cause = e
            problems.append(f"Supabase client failed to initialize: {e}")

    if not allow_stub:
        raise ConfigurationError("; ".join(problems)) from cause

    for problem in problems:
        logger.warning(problem)
    logger.warning("Supabase failed to initialize, using stub client")

    return StubBackendClient()


def backend_mode(backend: Any) -> str:
    if backend is None:
        return "disabled"
    return "stub" if getattr(backend, "is_stub", False) else "live"
