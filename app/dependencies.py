from app.services.search_provider import SyllabusSearchProvider, build_search_provider
from app.services.session_store import InMemorySessionStore, SessionStore

# One process-wide instance of each; tests swap them via
# app.dependency_overrides
_session_store = InMemorySessionStore()
_search_provider = build_search_provider()


def get_session_store() -> SessionStore:
    return _session_store


def get_search_provider() -> SyllabusSearchProvider:
    return _search_provider
