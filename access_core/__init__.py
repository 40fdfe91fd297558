"""Role, grant and resource registry service."""


def __getattr__(name):
    """Lazy import so models and services load without pulling in FastAPI."""
    if name == "create_app":
        from .main import create_app
        return create_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
