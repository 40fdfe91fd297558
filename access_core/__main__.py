"""Run the service with ``python -m access_core``."""

if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("access_core.main:create_app", factory=True, host="0.0.0.0", port=8000)
