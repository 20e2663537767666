"""
Module runner to start the API server.

Usage:
    python -m textvault.run
    textvault            (console script)
"""
import os

import uvicorn
from dotenv import load_dotenv


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable with sensible defaults."""
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def get_port() -> int:
    """Get server port, default 3001."""
    try:
        return int(os.getenv("PORT", "3001"))
    except ValueError:
        return 3001


# PUBLIC_INTERFACE
def main():
    """Entry point to start the FastAPI server with environment-based configuration."""
    load_dotenv()
    host = os.getenv("HOST", "0.0.0.0")
    port = get_port()
    log_level = os.getenv("LOG_LEVEL", "info").lower()
    reload = env_bool("RELOAD", False)

    print(f"[server] Starting Text Vault on {host}:{port} (reload={reload}, log_level={log_level})")
    uvicorn.run(
        "textvault.api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
