import logging
import os
import sys
import uvicorn
import socket

# SET DATABASE_URL BEFORE importing fittrack modules!
# This ensures db.py uses SQLite instead of defaulting to PostgreSQL
if not os.getenv("DATABASE_URL"):
    if getattr(sys, 'frozen', False):
        # Running as compiled executable
        base_dir = os.path.dirname(sys.executable)
    else:
        base_dir = os.path.dirname(os.path.abspath(__file__))

    db_path = os.path.join(base_dir, "fittrack.db")
    # SQLite URL format: sqlite:///absolute/path/to/file.db (3 slashes for absolute)
    os.environ["DATABASE_URL"] = f"sqlite:///{db_path}"

# Now import the FastAPI app (db.py will read the DATABASE_URL we just set)
from fittrack.main import app as fastapi_app  # noqa: E402
from fittrack.db import engine  # noqa: E402
from fittrack.models import Base  # noqa: E402

logger = logging.getLogger("fittrack.start")


def find_free_port(start_port=8000, max_attempts=10):
    """Find a free port starting from start_port"""
    for port in range(start_port, start_port + max_attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(('127.0.0.1', port))
                return port
        except OSError:
            continue
    raise RuntimeError(f"Could not find a free port in range {start_port}-{start_port + max_attempts}")


if __name__ == "__main__":
    if engine.url.get_backend_name() == "sqlite":
        logger.info("Using SQLite database at: %s", engine.url.database)
        Base.metadata.create_all(bind=engine)

    preferred = int(os.getenv("PORT", "8000"))
    try:
        port = find_free_port(preferred)
        if port != preferred:
            logger.warning("Port %s in use, using port %s instead", preferred, port)
    except RuntimeError:
        logger.error("No free ports available")
        sys.exit(1)

    uvicorn.run(fastapi_app, host="127.0.0.1", port=port, reload=False)
