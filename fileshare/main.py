import os
import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from . import utils
from .routes.files import FileShareRouter
from .store import PasswordStore, StoreCorruptError
from .cleanup import cleanup_orphans

# Configuration from environment variables
VERSION = "1.0.0"
UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", "public/uploads"))
PASSWORDS_FILE = Path(os.getenv("PASSWORDS_FILE", "file_passwords.json"))
MAX_FILE_SIZE = utils.parse_file_size(os.getenv("MAX_FILE_SIZE", "100mb"))
CLEANUP_INTERVAL = utils.parse_time(os.getenv("CLEANUP_INTERVAL", "5m"))
SERVE_UPLOADS = os.getenv("SERVE_UPLOADS", "1").lower() not in ("0", "false", "no")


def create_app(
    upload_dir: Path = UPLOAD_DIR,
    passwords_file: Path = PASSWORDS_FILE,
    max_file_size: int = MAX_FILE_SIZE,
    cleanup_interval: int = CLEANUP_INTERVAL,
    serve_uploads: bool = SERVE_UPLOADS,
) -> FastAPI:
    upload_dir = Path(upload_dir)
    store = PasswordStore(passwords_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        upload_dir.mkdir(parents=True, exist_ok=True)

        # Start background cleanup task
        cleanup_task = asyncio.create_task(cleanup_orphans(store, upload_dir, cleanup_interval))

        yield

        # Cancel cleanup task on shutdown
        cleanup_task.cancel()
        try:
            await cleanup_task
        except asyncio.CancelledError:
            pass

    app = FastAPI(title="File Share", version=VERSION, lifespan=lifespan)
    app.state.store = store
    app.state.upload_dir = upload_dir

    @app.exception_handler(StoreCorruptError)
    async def store_corrupt_handler(request: Request, exc: StoreCorruptError):
        print(f"[Store] {exc}")
        return JSONResponse(status_code=500, content={"detail": "Password store is unreadable"})

    files_router = FileShareRouter(
        upload_dir=upload_dir,
        store=store,
        max_file_size=max_file_size,
    )
    app.include_router(files_router.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "version": VERSION}

    # Raw files are reachable here without the preview allow-list or any password check
    if serve_uploads:
        app.mount("/uploads", StaticFiles(directory=upload_dir, check_dir=False), name="uploads")

    return app


app = create_app()
