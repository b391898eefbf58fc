import secrets
from pathlib import Path

from fastapi import APIRouter, HTTPException, File, Form, Request, UploadFile
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from .. import utils
from ..models import StoredFile
from ..store import PasswordStore, StoreCorruptError

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# Error codes carried back to the listing page as ?error=<code>
ERROR_MESSAGES = {
    "wrong_password": "Wrong password. The file was not deleted.",
    "no_file": "No file was selected for upload.",
    "file_too_large": "The file exceeds the maximum upload size.",
}


class FileShareRouter:
    def __init__(self, upload_dir: Path, store: PasswordStore, max_file_size: int):
        self.UPLOAD_DIR = upload_dir
        self.MAX_FILE_SIZE = max_file_size
        self.store = store
        self.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

        self.router = APIRouter(tags=["Files"])
        self.router.add_api_route("/", self.index, methods=["GET"], response_class=HTMLResponse)
        self.router.add_api_route("/files", self.list_files, methods=["GET"], response_model=list[StoredFile])
        self.router.add_api_route("/upload", self.upload, methods=["POST"], response_model=None)
        self.router.add_api_route("/preview/{filename}", self.preview, methods=["GET"], response_model=None)
        self.router.add_api_route("/delete/{filename}", self.delete, methods=["POST"], response_model=None)

    def get_file_list(self) -> list[StoredFile]:
        """Scan the upload directory and join each file with its password flag.

        Category and password flag are derived on every call; nothing is cached.
        Files are returned sorted by name, which for timestamp-prefixed names
        is upload order.
        """
        if not self.UPLOAD_DIR.exists():
            return []
        passwords = self.store.load()
        files = []
        for path in sorted(self.UPLOAD_DIR.iterdir(), key=lambda p: p.name):
            if not path.is_file():
                continue
            category, mime = utils.classify(path.name)
            files.append(StoredFile(
                name=path.name,
                url=f"/uploads/{path.name}",
                mime=mime,
                category=category,
                size=path.stat().st_size,
                has_password=bool(passwords.get(path.name)),
            ))
        return files

    def _resolve(self, filename: str) -> Path:
        """Map a path parameter to a file inside the upload directory."""
        if utils.safe_name(filename) != filename:
            raise HTTPException(404, "File not found")
        return self.UPLOAD_DIR / filename

    async def index(self, request: Request, error: str | None = None):
        return self.templates.TemplateResponse(request, "index.html", {
            "files": self.get_file_list(),
            "error": error,
            "error_message": ERROR_MESSAGES.get(error) if error else None,
        })

    async def list_files(self):
        return self.get_file_list()

    async def upload(
        self,
        file: UploadFile | None = File(None),
        password: str = Form(""),
    ):
        original = utils.safe_name(file.filename) if file is not None else None
        if original is None:
            print("[Upload] Request without a file, nothing stored")
            return RedirectResponse("/?error=no_file", status_code=302)

        self.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
        filename = utils.timestamped_name(original)
        file_path = self.UPLOAD_DIR / filename

        CHUNK_SIZE = 1024 * 1024  # 1MB
        file_size = 0
        try:
            with open(file_path, "wb") as out:
                while True:
                    chunk = await file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    file_size += len(chunk)
                    if file_size > self.MAX_FILE_SIZE:
                        break
                    out.write(chunk)

            if file_size > self.MAX_FILE_SIZE:
                file_path.unlink(missing_ok=True)
                print(f"[Upload] Rejected {original}: exceeds {self.MAX_FILE_SIZE} bytes")
                return RedirectResponse("/?error=file_too_large", status_code=302)

            await self.store.set_password(filename, password)
        except StoreCorruptError:
            file_path.unlink(missing_ok=True)
            raise
        except Exception as e:
            file_path.unlink(missing_ok=True)
            raise HTTPException(500, f"Failed to store file: {str(e)}")

        print(f"[Upload] Stored {filename} ({file_size} bytes{', password protected' if password else ''})")
        return RedirectResponse("/", status_code=302)

    async def preview(self, filename: str):
        """Serve a file inline if its extension allows a preview.

        Images are sent as-is. Text-like files (including .md, .csv and .json)
        are always sent as text/plain. Previews are not password checked.
        """
        file_path = self._resolve(filename)
        if not file_path.is_file():
            raise HTTPException(404, "File not found")

        category, _ = utils.classify(filename)
        if category == "image":
            return FileResponse(path=file_path)
        if category == "text":
            return FileResponse(path=file_path, media_type="text/plain")
        raise HTTPException(415, "Preview not supported for this file type")

    async def delete(self, filename: str, password: str = Form("")):
        file_path = self._resolve(filename)

        async with self.store.lock:
            passwords = self.store.load()
            stored = passwords.get(filename)

            # Files uploaded without a password can be deleted by anyone
            if stored and not secrets.compare_digest(str(stored).encode(), password.encode()):
                print(f"[Delete] Wrong password for {filename}")
                return RedirectResponse("/?error=wrong_password", status_code=302)

            file_path.unlink(missing_ok=True)
            passwords.pop(filename, None)
            self.store.save(passwords)

        print(f"[Delete] Removed {filename}")
        return RedirectResponse("/", status_code=302)
