"""
JSON sidecar storage for per-file delete passwords.

The whole mapping (stored filename -> plaintext password) lives in a single
JSON document that is read fully and rewritten fully on every mutation.
Callers that load, mutate and save must hold ``PasswordStore.lock`` so that
requests handled by this process do not overwrite each other's changes.
"""

import asyncio
import json
import os
from pathlib import Path


class StoreCorruptError(Exception):
    """The password sidecar exists but does not hold a JSON object."""


class PasswordStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self.lock = asyncio.Lock()

    # ---------------------------------------------------------------------------
    # Raw document access
    # ---------------------------------------------------------------------------

    def load(self) -> dict[str, str]:
        """Return the full mapping, or ``{}`` if the sidecar does not exist yet."""
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise StoreCorruptError(f"Invalid JSON in {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreCorruptError(f"Expected a JSON object in {self.path}")
        return data

    def save(self, mapping: dict[str, str]) -> None:
        """Replace the sidecar with ``mapping``."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(mapping, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

    # ---------------------------------------------------------------------------
    # Locked mutations
    # ---------------------------------------------------------------------------

    async def set_password(self, filename: str, password: str) -> None:
        """Record a password for ``filename``. Empty passwords are ignored."""
        if not password:
            return
        async with self.lock:
            passwords = self.load()
            passwords[filename] = password
            self.save(passwords)

    async def purge_orphans(self, upload_dir: Path) -> list[str]:
        """
        Delete entries whose file no longer exists in ``upload_dir``.
        Returns the list of removed filenames.
        """
        async with self.lock:
            passwords = self.load()
            orphans = [name for name in passwords if not (upload_dir / name).is_file()]
            if orphans:
                for name in orphans:
                    del passwords[name]
                self.save(passwords)
        return orphans
