import asyncio
from pathlib import Path

from .store import PasswordStore


async def cleanup_orphans(store: PasswordStore, upload_dir: Path, interval: int = 300):
    """
    Background task that periodically drops password entries whose file is
    no longer in the upload directory (removed by hand, or lost while the
    sidecar was being rewritten by another process).

    Runs every ``interval`` seconds (default: 5 minutes).
    """
    while True:
        try:
            await asyncio.sleep(interval)

            orphans = await store.purge_orphans(upload_dir)
            if orphans:
                print(f"[Cleanup] Purged {len(orphans)} orphaned password entries")

        except asyncio.CancelledError:
            raise
        except Exception as e:
            print(f"[Cleanup] Error in cleanup task: {e}")
            continue
