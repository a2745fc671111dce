# app/core/process_lock.py
from pathlib import Path

from filelock import FileLock

from app.config import settings

# Lock files live outside OUTPUT_DIR so clearing exports never drops a held lock.
lock_dir = Path(settings.LOCK_DIR)
lock_dir.mkdir(parents=True, exist_ok=True)

# Cut-out inference holds the GPU; workers take turns across processes.
isnet_lock = FileLock(lock_dir / "diecut_isnet.lock", timeout=settings.MODEL_LOCK_TIMEOUT)
