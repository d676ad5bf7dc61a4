"""Filesystem storage for received webhooks.

Each accepted webhook becomes one JSON file under the data directory. Files
are written to a hidden temp name first and then hard-linked to their final
name, so readers never see a partial record and an existing record is never
overwritten.
"""

import json
import logging
import os
import secrets
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Union

from app.core.clock import epoch_ms
from app.core.errors import StorageWriteError
from app.schemas.payload import StoredWebhookRecord

logger = logging.getLogger(__name__)

FILENAME_PREFIX = "webhook"
SUFFIX_BYTES = 4
RECORD_MODE = 0o644


def ensure_data_dir(path: Union[str, Path]) -> bool:
    """Create the data directory (and parents) if missing.

    Safe to call repeatedly. Returns ``False`` and logs when the directory
    cannot be created; the caller decides whether that is fatal.
    """
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Error creating data directory %s: %s", path, e)
        return False
    return True


def generate_filename(received_at: datetime) -> str:
    return f"{FILENAME_PREFIX}-{epoch_ms(received_at)}-{secrets.token_hex(SUFFIX_BYTES)}.json"


class RecordWriter:
    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def write(self, record: StoredWebhookRecord, received_at: datetime) -> str:
        """Persist ``record`` and return the generated filename.

        Raises:
            StorageWriteError: on any I/O failure, including a name collision,
                or when the record cannot be serialized as strict JSON.
        """
        filename = generate_filename(received_at)
        target = self.data_dir / filename

        tmp_path = None
        try:
            body = json.dumps(record.model_dump(), indent=2, ensure_ascii=False, allow_nan=False)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{filename}.", suffix=".tmp", dir=self.data_dir)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                # mkstemp creates files 0600
                os.fchmod(f.fileno(), RECORD_MODE)
                f.write(body)
                f.flush()
                os.fsync(f.fileno())
            # link() refuses to replace an existing file, unlike rename()
            os.link(tmp_path, target)
        except (OSError, ValueError, RecursionError) as e:
            raise StorageWriteError(filename, e) from e
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except FileNotFoundError:
                    pass

        return filename
