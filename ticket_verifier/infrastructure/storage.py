# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Image storage on the local filesystem."""

from __future__ import annotations

import secrets
import time
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from ticket_verifier.domain.tickets.entities import StoredUpload
from ticket_verifier.domain.tickets.exceptions import UploadTooLargeError
from ticket_verifier.domain.tickets.repositories import UploadStore
from ticket_verifier.shared.errors import StorageError
from ticket_verifier.shared.logging import logger

PUBLIC_PREFIX = "uploads"


class LocalUploadStore(UploadStore):
    """Streams uploads into ``root`` under collision-free names.

    Names are ``<epoch ms>-<random hex>.<ext>``; the random part keeps two
    uploads arriving in the same millisecond apart, and files are opened in
    exclusive-create mode so an existing file is never overwritten.
    """

    def __init__(
        self,
        root: Path,
        *,
        chunk_size: int = 64 * 1024,
        public_prefix: str = PUBLIC_PREFIX,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)
        self._chunk_size = chunk_size
        self._public_prefix = public_prefix.strip("/")
        self._clock = clock
        logger.info(f"storage: upload root ready at {self._root.resolve()}")

    def _unique_name(self, extension: str) -> str:
        millis = int(self._clock() * 1000)
        return f"{millis}-{secrets.token_hex(8)}.{extension}"

    def _resolve(self, relative_path: str) -> Path:
        root = self._root.resolve()
        path = (root / relative_path).resolve()
        if path.parent != root:
            msg = "Attempted directory traversal outside storage root"
            raise ValueError(msg)
        return path

    def place(self, stream: BinaryIO, extension: str, *, max_bytes: int) -> StoredUpload:
        name = self._unique_name(extension)
        destination = self._resolve(name)
        try:
            out = open(destination, "xb")
        except OSError as exc:
            logger.exception(f"storage: cannot create {name}")
            raise StorageError() from exc

        written = 0
        try:
            with out:
                while True:
                    chunk = stream.read(self._chunk_size)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > max_bytes:
                        raise UploadTooLargeError()
                    out.write(chunk)
        except UploadTooLargeError:
            destination.unlink(missing_ok=True)
            logger.info(f"storage: discarded oversized upload after {written} bytes")
            raise
        except OSError as exc:
            destination.unlink(missing_ok=True)
            logger.exception(f"storage: failed writing {name}")
            raise StorageError() from exc
        except Exception:
            destination.unlink(missing_ok=True)
            raise

        logger.debug(f"storage: write path={destination} size={written}")
        return StoredUpload(name=name, image_path=f"{self._public_prefix}/{name}", size=written)

    def locate(self, name: str) -> Path | None:
        """Return the stored file for ``name`` or ``None`` when it is absent or unsafe."""
        try:
            path = self._resolve(name)
        except ValueError:
            return None
        return path if path.is_file() else None


__all__ = ["LocalUploadStore", "PUBLIC_PREFIX"]
