# app/infrastructure/storage/local_file_storage.py
from __future__ import annotations

import hashlib
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO
from uuid import uuid4

from app.core.exceptions import StorageError
from app.infrastructure.storage.file_storage import FileStorage, StoredFile

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024  # 1MB


@dataclass(frozen=True)
class LocalFileStorageConfig:
    base_path: str
    prefix: str = "products"


class LocalFileStorage(FileStorage):
    def __init__(self, *, config: LocalFileStorageConfig) -> None:
        raw = (config.base_path or "").strip()
        if not raw:
            raise StorageError("Storage de arquivos não configurado (FILES_BASE_PATH vazio).")

        self._base = Path(raw).expanduser().resolve()
        self._prefix = (config.prefix or "").strip("/")

        try:
            self._base.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            raise StorageError(
                f"Sem permissão para criar/acessar a pasta de uploads: '{self._base}'. "
                "Verifique permissões do usuário do serviço e/ou ajuste FILES_BASE_PATH."
            )
        except OSError as e:
            raise StorageError(f"Falha ao inicializar storage local em '{self._base}': {e}")

        if not self._base.is_dir():
            raise StorageError(f"Pasta de uploads inválida: '{self._base}' não é um diretório.")

        if not os.access(self._base, os.W_OK):
            raise StorageError(
                f"Pasta de uploads sem permissão de escrita: '{self._base}'. "
                "Ajuste permissões (chown/chmod) ou use outro FILES_BASE_PATH."
            )

    def _abs_path_from_stored(self, stored_name: str) -> Path:
        # stored_name deve ser relativo (ex.: products/2026/01/uuid.jpg)
        rel = Path(stored_name)
        abs_path = (self._base / rel).resolve()

        # anti path traversal
        base_str = str(self._base)
        abs_str = str(abs_path)
        if not abs_str.startswith(base_str + os.sep):
            raise ValueError("stored_name inválido (path traversal).")

        return abs_path

    @staticmethod
    def _safe_suffix(original_name: str) -> str:
        suffix = Path(original_name or "").suffix.lower()
        if not suffix or len(suffix) > 10 or not suffix[1:].isalnum():
            return ""
        return suffix

    def save(
        self,
        *,
        fileobj: BinaryIO,
        original_name: str,
        content_type: str | None,
    ) -> StoredFile:
        now = datetime.now(timezone.utc)
        rel_dir = Path(self._prefix) / f"{now.year:04d}" / f"{now.month:02d}"
        abs_dir = (self._base / rel_dir).resolve()

        try:
            abs_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Falha ao preparar diretório de uploads '{abs_dir}': {e}")

        stored_filename = f"{uuid4().hex}{self._safe_suffix(original_name)}"
        rel_path = (rel_dir / stored_filename).as_posix()
        abs_path = self._abs_path_from_stored(rel_path)

        sha = hashlib.sha256()
        size = 0

        try:
            with open(abs_path, "wb") as out:
                while True:
                    chunk = fileobj.read(_CHUNK_SIZE)
                    if not chunk:
                        break
                    out.write(chunk)
                    sha.update(chunk)
                    size += len(chunk)
        except OSError as e:
            # remove arquivo parcial
            abs_path.unlink(missing_ok=True)
            raise StorageError(f"Falha ao salvar arquivo: {e}")

        logger.info("Arquivo salvo: %s (%d bytes)", rel_path, size)

        return StoredFile(
            original_name=original_name,
            stored_name=rel_path,
            content_type=content_type,
            size_bytes=size,
            sha256=sha.hexdigest(),
        )

    def get(self, *, stored_name: str) -> bytes:
        try:
            abs_path = self._abs_path_from_stored(stored_name)
        except ValueError:
            raise FileNotFoundError(stored_name)

        if not abs_path.is_file():
            raise FileNotFoundError(stored_name)

        return abs_path.read_bytes()

    def delete(self, *, stored_name: str) -> None:
        # best-effort delete; não quebra fluxo
        try:
            abs_path = self._abs_path_from_stored(stored_name)
            if abs_path.is_file():
                abs_path.unlink()
        except (OSError, ValueError) as e:
            logger.warning("Não foi possível remover %s: %s", stored_name, e)
