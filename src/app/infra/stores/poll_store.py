"""Store de enquetes em arquivo JSON.

Formato do arquivo (reescrito por completo a cada put):
    {
        "<poll_message_id>": {
            "question": "...",
            "options": ["...", "..."],
            "enc_key": "<base64>"
        }
    }

Durabilidade é best-effort: falha de leitura no startup vira store vazio e
falha de flush é logada sem desfazer o registro em memória.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from app.domain.polls import PollRecord
from app.infra.stores._rwlock import ReadWriteLock
from app.protocols.poll_store import PollStoreProtocol

logger = logging.getLogger(__name__)


def _decode_enc_key(raw: Any) -> bytes:
    # base64 (formato gravado) ou array de inteiros
    if isinstance(raw, str):
        return base64.b64decode(raw, validate=True)
    if isinstance(raw, list):
        return bytes(raw)
    if raw is None:
        return b""
    raise ValueError(f"unsupported enc_key type: {type(raw).__name__}")


def _record_from_json(message_id: str, raw: Any) -> PollRecord:
    if not isinstance(raw, dict):
        raise ValueError("poll entry must be an object")
    options = raw.get("options") or []
    if not isinstance(options, list):
        raise ValueError("options must be a list")
    return PollRecord(
        message_id=message_id,
        question=str(raw.get("question", "")),
        options=tuple(str(option) for option in options),
        enc_key=_decode_enc_key(raw.get("enc_key")),
    )


def _record_to_json(record: PollRecord) -> dict[str, Any]:
    return {
        "question": record.question,
        "options": list(record.options),
        "enc_key": base64.b64encode(record.enc_key).decode("ascii"),
    }


class JsonFilePollStore(PollStoreProtocol):
    """Store de enquetes persistido em um único arquivo JSON.

    Args:
        file_path: Caminho do arquivo (diretório criado se não existir)
    """

    def __init__(self, file_path: str | Path) -> None:
        self._path = Path(file_path)
        self._lock = ReadWriteLock()
        self._records: dict[str, PollRecord] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._records)

    def _load(self) -> None:
        with self._lock.write():
            try:
                raw_text = self._path.read_text(encoding="utf-8")
            except FileNotFoundError:
                logger.info("poll_store_file_missing", extra={"path": str(self._path)})
                return
            except OSError as exc:
                logger.error(
                    "poll_store_load_failed",
                    extra={"path": str(self._path), "error_type": type(exc).__name__},
                )
                return

            try:
                data = json.loads(raw_text) if raw_text.strip() else {}
            except json.JSONDecodeError as exc:
                logger.error(
                    "poll_store_load_failed",
                    extra={"path": str(self._path), "error_type": type(exc).__name__},
                )
                return
            if not isinstance(data, dict):
                logger.error(
                    "poll_store_load_failed",
                    extra={"path": str(self._path), "error_type": "NotAnObject"},
                )
                return

            for message_id, entry in data.items():
                try:
                    self._records[message_id] = _record_from_json(message_id, entry)
                except (ValueError, binascii.Error, TypeError) as exc:
                    logger.warning(
                        "poll_store_entry_skipped",
                        extra={"poll_id": message_id, "error_type": type(exc).__name__},
                    )
            logger.info("poll_store_loaded", extra={"polls": len(self._records)})

    def put(self, message_id: str, record: PollRecord) -> None:
        """Substitui o registro e reescreve o arquivo inteiro.

        O write lock cobre o flush: leituras concorrentes esperam, e dois
        puts nunca gravam snapshots fora de ordem.
        """
        with self._lock.write():
            self._records[message_id] = record
            self._flush_locked()

    def get(self, message_id: str) -> PollRecord | None:
        with self._lock.read():
            return self._records.get(message_id)

    def _flush_locked(self) -> None:
        snapshot = {key: _record_to_json(value) for key, value in self._records.items()}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", dir=str(self._path.parent)
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(snapshot, handle, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error(
                "poll_store_flush_failed",
                extra={"path": str(self._path), "error_type": type(exc).__name__},
            )
