"""
Client for the statement analyzer service.

The service parses uploaded statement PDFs, categorizes merchants and returns
transactions plus server-side aggregates. Exports are produced by the same
service from the same uploaded files.

Errors:
    UpstreamError: the service answered with a ``detail``/``error`` message
        (surfaced verbatim) or an unusable response.
    NetworkFailure: the service could not be reached. No retry is attempted.
"""
from __future__ import annotations
import json
import mimetypes
import socket
import urllib.error
import urllib.request
import uuid
from typing import Any, Dict, Optional, Sequence, Tuple

from pydantic import ValidationError

from core.config import AppConfig, config as default_config
from core.errors import NetworkFailure, UpstreamError
from core.logger import get_logger
from models.schema import AnalysisSummary, StatementFile

log = get_logger("api/client")

UPLOAD_FIELD = "files"

_client: Optional["AnalyzerClient"] = None


def encode_multipart(
    files: Sequence[StatementFile],
    field: str = UPLOAD_FIELD,
) -> Tuple[bytes, str]:
    """
    Encode ``files`` as a ``multipart/form-data`` body.

    Returns:
        (body, content_type) with the boundary embedded in the content type.
    """
    boundary = f"----statement-insights-{uuid.uuid4().hex}"
    chunks = []
    for f in files:
        mime = mimetypes.guess_type(f.name)[0] or "application/octet-stream"
        filename = f.name.replace('"', "")
        chunks.append(
            (
                f"--{boundary}\r\n"
                f'Content-Disposition: form-data; name="{field}"; filename="{filename}"\r\n'
                f"Content-Type: {mime}\r\n\r\n"
            ).encode("utf-8")
        )
        chunks.append(f.content)
        chunks.append(b"\r\n")
    chunks.append(f"--{boundary}--\r\n".encode("utf-8"))
    return b"".join(chunks), f"multipart/form-data; boundary={boundary}"


def error_message(payload: Any) -> Optional[str]:
    """The service's error string, if ``payload`` carries one."""
    if not isinstance(payload, dict):
        return None
    for key in ("detail", "error"):
        value = payload.get(key)
        if value:
            return value if isinstance(value, str) else json.dumps(value)
    return None


class AnalyzerClient:
    """Thin HTTP client; one instance can be shared across sessions."""

    def __init__(self, base_url: str, timeout: float = 120.0, cfg: AppConfig = default_config) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._cfg = cfg

    @classmethod
    def from_config(cls, cfg: AppConfig = default_config) -> "AnalyzerClient":
        return cls(cfg.backend_url, timeout=cfg.request_timeout, cfg=cfg)

    def analyze(self, files: Sequence[StatementFile]) -> AnalysisSummary:
        """
        Upload statements to ``/analyze`` and return the parsed payload.

        Raises:
            UpstreamError: service-reported or malformed response
            NetworkFailure: transport failure
        """
        if not files:
            raise ValueError("At least one statement file is required")

        log.info(f"Analyzing {len(files)} statement(s): {[f.name for f in files]}")
        body = self._post(self._cfg.analyze_path, files)

        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            log.error(f"Analyzer returned invalid JSON: {e}")
            raise UpstreamError("Analyzer returned an invalid response.") from e

        message = error_message(payload)
        if message:
            log.warning(f"Analyzer reported an error: {message}")
            raise UpstreamError(message)

        if not isinstance(payload, dict):
            raise UpstreamError("Analyzer returned an invalid response.")

        try:
            summary = AnalysisSummary.model_validate(payload)
        except ValidationError as e:
            log.error(f"Analyzer response failed validation: {e}")
            raise UpstreamError(f"Analyzer returned an unexpected response: {e.error_count()} invalid field(s).") from e

        log.info(f"Analysis received: transactions={len(summary.transactions)} total_spent={summary.total_spent}")
        return summary

    def export_csv(self, files: Sequence[StatementFile]) -> bytes:
        """CSV export of the transactions parsed from ``files``."""
        return self._export(self._cfg.export_csv_path, files)

    def export_excel(self, files: Sequence[StatementFile]) -> bytes:
        """Spreadsheet export of the transactions parsed from ``files``."""
        return self._export(self._cfg.export_excel_path, files)

    def _export(self, path: str, files: Sequence[StatementFile]) -> bytes:
        if not files:
            raise ValueError("At least one statement file is required")
        log.info(f"Requesting export {path} for {len(files)} statement(s)")
        data = self._post(path, files)
        # Some deployments answer 200 with a JSON error instead of the file
        if data[:1] == b"{":
            try:
                message = error_message(json.loads(data.decode("utf-8")))
            except (UnicodeDecodeError, json.JSONDecodeError):
                message = None
            if message:
                raise UpstreamError(message)
        return data

    def _post(self, path: str, files: Sequence[StatementFile]) -> bytes:
        body, content_type = encode_multipart(files)
        url = f"{self.base_url}{path}"
        req = urllib.request.Request(url, data=body, method="POST")
        req.add_header("Content-Type", content_type)
        req.add_header("Accept", "application/json, */*")

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                return resp.read()
        except urllib.error.HTTPError as e:
            raise self._upstream_error(e) from e
        except (urllib.error.URLError, socket.timeout, TimeoutError, ConnectionError) as e:
            log.error(f"Analyzer unreachable at {url}: {e!r}")
            raise NetworkFailure() from e

    @staticmethod
    def _upstream_error(e: urllib.error.HTTPError) -> UpstreamError:
        try:
            raw = e.read().decode("utf-8", errors="replace")
        except OSError:
            raw = ""

        message: Optional[str] = None
        if raw:
            try:
                message = error_message(json.loads(raw))
            except json.JSONDecodeError:
                message = None

        message = message or f"Analyzer error: {e.code} {e.reason}"
        log.warning(f"Analyzer HTTP {e.code}: {message}")
        return UpstreamError(message, status=e.code)


def analyzer() -> AnalyzerClient:
    """Get or create the shared analyzer client."""
    global _client
    if _client is None:
        _client = AnalyzerClient.from_config()
        log.info(f"Analyzer client initialized: base_url={_client.base_url}")
    return _client
