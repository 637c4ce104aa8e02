"""Tests for the analyzer HTTP client against a local stub server."""
import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from api.client import AnalyzerClient, encode_multipart, error_message
from core.config import AppConfig
from core.errors import NETWORK_FAILURE_MESSAGE, NetworkFailure, UpstreamError
from models.schema import AnalysisSummary, StatementFile

ANALYSIS = {
    "transactions": [
        {"date": "01/05", "merchant": "Acme", "amount": 50.0, "category": "Food",
         "source_file": "jan.pdf", "statement_year": 2024},
        {"date": "01/09", "post_date": "01/10", "merchant": "Airline", "amount": -20,
         "category": "Travel", "source_file": "jan.pdf"},
    ],
    "total_spent": 50.0,
    "category_spend": {"Food": 50.0},
    "avg_monthly_spend": 50.0,
    "discretionary_spent": 0.0,
    "card_spend": {"Visa": 50.0},
    "category_summary_percent": {"Food": 100.0},
    "monthly_spending": {"2024-01": 50.0},
    "global_recommendations": ["Cook at home"],
    "flags": {"suspicious": [{"merchant": "Airline", "amount": -20, "reason": "refund"}]},
    "unused_field": True,
}


class StubHandler(BaseHTTPRequestHandler):
    routes = {}
    requests = []

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length)
        StubHandler.requests.append((self.path, self.headers.get("Content-Type"), body))

        status, payload, content_type = StubHandler.routes.get(self.path, (404, b'{"detail": "Not Found"}', "application/json"))
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def stub_server():
    StubHandler.routes = {}
    StubHandler.requests = []
    server = ThreadingHTTPServer(("127.0.0.1", 0), StubHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def client(stub_server):
    host, port = stub_server.server_address
    cfg = AppConfig(backend_url=f"http://{host}:{port}/")
    return AnalyzerClient.from_config(cfg)


@pytest.fixture
def files():
    return [
        StatementFile(name="jan.pdf", content=b"%PDF-1.4 january"),
        StatementFile(name="feb.pdf", content=b"%PDF-1.4 february\x00\xff"),
    ]


def route(path, status, payload, content_type="application/json"):
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
    StubHandler.routes[path] = (status, body, content_type)


class TestAnalyze:
    """Tests for AnalyzerClient.analyze."""

    def test_parses_summary(self, client, files):
        route("/analyze", 200, ANALYSIS)
        summary = client.analyze(files)

        assert isinstance(summary, AnalysisSummary)
        assert len(summary.transactions) == 2
        assert summary.transactions[0].statement_year == 2024
        assert summary.transactions[1].post_date == "01/10"
        assert summary.category_spend == {"Food": 50.0}
        assert summary.flags.suspicious[0].reason == "refund"
        assert summary.global_recommendations == ["Cook at home"]

    def test_sends_every_file_byte_identical(self, client, files):
        route("/analyze", 200, ANALYSIS)
        client.analyze(files)

        path, content_type, body = StubHandler.requests[0]
        assert path == "/analyze"
        assert content_type.startswith("multipart/form-data; boundary=")
        assert body.count(b'name="files"') == 2
        assert files[0].content in body
        assert files[1].content in body
        assert body.index(b'filename="jan.pdf"') < body.index(b'filename="feb.pdf"')

    def test_error_field_is_surfaced_verbatim(self, client, files):
        route("/analyze", 200, {"error": "Could not read statement"})
        with pytest.raises(UpstreamError) as exc:
            client.analyze(files)
        assert exc.value.message == "Could not read statement"

    def test_detail_on_http_error(self, client, files):
        route("/analyze", 422, {"detail": "Only PDF files are supported"})
        with pytest.raises(UpstreamError) as exc:
            client.analyze(files)
        assert str(exc.value) == "Only PDF files are supported"
        assert exc.value.status == 422

    def test_http_error_without_detail(self, client, files):
        route("/analyze", 500, b"boom", "text/plain")
        with pytest.raises(UpstreamError) as exc:
            client.analyze(files)
        assert "500" in exc.value.message

    def test_invalid_json(self, client, files):
        route("/analyze", 200, b"<html>", "text/html")
        with pytest.raises(UpstreamError):
            client.analyze(files)

    def test_missing_aggregates_default_to_empty(self, client, files):
        route("/analyze", 200, {"transactions": None, "flags": None, "total_spent": None})
        summary = client.analyze(files)
        assert summary.transactions == []
        assert summary.flags.suspicious == []
        assert summary.total_spent == 0.0

    def test_requires_files(self, client):
        with pytest.raises(ValueError):
            client.analyze([])

    def test_unreachable_service(self, files):
        sock = socket.socket()
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
        sock.close()

        client = AnalyzerClient(f"http://127.0.0.1:{port}", timeout=2)
        with pytest.raises(NetworkFailure) as exc:
            client.analyze(files)
        assert exc.value.message == NETWORK_FAILURE_MESSAGE


class TestExport:
    """Tests for the export endpoints."""

    def test_csv_export_returns_bytes(self, client, files):
        route("/export/csv", 200, b"date,merchant,amount\n2024-01-05,Acme,50\n", "text/csv")
        data = client.export_csv(files)
        assert data.startswith(b"date,merchant")
        assert StubHandler.requests[0][0] == "/export/csv"

    def test_excel_export_sends_same_files(self, client, files):
        route("/export/excel", 200, b"PK\x03\x04xlsx", "application/octet-stream")
        assert client.export_excel(files) == b"PK\x03\x04xlsx"
        body = StubHandler.requests[0][2]
        assert files[0].content in body and files[1].content in body

    def test_export_error_body(self, client, files):
        route("/export/csv", 200, {"error": "No transactions"})
        with pytest.raises(UpstreamError) as exc:
            client.export_csv(files)
        assert exc.value.message == "No transactions"


class TestHelpers:
    """Tests for module helpers."""

    def test_error_message(self):
        assert error_message({"detail": "bad"}) == "bad"
        assert error_message({"error": "worse"}) == "worse"
        assert error_message({"detail": None, "total_spent": 1}) is None
        assert error_message(["not", "a", "dict"]) is None

    def test_non_string_detail_is_serialized(self):
        assert error_message({"detail": [{"msg": "field required"}]}) == '[{"msg": "field required"}]'

    def test_encode_multipart_boundary(self):
        body, content_type = encode_multipart([StatementFile(name="a.pdf", content=b"x")])
        boundary = content_type.split("boundary=")[1]
        assert body.startswith(f"--{boundary}\r\n".encode())
        assert body.endswith(f"--{boundary}--\r\n".encode())
        assert b"Content-Type: application/pdf" in body
