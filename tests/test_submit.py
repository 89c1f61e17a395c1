"""Tests for the ingest client."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from canary_inventory.exceptions import SubmissionError
from canary_inventory.submit.client import IngestClient, SubmissionResult


def _response(status, body=""):
    """Build an object usable as ``async with session.post(...) as response``."""
    response = MagicMock()
    response.status = status
    response.text = AsyncMock(return_value=body)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)
    return context


def _session(*outcomes):
    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    session.post = MagicMock(side_effect=list(outcomes))
    return session


@pytest.fixture
def inventory_file(tmp_path):
    path = tmp_path / ".canary-inventory.json"
    path.write_text(json.dumps({"project_id": "p", "dependencies": []}, indent=2), encoding="utf-8")
    return path


def _submit(client, path):
    return asyncio.run(client.submit(path))


class TestSubmissionResult:
    """Test SubmissionResult."""

    @pytest.mark.parametrize("status,ok", [(200, True), (204, True), (301, False), (401, False), (500, False)])
    def test_ok(self, status, ok):
        assert SubmissionResult(status, "").ok is ok


class TestIngestClient:
    """Test posting inventories."""

    def test_url_joins_ingest_path(self):
        assert IngestClient("https://worker.example.com/", "t").url == "https://worker.example.com/ingest"
        assert IngestClient("https://worker.example.com", "t").url == "https://worker.example.com/ingest"

    def test_posts_file_bytes_with_headers(self, inventory_file):
        session = _session(_response(200, '{"accepted": true}'))
        client = IngestClient("https://worker.example.com", "secret", session=session)

        result = _submit(client, inventory_file)

        assert result == SubmissionResult(200, '{"accepted": true}')
        args, kwargs = session.post.call_args
        assert args == ("https://worker.example.com/ingest",)
        assert kwargs["data"] == inventory_file.read_bytes()
        assert kwargs["headers"] == {
            "Authorization": "Bearer secret",
            "Content-Type": "application/json",
        }

    def test_client_error_not_retried(self, inventory_file):
        session = _session(_response(401, "unauthorized"))
        client = IngestClient("https://worker.example.com", "bad", session=session, retry_delay=0)

        result = _submit(client, inventory_file)

        assert result.status_code == 401
        assert session.post.call_count == 1

    def test_server_error_retried(self, inventory_file):
        session = _session(_response(502, "bad gateway"), _response(200, "ok"))
        client = IngestClient("https://worker.example.com", "t", session=session, retry_delay=0)

        result = _submit(client, inventory_file)

        assert result.ok
        assert session.post.call_count == 2

    def test_last_server_error_returned(self, inventory_file):
        session = _session(_response(500, "a"), _response(500, "b"), _response(503, "c"))
        client = IngestClient("https://worker.example.com", "t", session=session, retry_delay=0)

        result = _submit(client, inventory_file)

        assert result == SubmissionResult(503, "c")
        assert session.post.call_count == 3

    def test_network_error_retried(self, inventory_file):
        session = _session(aiohttp.ClientConnectionError("refused"), _response(200, "ok"))
        client = IngestClient("https://worker.example.com", "t", session=session, retry_delay=0)

        assert _submit(client, inventory_file).ok

    def test_network_error_exhausts_retries(self, inventory_file):
        session = _session(
            aiohttp.ClientConnectionError("refused"),
            asyncio.TimeoutError(),
        )
        client = IngestClient("https://worker.example.com", "t", session=session, max_retries=1, retry_delay=0)

        with pytest.raises(SubmissionError):
            _submit(client, inventory_file)
        assert session.post.call_count == 2

    def test_no_retries(self, inventory_file):
        session = _session(_response(500, "down"))
        client = IngestClient("https://worker.example.com", "t", session=session, max_retries=0)

        assert _submit(client, inventory_file).status_code == 500
        assert session.post.call_count == 1

    def test_context_manager_closes_session(self):
        session = _session()

        async def run():
            async with IngestClient("https://worker.example.com", "t", session=session):
                pass

        asyncio.run(run())

        session.close.assert_awaited_once()
