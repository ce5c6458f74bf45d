from __future__ import annotations

import uuid
from pathlib import Path
from functools import partial

import orjson
import pytest
import websockets

from filedock.cli import run, parse_args, EXIT_OK, EXIT_FAILED, EXIT_REMOTE_ERROR
from tests.fakes import ControlServer, FakeConnector, UploadServer

TRANSFER_ID = "0b5f3c52-8f0e-4f4c-9d41-3f6a0d1b2c7e"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FILEDOCK_WS_BASE_URL", raising=False)
    monkeypatch.delenv("FILEDOCK_UPLOAD_BLOCK_BYTES", raising=False)


def test_parse_call() -> None:
    args = parse_args(["--server", "files.test:9000", "--secure", "call", '{"cmd": "Logout"}'])
    assert args.command == "call"
    assert args.server == "files.test:9000"
    assert args.secure is True
    assert args.payload == '{"cmd": "Logout"}'


def test_parse_upload() -> None:
    args = parse_args(["upload", "data.bin", "--id", TRANSFER_ID, "--resume-from", "128"])
    assert args.command == "upload"
    assert args.path == "data.bin"
    assert args.transfer_id == uuid.UUID(TRANSFER_ID)
    assert args.resume_from == 128


def test_parse_upload_rejects_bad_id() -> None:
    with pytest.raises(SystemExit):
        parse_args(["upload", "data.bin", "--id", "not-a-uuid"])


@pytest.mark.asyncio
async def test_call_prints_response(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    connector = FakeConnector(on_connect=ControlServer)
    monkeypatch.setattr(websockets, "connect", connector)

    code = await run(parse_args(["--server", "files.test:9000", "call", '{"cmd": "Ping"}']))

    assert code == EXIT_OK
    assert connector.calls[0][0] == "ws://files.test:9000/control"
    assert orjson.loads(capsys.readouterr().out) == {"err": None, "echo": {"cmd": "Ping"}}


@pytest.mark.asyncio
async def test_call_remote_error_exit_code(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    connector = FakeConnector(on_connect=partial(ControlServer, errors={"Logout": "not logged in"}))
    monkeypatch.setattr(websockets, "connect", connector)

    code = await run(parse_args(["call", '{"cmd": "Logout"}']))

    assert code == EXIT_REMOTE_ERROR
    assert "not logged in" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_call_connect_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(websockets, "connect", FakeConnector(fail=OSError("refused")))
    assert await run(parse_args(["call", "{}"])) == EXIT_FAILED


@pytest.mark.asyncio
async def test_call_invalid_json(monkeypatch: pytest.MonkeyPatch) -> None:
    connector = FakeConnector(on_connect=ControlServer)
    monkeypatch.setattr(websockets, "connect", connector)
    assert await run(parse_args(["call", "{nope"])) == EXIT_FAILED
    assert connector.calls == []


@pytest.mark.asyncio
async def test_upload_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "payload.bin"
    path.write_bytes(b"z" * 10)
    monkeypatch.setenv("FILEDOCK_UPLOAD_BLOCK_BYTES", "4")
    connector = FakeConnector(on_connect=UploadServer)
    monkeypatch.setattr(websockets, "connect", connector)

    code = await run(parse_args(["upload", str(path), "--id", TRANSFER_ID]))

    assert code == EXIT_OK
    assert connector.calls[0][0] == f"ws://localhost:8080/api/uploads/{TRANSFER_ID}"
    assert bytes(connector.servers[0].received) == b"z" * 10


@pytest.mark.asyncio
async def test_upload_failure_exit_code(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "payload.bin"
    path.write_bytes(b"abc")
    connector = FakeConnector(on_connect=partial(UploadServer, finish_error="quota exceeded"))
    monkeypatch.setattr(websockets, "connect", connector)

    assert await run(parse_args(["upload", str(path), "--id", TRANSFER_ID])) == EXIT_REMOTE_ERROR


@pytest.mark.asyncio
async def test_upload_missing_file(tmp_path: Path) -> None:
    args = parse_args(["upload", str(tmp_path / "missing.bin"), "--id", TRANSFER_ID])
    assert await run(args) == EXIT_FAILED


@pytest.mark.asyncio
async def test_upload_resume_out_of_range(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "payload.bin"
    path.write_bytes(b"abc")
    connector = FakeConnector(on_connect=UploadServer)
    monkeypatch.setattr(websockets, "connect", connector)

    args = parse_args(["upload", str(path), "--id", TRANSFER_ID, "--resume-from", "9"])
    assert await run(args) == EXIT_FAILED
    assert connector.calls == []
