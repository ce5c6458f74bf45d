"""Command line front end: one control call or one upload per invocation."""

from __future__ import annotations

import sys
import uuid
import asyncio
import logging
import argparse
from dataclasses import replace

import orjson

from filedock.net.urls import ws_base_url
from filedock.state.settings import ClientSettings
from filedock.upload.source import block_count
from filedock.runtime.logging import configure_logging
from filedock.runtime.settings_loader import load_settings
from filedock.errors import RemoteCallError, FiledockError
from filedock.runtime.dependencies import new_uploader, client_runtime, ensure_connection

logger = logging.getLogger("filedock.cli")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_REMOTE_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="filedock", description="filedock control and upload client")
    p.add_argument("--server", default=None, help="host:port, http(s):// or ws(s):// base (default: env)")
    p.add_argument("--secure", action="store_true", help="Use wss://")
    p.add_argument("--debug", action="store_true")
    sub = p.add_subparsers(dest="command", required=True)

    call = sub.add_parser("call", help="Send one JSON request over the control socket")
    call.add_argument("payload", help='JSON request, e.g. \'{"cmd": "Logout"}\'')

    upload = sub.add_parser("upload", help="Upload one file to a transfer slot")
    upload.add_argument("path", help="File to upload")
    upload.add_argument("--id", dest="transfer_id", required=True, type=uuid.UUID, help="Transfer identifier")
    upload.add_argument("--resume-from", type=int, default=0, help="Byte offset to resume at")
    return p.parse_args(argv)


def _settings_for(args: argparse.Namespace) -> ClientSettings:
    settings = load_settings()
    if args.server:
        connection = replace(settings.connection, base_url=ws_base_url(args.server, args.secure))
        settings = replace(settings, connection=connection)
    return settings


async def run_call(args: argparse.Namespace, settings: ClientSettings) -> int:
    try:
        payload = orjson.loads(args.payload)
    except orjson.JSONDecodeError as exc:
        print(f"invalid JSON payload: {exc}", file=sys.stderr)
        return EXIT_FAILED

    async with client_runtime(settings) as runtime:
        try:
            channel = await ensure_connection(runtime)
            response = await channel.execute(payload)
        except RemoteCallError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_REMOTE_ERROR
        except FiledockError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_FAILED

    print(orjson.dumps(response, option=orjson.OPT_INDENT_2).decode("utf-8"))
    return EXIT_OK


async def run_upload(args: argparse.Namespace, settings: ClientSettings) -> int:
    async with client_runtime(settings) as runtime:
        try:
            uploader = new_uploader(runtime, args.path, args.transfer_id)
        except OSError as exc:
            print(f"cannot read {args.path}: {exc}", file=sys.stderr)
            return EXIT_FAILED
        logger.info(
            "uploading %s (%d bytes, %d blocks) to %s",
            args.path,
            uploader.source_size,
            block_count(uploader.source_size, uploader.block_size),
            uploader.url,
        )
        uploader.on_progress(
            lambda: logger.info("upload finished at %.1f%%", uploader.get_percentage() * 100)
        )
        try:
            uploader.start(resume_from=args.resume_from)
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_FAILED
        error = await uploader.wait()

    if error:
        print(f"upload failed: {error}", file=sys.stderr)
        return EXIT_REMOTE_ERROR
    return EXIT_OK


async def run(args: argparse.Namespace) -> int:
    settings = _settings_for(args)
    if args.command == "call":
        return await run_call(args, settings)
    return await run_upload(args, settings)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else None)
    raise SystemExit(asyncio.run(run(args)))


__all__ = ["main", "parse_args", "run"]
