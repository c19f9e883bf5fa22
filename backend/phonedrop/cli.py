"""Command line entry point: serve, push, ls, rm, watch."""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from phonedrop.config import settings
from phonedrop.dashboard.gateway import HttpGateway
from phonedrop.dashboard.poller import order_snapshot
from phonedrop.dashboard.render import render_text
from phonedrop.dashboard.session import DashboardSession
from phonedrop.errors import PhoneDropError
from phonedrop.utils.formatting import format_size


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="phonedrop")
    p.add_argument("--server", default=settings.server_url, help="PhoneDrop server URL")
    p.add_argument("--log-level", default=settings.log_level)
    sub = p.add_subparsers(dest="cmd", required=True)

    serve = sub.add_parser("serve", help="run the upload server")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)

    push = sub.add_parser("push", help="upload files")
    push.add_argument("paths", nargs="+")
    push.add_argument("--secret", default=None, help="upload secret (default: PHONEDROP_UPLOAD_SECRET)")

    ls = sub.add_parser("ls", help="print the current listing")
    ls.add_argument("--json", action="store_true")

    rm = sub.add_parser("rm", help="delete a file by address")
    rm.add_argument("address")
    rm.add_argument("--yes", action="store_true", help="skip the confirmation prompt")

    watch = sub.add_parser("watch", help="live dashboard in the terminal")
    watch.add_argument("--interval", type=float, default=settings.poll_interval_seconds)
    watch.add_argument("--no-auto-refresh", action="store_true")

    return p


def _ask(prompt: str) -> bool:
    return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")


async def _push(gateway: HttpGateway, paths: list[str]) -> int:
    failures = 0
    for raw in paths:
        path = Path(raw)
        try:
            result = await gateway.upload(path.name, path.read_bytes())
        except (OSError, PhoneDropError) as e:
            print(f"FAIL {path}: {e}")
            failures += 1
            continue
        print(f"OK   {result.pathname}\t{result.url}")
    return 1 if failures else 0


async def _ls(gateway: HttpGateway, as_json: bool) -> int:
    records = order_snapshot(await gateway.list())
    if as_json:
        print(json.dumps([r.model_dump(mode="json", by_alias=True) for r in records], indent=2))
    else:
        for r in records:
            print(f"{r.uploaded_at.isoformat()}\t{format_size(r.size_bytes)}\t{r.display_name}\t{r.address}")
    return 0


async def _rm(gateway: HttpGateway, address: str, yes: bool) -> int:
    session = DashboardSession(gateway=gateway, confirm=(lambda _p: True) if yes else _ask)
    deleted = await session.delete(address)
    still_there = address in session.state.addresses()
    print("OK" if deleted and not still_there else "FAILED")
    return 0 if deleted and not still_there else 1


async def _watch(
    gateway: HttpGateway,
    interval: float,
    auto_refresh: bool,
    stop: asyncio.Event | None = None,
) -> int:
    session = DashboardSession(gateway=gateway, auto_refresh=auto_refresh, interval=interval)

    def _redraw() -> None:
        print("\033[2J\033[H" + render_text(session.view()), flush=True)

    session.state.subscribe(_redraw)
    async with session:
        _redraw()
        await (stop or asyncio.Event()).wait()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    from phonedrop.main import setup_logging

    setup_logging(args.log_level)

    if args.cmd == "serve":
        from phonedrop.main import run

        run(host=args.host, port=args.port)
        return 0

    gateway = HttpGateway(base_url=args.server, upload_secret=getattr(args, "secret", None))

    try:
        if args.cmd == "push":
            return asyncio.run(_push(gateway, args.paths))
        if args.cmd == "ls":
            return asyncio.run(_ls(gateway, args.json))
        if args.cmd == "rm":
            return asyncio.run(_rm(gateway, args.address, args.yes))
        if args.cmd == "watch":
            return asyncio.run(_watch(gateway, args.interval, not args.no_auto_refresh))
    except KeyboardInterrupt:
        return 130
    except PhoneDropError as e:
        raise SystemExit(f"Error: {e}")

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
