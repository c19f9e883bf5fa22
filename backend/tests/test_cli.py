"""Tests for the command line subcommands against the real app."""

import asyncio
import json
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport

from phonedrop.cli import _ls, _push, _rm, _watch, build_parser, main
from phonedrop.dashboard.gateway import HttpGateway


@pytest.fixture
def gateway(app):
    return HttpGateway(base_url="http://test", upload_secret="", transport=ASGITransport(app=app))


async def _listed(gateway):
    return [r.address for r in await gateway.list()]


class TestParser:
    def test_watch_flags(self):
        args = build_parser().parse_args(["watch", "--no-auto-refresh", "--interval", "5"])
        assert args.no_auto_refresh is True
        assert args.interval == 5.0

    def test_rm_yes(self):
        args = build_parser().parse_args(["--server", "http://phone", "rm", "http://phone/blobs/a", "--yes"])
        assert args.server == "http://phone"
        assert args.yes is True


class TestPush:
    @pytest.mark.asyncio
    async def test_all_ok(self, gateway, tmp_path, capsys):
        (tmp_path / "notes.md").write_text("# hi")
        assert await _push(gateway, [str(tmp_path / "notes.md")]) == 0
        assert "OK" in capsys.readouterr().out
        assert len(await _listed(gateway)) == 1

    @pytest.mark.asyncio
    async def test_one_failure_returns_1(self, gateway, tmp_path, capsys):
        (tmp_path / "good.txt").write_text("ok")
        code = await _push(gateway, [str(tmp_path / "missing.txt"), str(tmp_path / "good.txt")])

        assert code == 1
        out = capsys.readouterr().out
        assert "FAIL" in out
        assert "good.txt" in out
        # The good path is still uploaded
        assert len(await _listed(gateway)) == 1

    def test_main_exit_code(self, tmp_path):
        assert main(["--server", "http://nowhere", "push", str(tmp_path / "missing.txt")]) == 1


class TestLs:
    @pytest.mark.asyncio
    async def test_json_uses_wire_names(self, gateway, capsys):
        await gateway.upload("a.txt", b"abc")
        capsys.readouterr()

        assert await _ls(gateway, True) == 0
        files = json.loads(capsys.readouterr().out)
        assert len(files) == 1
        assert set(files[0]) == {"url", "pathname", "uploadedAt", "size"}
        assert files[0]["size"] == 3

    @pytest.mark.asyncio
    async def test_plain(self, gateway, capsys):
        await gateway.upload("a.txt", b"abc")
        capsys.readouterr()

        assert await _ls(gateway, False) == 0
        out = capsys.readouterr().out
        assert "a.txt" in out
        assert "3 B" in out


class TestRm:
    @pytest.mark.asyncio
    async def test_yes_skips_prompt(self, gateway, capsys):
        result = await gateway.upload("a.txt", b"x")
        with patch("builtins.input", side_effect=AssertionError("prompted")):
            assert await _rm(gateway, result.url, True) == 0
        assert "OK" in capsys.readouterr().out
        assert await _listed(gateway) == []

    @pytest.mark.asyncio
    async def test_declined_prompt(self, gateway, capsys):
        result = await gateway.upload("a.txt", b"x")
        with patch("builtins.input", return_value="n") as ask:
            assert await _rm(gateway, result.url, False) == 1
        ask.assert_called_once()
        assert "FAILED" in capsys.readouterr().out
        assert await _listed(gateway) == [result.url]

    @pytest.mark.asyncio
    async def test_confirmed_prompt(self, gateway):
        result = await gateway.upload("a.txt", b"x")
        with patch("builtins.input", return_value="y"):
            assert await _rm(gateway, result.url, False) == 0
        assert await _listed(gateway) == []

    @pytest.mark.asyncio
    async def test_still_listed_returns_1(self, gateway, monkeypatch, capsys):
        result = await gateway.upload("a.bin", b"x")
        # Server accepts the delete but the object survives
        monkeypatch.setattr(gateway, "delete", AsyncMock())

        assert await _rm(gateway, result.url, True) == 1
        assert "FAILED" in capsys.readouterr().out


class TestWatch:
    @pytest.mark.asyncio
    async def test_starts_paused(self, gateway, capsys):
        stop = asyncio.Event()
        stop.set()
        assert await _watch(gateway, 60, False, stop=stop) == 0
        assert "auto-refresh off" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_starts_live(self, gateway, capsys):
        stop = asyncio.Event()
        stop.set()
        assert await _watch(gateway, 60, True, stop=stop) == 0
        assert "auto-refresh on" in capsys.readouterr().out
