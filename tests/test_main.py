#!/usr/bin/env python
"""Command line watcher - integration tests"""

import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

import main
from feedwatch.S1_aggregate import rss


def _rss(*keys) -> str:
    body = "".join(
        f"<item><title>Headline {k}</title><link>http://example.com/{k}</link></item>"
        for k in keys
    )
    return f'<rss version="2.0"><channel><title>T</title>{body}</channel></rss>'


class TestBuildConfig:
    """Config file plus command line"""

    def test_command_line_only(self):
        """Flags alone make a config"""
        args = main.parse_args(["--name", "perl", "--url", "http://x.org/rss", "--delay", "900"])
        config = main.build_config(args)
        assert config.name == "perl"
        assert config.delay == 900
        assert config.headline_as_id is False

    def test_flags_override_file(self):
        """Command line wins over the YAML file"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "feed.yaml"
            path.write_text("name: perl\nurl: http://x.org/rss\ndelay: 300\n", encoding="utf-8")
            args = main.parse_args(["--config", str(path), "--delay", "1800", "--headline-as-id"])
            config = main.build_config(args)
        assert config.url == "http://x.org/rss"
        assert config.delay == 1800
        assert config.headline_as_id is True


class TestRun:
    """Running the watcher"""

    def test_requires_url(self):
        """No url exits"""
        with pytest.raises(SystemExit):
            main.run(main.parse_args(["--name", "perl", "--once"]))

    def test_once_across_restarts(self, capsys):
        """Second run only prints what the first run had not seen"""
        with tempfile.TemporaryDirectory() as tmpdir, \
                patch.object(main, "setup_logging", return_value=Path(tmpdir) / "x.log"):
            argv = ["--name", "perl", "--url", "http://x.org/rss", "--cache-dir", tmpdir, "--once"]

            with patch.object(rss, "fetch", return_value=_rss("a", "b")):
                feed = main.run(main.parse_args(argv))
            assert feed.num_headlines == 2
            assert "Headline a" not in capsys.readouterr().out

            with patch.object(rss, "fetch", return_value=_rss("c", "a", "b")):
                main.run(main.parse_args(argv))
            out = capsys.readouterr().out
        assert "Restored 2 cached headlines" in out
        assert "+ Headline c" in out
        assert "Headline a" not in out

    def test_loop_sleeps_until_interrupted(self, capsys):
        """The loop sleeps for the delay and stops on Ctrl-C"""
        sleep = MagicMock(side_effect=[None, KeyboardInterrupt])
        with tempfile.TemporaryDirectory() as tmpdir, \
                patch.object(main, "setup_logging", return_value=Path(tmpdir) / "x.log"), \
                patch.object(rss, "fetch", side_effect=[_rss("a"), _rss("b", "a")]):
            argv = ["--name", "perl", "--url", "http://x.org/rss", "--delay", "300"]
            main.run(main.parse_args(argv), sleep=sleep)

        sleep.assert_called_with(300)
        out = capsys.readouterr().out
        assert "+ Headline b" in out
        assert "Stopped." in out
