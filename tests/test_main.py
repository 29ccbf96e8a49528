from __future__ import annotations

import json
from pathlib import Path

from taker.config import DEFAULT_CONFIG_TOML
from taker.main import main


class TestMain:
    def test_prints_toml(self, config_dir: Path, capsys):
        path = config_dir / "taker.toml"
        assert main(["--config", str(path)]) == 0
        out = capsys.readouterr().out
        assert out == DEFAULT_CONFIG_TOML
        assert path.exists()

    def test_prints_json(self, config_dir: Path, capsys):
        path = config_dir / "taker.toml"
        path.write_text("[taker_config]\nreconnect_attempts = 7\n")
        assert main(["-c", str(path), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["reconnect_attempts"] == 7
        assert data["refund_locktime"] == 48
        assert len(data) == 10

    def test_io_error_exits_nonzero(self, config_dir: Path, capsys):
        # A directory where the file should be cannot be read.
        path = config_dir / "taker.toml"
        path.mkdir()
        assert main(["--config", str(path)]) == 1
        assert capsys.readouterr().out == ""

    def test_default_resolution(self, isolated_env: Path, capsys):
        assert main([]) == 0
        assert (isolated_env / ".coinswap" / "taker.toml").exists()

    def test_write_defaults_resets_file(self, config_dir: Path, capsys):
        path = config_dir / "taker.toml"
        path.write_text("[taker_config]\nrefund_locktime = 99\n")
        assert main(["--config", str(path), "--write-defaults"]) == 0
        assert path.read_text() == DEFAULT_CONFIG_TOML
        assert capsys.readouterr().out == DEFAULT_CONFIG_TOML
