"""Tests for the server entry point."""

from unittest.mock import patch

from hexreach import main as entry


class TestMain:
    def test_cli_overrides_config(self, tmp_path):
        cfg = tmp_path / "engine.yaml"
        cfg.write_text("host: 0.0.0.0\nrest_port: 9000\nmax_distance: 2\n")
        with patch.object(entry.uvicorn, "run") as run:
            entry.main(["--config", str(cfg), "--port", "9100"])
        run.assert_called_once()
        _, kwargs = run.call_args
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 9100

    def test_missing_config_uses_defaults(self, tmp_path):
        with patch.object(entry.uvicorn, "run") as run:
            entry.main(["--config", str(tmp_path / "missing.yaml")])
        _, kwargs = run.call_args
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8080
