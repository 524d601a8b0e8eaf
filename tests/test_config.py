"""Tests for TOML config file loading."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from ween.cli import build_parser, load_config, main, resolve_options


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[output]\nformat = "json"\n')
        result = load_config(cfg, tmp_path)
        assert result["output"] == {"format": "json"}

    def test_auto_discover_ween_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "ween.toml"
        cfg.write_text("[lexer]\nallow_illegal = true\n")
        result = load_config(None, tmp_path)
        assert result["lexer"] == {"allow_illegal": True}


class TestConfigMerge:
    def _options(self, tmp_path: Path, config: str | None, *flags: str):
        if config is not None:
            (tmp_path / "ween.toml").write_text(config)
        doc = tmp_path / "doc.wn"
        doc.write_text("")
        ns = build_parser().parse_args([str(doc), *flags])
        return resolve_options(ns)

    def test_defaults(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, None)
        assert opts.format == "text"
        assert opts.allow_illegal is False
        assert opts.warnings is True
        assert opts.output_file is None

    def test_config_format(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, '[output]\nformat = "json"\n')
        assert opts.format == "json"

    def test_cli_overrides_config_format(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, '[output]\nformat = "json"\n', "--format", "text")
        assert opts.format == "text"

    def test_config_lexer_policy(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, "[lexer]\nallow_illegal = true\nwarnings = false\n")
        assert opts.allow_illegal is True
        assert opts.warnings is False

    def test_cli_flags_override_config(self, tmp_path: Path) -> None:
        opts = self._options(
            tmp_path, "[lexer]\nallow_illegal = false\n", "--allow-illegal", "--quiet"
        )
        assert opts.allow_illegal is True
        assert opts.warnings is False

    def test_non_bool_values_ignored(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, '[lexer]\nallow_illegal = "yes"\n')
        assert opts.allow_illegal is False

    def test_invalid_format_in_config(self, tmp_path: Path) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="invalid output format"):
            self._options(tmp_path, '[output]\nformat = "xml"\n')

    def test_malformed_toml(self, tmp_path: Path) -> None:
        with pytest.raises(argparse.ArgumentTypeError, match="invalid config file"):
            self._options(tmp_path, "[output\n")

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text('[output]\nformat = "json"\n')
        opts = self._options(tmp_path, None, "--config", str(cfg))
        assert opts.format == "json"


class TestConfigExitCodes:
    def test_config_error_returns_2(self, tmp_path: Path, capsys) -> None:
        (tmp_path / "ween.toml").write_text('[output]\nformat = "xml"\n')
        doc = tmp_path / "doc.wn"
        doc.write_text("x")
        assert main([str(doc)]) == 2
        assert capsys.readouterr().err.startswith("error: ")

    def test_config_allows_illegal(self, tmp_path: Path) -> None:
        (tmp_path / "ween.toml").write_text("[lexer]\nallow_illegal = true\n")
        doc = tmp_path / "doc.wn"
        doc.write_text("@")
        assert main([str(doc), "-o", str(tmp_path / "out.txt")]) == 0
