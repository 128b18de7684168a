"""Tests for argument parsing and validation."""

import argparse

import pytest

from ssllabs_scan import __version__
from ssllabs_scan.cli import create_parser, handle_version_check, parse_bool, validate_args


class TestParser:
    """Tests for create_parser."""

    def setup_method(self):
        self.parser = create_parser()

    def test_defaults(self):
        args = self.parser.parse_args(["--domain", "example.com"])

        assert args.domain == "example.com"
        assert args.publish is False
        assert args.api_url == "https://api.ssllabs.com/api/v2"
        assert args.timeout == 30.0
        assert args.poll_interval == 10.0
        assert args.max_wait == 1800.0
        assert not args.json
        assert not args.debug

    def test_short_domain_flag(self):
        assert self.parser.parse_args(["-d", "example.com"]).domain == "example.com"

    @pytest.mark.parametrize(
        "argv,expected",
        [
            (["--publish"], True),
            (["--publish", "true"], True),
            (["--publish=false"], False),
            (["--publish", "0"], False),
        ],
    )
    def test_publish(self, argv, expected):
        args = self.parser.parse_args(["--domain", "example.com", *argv])
        assert args.publish is expected

    def test_publish_invalid_value(self):
        with pytest.raises(SystemExit) as exc_info:
            self.parser.parse_args(["--domain", "example.com", "--publish", "maybe"])
        assert exc_info.value.code == 2


class TestParseBool:
    """Tests for parse_bool."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "on", " t "])
    def test_true(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "off", "F"])
    def test_false(self, value):
        assert parse_bool(value) is False

    def test_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_bool("perhaps")


class TestValidation:
    """Tests for validate_args and handle_version_check."""

    def setup_method(self):
        self.parser = create_parser()

    def test_missing_domain_prints_help_and_exits_zero(self, capsys):
        args = self.parser.parse_args([])

        with pytest.raises(SystemExit) as exc_info:
            validate_args(args, self.parser)

        assert exc_info.value.code == 0
        assert "usage:" in capsys.readouterr().out

    def test_blank_domain(self):
        args = self.parser.parse_args(["--domain", "  "])

        with pytest.raises(SystemExit) as exc_info:
            validate_args(args, self.parser)

        assert exc_info.value.code == 0

    @pytest.mark.parametrize(
        "argv,message",
        [
            (["--json-pretty"], "--json-pretty requires --json"),
            (["--timeout", "0"], "--timeout must be > 0"),
            (["--poll-interval", "-1"], "--poll-interval must be > 0"),
            (["--max-wait", "-5"], "--max-wait must be >= 0"),
        ],
    )
    def test_invalid_values(self, capsys, argv, message):
        args = self.parser.parse_args(["--domain", "example.com", *argv])

        with pytest.raises(SystemExit) as exc_info:
            validate_args(args, self.parser)

        assert exc_info.value.code == 2
        assert message in capsys.readouterr().err

    def test_valid_args(self):
        args = self.parser.parse_args(
            ["--domain", "example.com", "--json", "--json-pretty", "--max-wait", "0"]
        )
        validate_args(args, self.parser)

    def test_version(self, capsys):
        args = self.parser.parse_args(["--version"])

        with pytest.raises(SystemExit) as exc_info:
            handle_version_check(args)

        assert exc_info.value.code == 0
        assert f"ssllabs-scan version {__version__}" in capsys.readouterr().out

    def test_no_version(self):
        args = self.parser.parse_args(["--domain", "example.com"])
        assert handle_version_check(args) is False
