#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the wp2md command line."""

import io
import logging

import pytest
from utils import make_item, write_wxr

from wp2md.cli import EXIT_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR, create_parser, main
from wp2md.logging_utils import HTTP_CLIENT_LOGGERS


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    client_levels = {name: logging.getLogger(name).level for name in HTTP_CLIENT_LOGGERS}
    yield
    for name, client_level in client_levels.items():
        logging.getLogger(name).setLevel(client_level)
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
@pytest.mark.cli
class TestParser:
    """Argument parsing and environment defaults."""

    def test_export_defaults(self):
        args = create_parser().parse_args(["export", "blog.xml"])
        assert args.command == "export"
        assert args.input == ["blog.xml"]
        assert args.output_dir == "."
        assert args.image_in_blockquote == "fail"
        assert args.asset_dir is None
        assert args.status is None

    def test_env_defaults(self, monkeypatch):
        monkeypatch.setenv("WP2MD_ASSET_DIR", "assets")
        monkeypatch.setenv("WP2MD_SKIP_DOWNLOAD", "yes")
        monkeypatch.setenv("WP2MD_TIMEOUT", "5")
        monkeypatch.setenv("WP2MD_STATUS", "publish, private")
        args = create_parser().parse_args(["export", "blog.xml"])
        assert args.asset_dir == "assets"
        assert args.skip_download is True
        assert args.timeout == 5.0
        assert args.status == ["publish", "private"]

    def test_cli_overrides_env(self, monkeypatch):
        monkeypatch.setenv("WP2MD_IMAGE_IN_BLOCKQUOTE", "warn")
        args = create_parser().parse_args(["convert", "--image-in-blockquote", "fail"])
        assert args.image_in_blockquote == "fail"

    def test_invalid_env_choice_ignored(self, monkeypatch):
        monkeypatch.setenv("WP2MD_HTML_PARSER", "regex")
        assert create_parser().parse_args(["convert"]).html_parser == "html.parser"

    def test_command_required(self):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args([])
        assert exc_info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("wp2md ")


@pytest.mark.unit
@pytest.mark.cli
class TestExportCommand:
    """The export subcommand."""

    def test_success(self, temp_dir, capsys):
        source = write_wxr(temp_dir, make_item())
        out = temp_dir / "out"
        assert main(["export", str(source), "--output-dir", str(out), "--no-html"]) == EXIT_SUCCESS
        assert (out / "2017-11-25-hello-world.md").exists()
        assert not (out / "2017-11-25-hello-world.html").exists()
        assert "Written:" in capsys.readouterr().err

    def test_record_failure_exit_code(self, sample_wxr, temp_dir, capsys):
        assert main(["export", str(sample_wxr), "-o", str(temp_dir / "out")]) == EXIT_ERROR
        err = capsys.readouterr().err
        assert "broken" in err
        assert "Unknown category domain" in err

    def test_status_and_type_filters(self, sample_wxr, temp_dir):
        out = temp_dir / "out"
        main(["export", str(sample_wxr), "-o", str(out), "--status", "draft", "--post-type", "post"])
        assert [path.name for path in out.glob("*.md")] == ["2017-11-25-draft.md"]

    def test_missing_input(self, temp_dir, capsys):
        assert main(["export", str(temp_dir / "missing.xml")]) == EXIT_VALIDATION_ERROR
        assert "Input file not found" in capsys.readouterr().err

    def test_skip_download_asset_names(self, temp_dir):
        source = write_wxr(temp_dir, make_item(content='<img src="http://host/a.png">'))
        out = temp_dir / "out"
        code = main(["export", str(source), "-o", str(out), "--asset-dir", str(temp_dir / "assets"), "--skip-download"])
        assert code == EXIT_SUCCESS
        assert "{{site.assets_url}}2017-11-25-a.png" in (out / "2017-11-25-hello-world.md").read_text(encoding="utf-8")
        assert not (temp_dir / "assets").exists()


@pytest.mark.unit
@pytest.mark.cli
class TestConvertCommand:
    """The convert subcommand."""

    def test_stdin_to_stdout(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("<p><b>hi</b></p>"))
        assert main(["convert"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "\r\n**hi**\r\n\r\n"

    def test_file_to_file(self, temp_dir):
        source = temp_dir / "post.html"
        source.write_text('<img src="http://host/a.png">', encoding="utf-8")
        target = temp_dir / "post.md"
        args = ["convert", str(source), "--out", str(target), "--asset-dir", "assets", "--skip-download"]
        assert main(args + ["--cache-prefix", "x_"]) == EXIT_SUCCESS
        assert target.read_bytes() == b"![]({{site.assets_url}}x_a.png)"

    def test_image_in_blockquote_fails(self, temp_dir, capsys):
        source = temp_dir / "post.html"
        source.write_text('<blockquote><img src="x.png"></blockquote>', encoding="utf-8")
        assert main(["convert", str(source)]) == EXIT_ERROR
        assert "Need to resolve it manually" in capsys.readouterr().err

    def test_image_in_blockquote_warn_from_env(self, temp_dir, monkeypatch, capsys):
        monkeypatch.setenv("WP2MD_IMAGE_IN_BLOCKQUOTE", "warn")
        source = temp_dir / "post.html"
        source.write_text('<blockquote>q<img src="x.png"></blockquote>', encoding="utf-8")
        assert main(["convert", str(source)]) == EXIT_SUCCESS
        captured = capsys.readouterr()
        assert captured.out == "\r\n```\r\nq\r\n```\r\n"
        assert "in BlockQuote" in captured.err

    def test_unreadable_input(self, temp_dir, capsys):
        assert main(["convert", str(temp_dir / "missing.html")]) == EXIT_VALIDATION_ERROR
        assert "Could not read" in capsys.readouterr().err
