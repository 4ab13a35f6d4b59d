# File: tests/test_cli.py
"""Тесты для CLI (`docs_to_pdf.cli`) с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `merge`, `config`, `--version`, а также обработку ошибок.
"""
import json
from pathlib import Path

import pytest
from click.testing import CliRunner

import docs_to_pdf.cli as cli_module
from docs_to_pdf.cli import cli
from docs_to_pdf.crawler.crawler import CrawlSummary
from docs_to_pdf.engine import RunSummary
from docs_to_pdf.errors import FatalStartupFailure
from docs_to_pdf.logger import init_logging

from tests.conftest import make_pdf


@pytest.fixture(autouse=True)
def restore_logging():
    """CLI привязывает логгер к stdout CliRunner; после теста возвращаем обычный вывод."""
    yield
    init_logging()


@pytest.fixture()
def captured_configs(monkeypatch):
    """Патчим start_run: запоминаем конфиг и возвращаем фиктивный итог без обхода."""
    seen = []

    async def fake_run(cfg):
        seen.append(cfg)
        crawl = CrawlSummary(
            seed_url=str(cfg.url),
            visited=[str(cfg.url), "https://docs.example.com/a", "https://docs.example.com/b"],
            failed_urls=["https://docs.example.com/b"],
        )
        return RunSummary(crawl=crawl, output_path=Path(cfg.output))

    monkeypatch.setattr(cli_module, "start_run", fake_run)
    return seen


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "docs-to-pdf" in result.output


def test_crawl_passes_options(captured_configs):
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "crawl", "-u", "https://docs.example.com",
            "-d", "3", "-i", "/api/", "-i", "/guides/", "-e", "/blog/",
            "-s", "article", "-w", "0", "-o", "my-docs.pdf",
        ],
    )
    assert result.exit_code == 0, result.output
    cfg = captured_configs[0]
    assert cfg.depth == 3
    assert cfg.include == ["/api/", "/guides/"]
    assert cfg.exclude == ["/blog/"]
    assert cfg.selector == "article"
    assert cfg.wait == 0
    assert cfg.output == "my-docs.pdf"
    assert "visited 3 pages" in result.output
    assert "skipped 1" in result.output


def test_crawl_defaults(captured_configs):
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl", "--url", "https://docs.python.org/3/"])
    assert result.exit_code == 0, result.output
    cfg = captured_configs[0]
    assert cfg.depth == 5
    assert cfg.wait == 1000
    assert cfg.output == "docs-documentation.pdf"
    assert cfg.merge is True


def test_crawl_no_merge_flag(captured_configs):
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl", "-u", "https://docs.example.com", "--no-merge", "--keep-temp"])
    assert result.exit_code == 0, result.output
    assert captured_configs[0].merge is False
    assert captured_configs[0].keep_temp is True


def test_crawl_requires_url(captured_configs):
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl"])
    assert result.exit_code == 1
    assert captured_configs == []


def test_crawl_uses_config_file(tmp_path, captured_configs):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("url: https://docs.example.com\ndepth: 2\nexclude: [/blog/]\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl", "-d", "1"])
    assert result.exit_code == 0, result.output
    assert captured_configs[0].depth == 1
    assert captured_configs[0].exclude == ["/blog/"]


def test_crawl_fatal_failure_exit_code(monkeypatch):
    async def failing_run(cfg):
        raise FatalStartupFailure("cannot launch browser: executable missing")

    monkeypatch.setattr(cli_module, "start_run", failing_run)
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl", "-u", "https://docs.example.com"])
    assert result.exit_code == 1


def test_show_config():
    runner = CliRunner()
    result = runner.invoke(cli, ["config", "--url", "https://docs.example.com"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["url"] == "https://docs.example.com/"
    assert data["output"] == "docs-documentation.pdf"


def test_merge_command(tmp_path):
    pages = tmp_path / "pages"
    pages.mkdir()
    (pages / "docs_example_com.pdf").write_bytes(make_pdf())
    output = tmp_path / "book.pdf"
    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "ERROR", "merge", str(pages), str(output)])
    assert result.exit_code == 0, result.output
    assert "Merged 1 out of 1 PDFs" in result.output
    assert output.exists()


def test_merge_command_empty_directory(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "ERROR", "merge", str(tmp_path), str(tmp_path / "out.pdf")])
    assert result.exit_code == 0
    assert "No PDFs found to merge!" in result.output
