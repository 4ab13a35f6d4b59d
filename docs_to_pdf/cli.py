# === FILE: docs_to_pdf/cli.py ===
#!/usr/bin/env python3
"""
Точка входа docs_to_pdf через командную строку.

Команды:
  crawl     Обойти документацию и собрать один PDF
  merge     Собрать PDF из каталога ранее сохранённых страниц
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       YAML/JSON-конфиг (опции командной строки важнее)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --url, -u URL           Стартовый URL (обязателен, если нет в конфиге)
  --output, -o FILE       Имя итогового PDF (<domain>-documentation.pdf)
  --depth, -d INT         Максимальная глубина (5)
  --include, -i TEXT      Подстрока, которая должна быть в URL (можно повторять)
  --exclude, -e TEXT      Подстрока, исключающая URL (можно повторять)
  --selector, -s CSS      Селектор основного контента
  --wait, -w MS           Пауза между страницами (1000)
  --no-merge              Только сохранить PDF страниц, без сборки
  --keep-temp             Не удалять PDF страниц после сборки
  --temp-dir DIR          Каталог для PDF страниц
  --manifest PATH         Куда записать JSON-манифест

Дополнительно:
  --version, -v       Показать версию

Пример:
  docs-to-pdf crawl -u https://docs.example.com -i /api/ -i /guides/ -e /blog/ -d 3 -o my-docs.pdf
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from docs_to_pdf import __version__
from docs_to_pdf.config import DEFAULT_SELECTOR, load_config
from docs_to_pdf.engine import merge_directory, start_run
from docs_to_pdf.errors import FatalStartupFailure
from docs_to_pdf.logger import DEFAULT_FORMAT, init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _resolve_config(ctx, **overrides):
    try:
        return load_config(ctx.obj.get('config_path'), **overrides)
    except ValidationError as e:
        print_error(f'Ошибка конфигурации: {e}')
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='docs-to-pdf, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Crawl a documentation site and bind it into one PDF."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option('--url', '-u', 'url', default=None, help='Стартовый URL документации.')
@click.option('--output', '-o', 'output', default=None, help='Имя итогового PDF [default: <domain>-documentation.pdf]')
@click.option('--depth', '-d', 'depth', type=click.IntRange(min=0), default=None, help='Максимальная глубина обхода [default: 5]')
@click.option('--include', '-i', 'include', multiple=True, help='Подстрока, которая должна быть в URL (можно повторять).')
@click.option('--exclude', '-e', 'exclude', multiple=True, help='Подстрока, исключающая URL (можно повторять).')
@click.option('--selector', '-s', 'selector', default=None, help=f'CSS-селектор контента [default: {DEFAULT_SELECTOR}]')
@click.option('--wait', '-w', 'wait', type=click.IntRange(min=0), default=None, help='Пауза между страницами, мс [default: 1000]')
@click.option('--no-merge', 'no_merge', is_flag=True, help='Только сохранить PDF страниц, без сборки.')
@click.option('--keep-temp', 'keep_temp', is_flag=True, help='Не удалять PDF страниц после сборки.')
@click.option(
    '--temp-dir', 'temp_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог для PDF страниц (временный, если не указан).'
)
@click.option(
    '--manifest', 'manifest',
    default=None,
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help='Сохранить JSON-манифест запуска в файл.'
)
@click.pass_context
def crawl(ctx, url, output, depth, include, exclude, selector, wait, no_merge, keep_temp, temp_dir, manifest):
    """Обойти документацию и собрать её в один PDF."""
    cfg = _resolve_config(
        ctx,
        url=url,
        output=output,
        depth=depth,
        include=list(include) or None,
        exclude=list(exclude) or None,
        selector=selector,
        wait=wait,
        merge=False if no_merge else None,
        keep_temp=True if keep_temp else None,
        temp_dir=temp_dir,
        manifest=manifest,
    )
    click.echo(f'Starting crawl: {cfg.url}')
    try:
        summary = asyncio.run(start_run(cfg))
    except FatalStartupFailure as e:
        print_error(f'Фатальная ошибка: {e}')

    click.echo(
        f'Crawl summary: visited {summary.pages_visited} pages, '
        f'PDFs generated {summary.artifacts_produced}, skipped {summary.skipped}'
    )
    if summary.output_path is not None:
        click.echo(
            f'Merged {summary.artifacts_merged}/{summary.artifacts_produced} PDFs '
            f'into {summary.output_path}'
        )
    if summary.artifacts_dir is not None:
        click.echo(f'Individual PDFs are in: {summary.artifacts_dir}')


@cli.command('merge', context_settings=CONTEXT_SETTINGS)
@click.argument('directory', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument('output', default='merged-documentation.pdf', type=click.Path(dir_okay=False, path_type=Path))
def merge(directory, output):
    """Собрать PDF из каталога DIRECTORY (с manifest.json или без)."""
    try:
        document = merge_directory(directory, output)
    except FatalStartupFailure as e:
        print_error(f'Фатальная ошибка: {e}')
    except (ValueError, TypeError, KeyError) as e:
        print_error(f'Ошибка чтения манифеста: {e}')
    if document is None:
        click.echo('No PDFs found to merge!')
        return
    click.echo(f'Merged {document.merged_count} out of {document.artifact_count} PDFs into {output}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.option('--url', '-u', 'url', default=None, help='Стартовый URL документации.')
@click.pass_context
def show_config(ctx, url):
    """Показать итоговую конфигурацию в JSON."""
    cfg = _resolve_config(ctx, url=url)
    click.echo(cfg.model_dump_json(indent=2))


# expose these names at module level for test monkey-patching
cli.start_run = start_run
cli.merge_directory = merge_directory

if __name__ == "__main__":
    cli()
