# === FILE: site_crawler/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера SiteCrawler через командную строку.

Использование:
  site-crawler [OPTIONS] URL [URL ...]

Опции:
  --depth, -d INT        Максимальная глубина рекурсии (default: 4)
  --config, -c PATH      Путь к YAML/JSON-конфигу
  --resource-dir, -o DIR Папка для скачанных изображений (default: archive/res)
  --verbose, -v          Подробный лог (DEBUG)
  --log-level LEVEL      Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH        Файл для логов
  --log-dir DIR          Папка для лога с отметкой времени в имени
  --json PATH            Сохранить JSON-отчёт со статистикой обхода
  --crawl-timeout SEC    Таймаут всего обхода (секунд)
  --version, -V          Показать версию SiteCrawler

Пример:
  site-crawler https://example.com --depth 2 --json reports/crawl.json
"""
import asyncio
import sys
from pathlib import Path

import click

from site_crawler import __version__
from site_crawler.config import DEFAULT_MAX_DEPTH, load_config
from site_crawler.engine import start_crawl
from site_crawler.errors import InvalidURLError
from site_crawler.logger import configure, timestamped_log_file
from site_crawler.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-V', message='SiteCrawler, version %(version)s')
@click.argument('urls', nargs=-1, required=True, metavar='URL...')
@click.option(
    '--depth', '-d', 'depth',
    type=click.IntRange(min=0),
    default=None,
    help=f'Максимальная глубина рекурсии  [default: {DEFAULT_MAX_DEPTH}]'
)
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--resource-dir', '-o', 'resource_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Папка для скачанных изображений  [default: archive/res]'
)
@click.option('--verbose', '-v', is_flag=True, help='Подробный лог (то же, что --log-level DEBUG)')
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
    help='Путь к файлу логов (только stdout, если не указан)'
)
@click.option(
    '--log-dir', 'log_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Папка для файла логов с отметкой времени в имени'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт со статистикой обхода'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Таймаут всего обхода (секунд)'
)
def cli(urls, depth, config_path, resource_dir, verbose, log_level, log_file, log_dir,
        json_output, crawl_timeout):
    """Рекурсивно обойти страницы, начиная с URL, и скачать найденные изображения."""
    if log_file is None and log_dir is not None:
        log_file = timestamped_log_file(log_dir)
    configure(level='DEBUG' if verbose else log_level, log_file=log_file)

    try:
        cfg = load_config(
            config_path,
            seeds=list(urls),
            max_depth=depth,
            resource_dir=resource_dir,
        )
    except InvalidURLError as e:
        print_error(str(e))
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    try:
        if crawl_timeout:
            stats = asyncio.run(asyncio.wait_for(start_crawl(cfg), timeout=crawl_timeout))
        else:
            stats = asyncio.run(start_crawl(cfg))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {crawl_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    click.echo(
        f'Crawled {stats.pages_crawled} pages, saved {stats.resources_saved} resources, '
        f'{stats.failures} failures'
    )

    if json_output:
        try:
            saved_json = render_json(stats, json_output, seeds=cfg.seed_urls)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')


if __name__ == "__main__":
    cli()
