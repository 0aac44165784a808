# === FILE: uptimed/cli.py ===
#!/usr/bin/env python3
"""
Точка входа uptimed для командной строки.

Команды:
  run       Запустить мониторинг: периодические сканы до SIGINT/SIGTERM
  scan      Выполнить один проход по списку целей и выйти
  config    Показать текущую конфигурацию (YAML)

Общие опции:
  --config PATH       Путь к YAML-конфигу (default: <app dir>/uptimed/config.yml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Опции run/scan:
  --alert KIND        Куда отправлять оповещения: desktop или log

Дополнительно:
  --version, -v       Показать версию uptimed

Пример:
  uptimed -c ~/.config/uptimed/config.yml run --alert log
"""
import asyncio
import sys
from pathlib import Path

import click
import yaml

from uptimed import __version__
from uptimed.alerts import SINKS, build_sink
from uptimed.config import EXAMPLE_CONFIG, load_config
from uptimed.duration import format_duration
from uptimed.engine import scan_once, start_monitor
from uptimed.errors import AlertSinkError, TargetSourceError
from uptimed.logger import DEFAULT_FORMAT, init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])
APP_NAME = "uptimed"


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def default_config_path() -> Path:
    """Путь к конфигу по умолчанию в каталоге настроек пользователя."""
    return Path(click.get_app_dir(APP_NAME)) / "config.yml"


def first_run_notice(path: Path) -> str:
    return (
        "A configuration file is needed for uptimed to work.\n\n"
        f"Configuration can be specified with the -c flag or created in the default path {path}\n\n"
        "Here's an example configuration:\n"
        "-----------------------------------------------------------\n"
        f"{EXAMPLE_CONFIG}"
    )


alert_option = click.option(
    '--alert', '-a', 'alert_kind',
    default='desktop',
    show_default=True,
    type=click.Choice(sorted(SINKS)),
    help='Куда отправлять оповещения о недоступных целях'
)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='uptimed, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML.'
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
    """uptimed: периодическая проверка доступности URL с оповещениями."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )

    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


def load_context_config(ctx):
    """Найти и загрузить конфиг; вызывается подкомандами, уже после разбора их опций."""
    config_path = ctx.obj['config_path']
    if config_path is None:
        config_path = default_config_path()
        if not config_path.exists():
            try:
                config_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                print_error(f'Could not create config directory: {e}')
            click.echo(first_run_notice(config_path))
            ctx.exit(0)
    elif not config_path.exists():
        print_error(f'Configuration file does not exist: {config_path}')

    try:
        return load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Failed to load configuration {config_path}: {e}')


@cli.command('run', context_settings=CONTEXT_SETTINGS)
@alert_option
@click.pass_context
def run(ctx, alert_kind):
    """Мониторинг до получения SIGINT/SIGTERM."""
    cfg = load_context_config(ctx)
    click.echo(
        f'Monitoring targets from {cfg.targets_path} '
        f'(scan every {format_duration(cfg.scan_interval)}, '
        f'{format_duration(cfg.request_interval)} between requests)'
    )
    try:
        asyncio.run(start_monitor(cfg, build_sink(alert_kind)))
    except TargetSourceError as e:
        print_error(f'An error occurred: {e}')


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@alert_option
@click.pass_context
def scan(ctx, alert_kind):
    """Один проход по списку целей."""
    cfg = load_context_config(ctx)
    try:
        summary = asyncio.run(scan_once(cfg, build_sink(alert_kind)))
    except TargetSourceError as e:
        print_error(f'An error occurred: {e}')
    except AlertSinkError as e:
        print_error(f'Scan aborted, alert could not be delivered: {e}')

    click.echo(f'{summary.probed} targets probed, {summary.failed} down ({summary.duration:.2f} s)')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в YAML."""
    cfg = load_context_config(ctx)
    click.echo(yaml.safe_dump(cfg.model_dump(mode='json'), sort_keys=False, allow_unicode=True), nl=False)


if __name__ == "__main__":
    cli()
