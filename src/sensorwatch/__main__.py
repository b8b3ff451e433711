"""CLI entry point for sensorwatch."""

from __future__ import annotations

import asyncio
import logging
import sys
from logging.handlers import SysLogHandler
from pathlib import Path

import click

from . import __version__
from .exceptions import ConfigError, NoSensorsError, NoWatchesError

# Exit codes for fatal startup errors
EXIT_NO_SENSORS = 3
EXIT_NO_WATCHES = 4
EXIT_NO_MEMORY = 5
EXIT_CONFIG = 6

logger = logging.getLogger("sensorwatch")


def _configure_logging(debug: bool, use_syslog: bool) -> None:
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    level = logging.DEBUG if debug else logging.INFO

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(log_format, datefmt=date_format))
    handlers: list[logging.Handler] = [console]

    if use_syslog:
        try:
            syslog = SysLogHandler(
                address="/dev/log", facility=SysLogHandler.LOG_DAEMON
            )
            syslog.setFormatter(logging.Formatter("sensorwatch: %(message)s"))
            handlers.append(syslog)
        except OSError as e:
            click.echo(f"Warning: syslog unavailable ({e})", err=True)

    logging.basicConfig(level=level, handlers=handlers, force=True)


def _fail(message: str, code: int) -> None:
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(code)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="sensorwatch")
@click.option("--config", "config_path", default=None, help="Config file path")
@click.option("-d", "--debug", is_flag=True, help="Verbose logging")
@click.option("--syslog", "use_syslog", is_flag=True, help="Also log to syslog")
@click.pass_context
def main(
    ctx: click.Context, config_path: str | None, debug: bool, use_syslog: bool
) -> None:
    """sensorwatch — watch hardware sensors against configured limits."""
    if ctx.invoked_subcommand is not None:
        return

    from .config import DEFAULT_CONFIG_PATH, load_config
    from .daemon import WatchDaemon
    from .sensors.factory import create_source

    _configure_logging(debug, use_syslog)
    config_path = config_path or DEFAULT_CONFIG_PATH

    try:
        config = load_config(config_path)
        daemon = WatchDaemon(config, create_source(config.source), config_path)
        daemon.start()
    except NoSensorsError as e:
        _fail(str(e), EXIT_NO_SENSORS)
    except NoWatchesError as e:
        _fail(str(e), EXIT_NO_WATCHES)
    except ConfigError as e:
        _fail(f"error in config file: {e}", EXIT_CONFIG)
    except MemoryError:
        _fail("out of memory", EXIT_NO_MEMORY)

    try:
        asyncio.run(daemon.run())
    except MemoryError:
        _fail("out of memory", EXIT_NO_MEMORY)


@main.command()
@click.option("--config", "config_path", default=None, help="Config file path")
def sensors(config_path: str | None) -> None:
    """List discovered sensors with their config key and current value."""
    from .config import DEFAULT_CONFIG_PATH, SensorWatchConfig, load_config
    from .exceptions import SensorError
    from .sensors.factory import create_source
    from .watch.formatting import format_value

    path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
    if path.exists():
        try:
            config = load_config(path)
        except ConfigError as e:
            _fail(str(e), EXIT_CONFIG)
    else:
        config = SensorWatchConfig()

    source = create_source(config.source)
    found = source.list_sensors()
    if not found:
        click.echo("No sensors detected.")
        return

    click.echo(f"Found {len(found)} sensor(s):")
    for identity in found:
        try:
            sample = source.sample(identity)
            value = format_value(identity.type, sample.value)
            status = sample.status.value
        except SensorError as e:
            value, status = "unreadable", str(e)
        key = identity.key(config.namespace)
        watched = " (watched)" if config.lookup(key) is not None else ""
        click.echo(f"  {key}: {value} [{status}]{watched}")


@main.command("check-config")
@click.option("--config", "config_path", default=None, help="Config file path")
def check_config(config_path: str | None) -> None:
    """Validate the config file against the sensors on this machine."""
    from .config import DEFAULT_CONFIG_PATH, load_config
    from .sensors.factory import create_source
    from .watch.loader import build_watch_configs, count_enabled

    config_path = config_path or DEFAULT_CONFIG_PATH
    try:
        config = load_config(config_path)
        found = create_source(config.source).list_sensors()
        configs = build_watch_configs(found, config.lookup, config.namespace)
    except ConfigError as e:
        _fail(str(e), EXIT_CONFIG)

    if not found:
        _fail("no sensors found", EXIT_NO_SENSORS)

    keys = {identity.key(config.namespace) for identity in found}
    for key in sorted(set(config.watches) - keys):
        click.echo(f"Warning: {key} matches no sensor", err=True)

    watch_count = count_enabled(configs)
    click.echo(f"{config_path}: {watch_count} watches for {len(found)} sensors")
    if watch_count == 0:
        _fail("no watches defined", EXIT_NO_WATCHES)


if __name__ == "__main__":
    main()
