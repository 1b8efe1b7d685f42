import asyncio
import logging
import os
import signal
import sys
from importlib import metadata
from pathlib import Path
from typing import Any

import click
from aiohttp import web
from dynaconf.validator import ValidationError  # type: ignore[reportMissingTypeStubs]

from autocomplete.api import build_app
from autocomplete.config import SETTINGS_FILES, load_settings
from autocomplete.core import TokenIssuer
from autocomplete.logger import with_logging
from autocomplete.typedefs import Settings
from autocomplete.utils.helper import platformdir

log = logging.getLogger(__name__)


def run_server(settings: Settings) -> None:
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    runner = web.AppRunner(build_app(settings), access_log=None, handle_signals=False)

    async def entrypoint() -> None:
        await runner.setup()
        site = web.TCPSite(runner, settings.host, settings.port)
        await site.start()
        log.info("Serving on http://%s:%s", settings.host, settings.port)
        await asyncio.Event().wait()

    try:
        loop.add_signal_handler(signal.SIGINT, lambda: loop.stop())
        loop.add_signal_handler(signal.SIGTERM, lambda: loop.stop())
    except NotImplementedError:
        pass

    def stop_when_done(fut: asyncio.Future[None]) -> None:
        loop.stop()

    fut = asyncio.ensure_future(entrypoint(), loop=loop)
    try:
        fut.add_done_callback(stop_when_done)
        loop.run_forever()
    except KeyboardInterrupt:
        log.info("Shutdown via keyboard interrupt")
    finally:
        log.info("Shutting down")
        fut.remove_done_callback(stop_when_done)
        fut.cancel()
        loop.run_until_complete(runner.cleanup())

        if tasks := {t for t in asyncio.all_tasks(loop) if not t.done()}:
            loop.run_until_complete(_finish_tasks(tasks))
        loop.run_until_complete(loop.shutdown_asyncgens())
        loop.run_until_complete(loop.shutdown_default_executor())

        asyncio.set_event_loop(None)
        loop.close()

        if fut.done() and not fut.cancelled() and (exc := fut.exception()) is not None:
            raise exc


async def _finish_tasks(tasks: set[asyncio.Task[Any]], grace: float = 0.1) -> None:
    """Give leftover tasks ``grace`` seconds to finish, then cancel them and report any that linger."""
    _done, pending = await asyncio.wait(tasks, timeout=grace)
    if not pending:
        log.debug("Clean shutdown accomplished.")
        return

    for task in pending:
        task.cancel()

    _done, pending = await asyncio.wait(pending, timeout=grace)
    for task in pending:
        log.warning("Task %s wrapping coro %r did not exit properly", task.get_name(), task.get_coro())


def _load_settings_or_exit() -> Settings:
    try:
        return load_settings()
    except ValidationError as exc:
        log.critical("Invalid configuration: %s", exc)
        click.echo(click.style(f"Invalid configuration: {exc}", fg="red", bold=True), err=True)
        sys.exit(1)


@click.group(invoke_without_command=True, options_metavar="[options]")
@click.version_option(
    metadata.version("autocomplete"),
    "-v",
    "--version",
    package_name="autocomplete",
    prog_name="autocomplete",
    message=click.style("%(prog)s", fg="yellow") + click.style(" %(version)s", fg="bright_cyan"),
)
@click.option("--debug", "-d", is_flag=True, help="Set log level to debug")
@click.option("--host", default=None, help="Interface to bind, superseding configuration")
@click.option("--port", "-p", type=int, default=None, help="Port to bind, superseding configuration")
@click.pass_context
def main(ctx: click.Context, debug: bool, host: str | None, port: int | None) -> None:
    """Serve the autocomplete API"""
    os.umask(0o077)
    if ctx.invoked_subcommand is None:
        log_level = logging.DEBUG if debug else logging.INFO
        with with_logging(log_level):
            if debug:
                log.debug("****** Running in DEBUG mode ******")

            settings = _load_settings_or_exit()
            if host is not None:
                settings = settings._replace(host=host)
            if port is not None:
                settings = settings._replace(port=port)
            run_server(settings)


@main.command(name="help")
@click.pass_context
def autocomplete_help(ctx: click.Context) -> None:
    """Show this message and exit."""
    if ctx.parent is not None:
        click.echo(ctx.parent.get_help())


@main.command()
@click.argument("username")
def token(username: str) -> None:
    """Print a bearer token for USERNAME signed with the configured secret"""
    settings = _load_settings_or_exit()
    if username not in settings.users:
        text = f"\N{WARNING SIGN} WARNING: {username!r} is not a configured user."
        click.echo(click.style(text, bold=True, fg="yellow"), err=True)
    issuer = TokenIssuer(settings.secret_key, settings.users, lifetime=settings.token_lifetime)
    click.echo(issuer.issue(username))


@main.command(name="config")
def config_path() -> None:
    """Get the path to the log directory and the settings files looked up"""
    click.echo(platformdir.user_log_path)
    for name in SETTINGS_FILES:
        click.echo(Path.cwd() / name)


if __name__ == "__main__":
    main()
