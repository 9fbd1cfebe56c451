from __future__ import annotations

from datetime import date
from pathlib import Path

import typer

from relkit import __version__
from relkit.core.config import CONFIG_FILENAME, ReleaseConfig, load_config_or_default
from relkit.core.errors import ErrorCode
from relkit.core.result import Err
from relkit.git.repository import Repository
from relkit.output.console import ConsoleProtocol, RichConsole, Style
from relkit.output.errors import print_release_error, release_exit_code
from relkit.output.logfile import TeeConsole, close_release_log, log_path_for, open_release_log
from relkit.release.gh import GhReleaseHost
from relkit.release.notify import BrowserNotifier
from relkit.release.pipeline import Collaborators, run_release
from relkit.release.semver import parse_intent
from relkit.release.vcs import GitVersionControl

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


def build_collaborators(root: Path) -> Collaborators:
    return Collaborators(
        vcs=GitVersionControl(Repository(root)),
        host=GhReleaseHost(root),
        notifier=BrowserNotifier(root),
    )


def _load_config(root: Path, config_path: Path | None) -> ReleaseConfig:
    path = config_path if config_path is not None else root / CONFIG_FILENAME
    result = load_config_or_default(path)
    if isinstance(result, Err):
        typer.echo(f"error: {result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return result.value


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.command()
def release(
    bump: str | None = typer.Argument(
        None,
        help="patch | minor | major | a test version such as 1.2.3-test (default: patch)",
    ),
    root: Path = typer.Option(Path("."), "--root", help="Project root (git working tree)"),
    config_path: Path | None = typer.Option(
        None, "--config", help=f"Config file (default: <root>/{CONFIG_FILENAME})"
    ),
    no_log_file: bool = typer.Option(False, "--no-log-file", help="Do not write the dated log"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Bump the version, sync version files, build archives and publish a release."""
    del version
    try:
        root = root.expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --root: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config = _load_config(root, config_path)

    console: ConsoleProtocol = RichConsole()
    logger = None
    if not no_log_file:
        log_path = log_path_for(Path(config.log_dir).expanduser(), config.log_name, date.today())
        opened = open_release_log(log_path)
        if isinstance(opened, Err):
            console.warning(opened.error)
        else:
            logger = opened.value
            console = TeeConsole(console, logger)
            console.print(f"log: {log_path}", Style.DIM)

    try:
        code = _run(bump=bump, root=root, config=config, console=console)
    finally:
        if logger is not None:
            close_release_log(logger)

    if not ErrorCode(code).is_success:
        raise typer.Exit(code=code)


def _run(
    *, bump: str | None, root: Path, config: ReleaseConfig, console: ConsoleProtocol
) -> int:
    console.header(f"release ({bump or 'patch'})")

    intent = parse_intent(bump, test_marker=config.test_marker)
    if isinstance(intent, Err):
        print_release_error(intent.error, console)
        return release_exit_code(intent.error)

    result = run_release(
        root=root,
        config=config,
        intent=intent.value,
        deps=build_collaborators(root),
        console=console,
    )
    if isinstance(result, Err):
        print_release_error(result.error, console)
        return release_exit_code(result.error)

    for path in result.value.archives:
        console.print(str(path), Style.DIM)
    return int(ErrorCode.OK)


def main() -> None:
    app()
