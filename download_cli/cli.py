from __future__ import annotations

from typing import Optional, Sequence

import typer
from dotenv import find_dotenv, load_dotenv

from download_cli.config import DEFAULT_MAX_REDIRECTS, PROG_NAME, VERSION, DownloadConfig, resolve_config
from download_cli.errors import DownloadError, UsageError
from download_cli.runner import run_sync

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

# Recent typer releases bundle their own click; parser errors derive from its UsageError.
ParserUsageError = next(cls for cls in typer.BadParameter.__mro__ if cls.__name__ == "UsageError")

app = typer.Typer(add_completion=False, help="remote file downloader command-line interface")


def _load_env() -> None:
    load_dotenv(find_dotenv(usecwd=True))


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROG_NAME} {VERSION}")
        raise typer.Exit()


@app.command(context_settings=CONTEXT_SETTINGS)
def download(
    ctx: typer.Context,
    url: str = typer.Argument(..., metavar="<url>", help="absolute http(s) URL to fetch"),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        metavar="<OUTPUT>",
        help="output filename ('-' writes to stdout)",
    ),
    remote_name: bool = typer.Option(
        False,
        "--remote-name",
        "-O",
        help="output to a file using the same name as the remote",
    ),
    user_agent: Optional[str] = typer.Option(
        None,
        "--user-agent",
        "-U",
        "-A",
        metavar="<user-agent>",
        help="use value as user-agent header",
    ),
    max_redirects: int = typer.Option(
        DEFAULT_MAX_REDIRECTS,
        "--max-redirects",
        min=0,
        help="maximum number of redirects to follow",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="print response status and headers"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="no progress bar and no digest report"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="print version information",
    ),
) -> None:
    _load_env()

    try:
        config = resolve_config(
            url,
            output=output,
            remote_name=remote_name,
            user_agent=user_agent,
            max_redirects=max_redirects,
            verbose=verbose,
            quiet=quiet,
        )
    except DownloadError as exc:
        typer.echo(f"{PROG_NAME}: {exc}", err=True)
        if isinstance(exc, UsageError):
            typer.echo(ctx.get_usage(), err=True)
        raise typer.Exit(code=exc.exit_code)

    raise typer.Exit(code=run_sync(config))


def parse_args(args: Sequence[str]) -> DownloadConfig:
    """Parse command-line arguments (program name excluded) without downloading.

    Raises UsageError for a malformed invocation and UrlError for a bad URL.
    -h/--help and -V/--version print to stdout and raise typer.Exit(0).
    """
    _load_env()

    command = typer.main.get_command(app)
    try:
        ctx = command.make_context(PROG_NAME, list(args))
    except ParserUsageError as exc:
        raise UsageError(exc.format_message()) from exc

    params = ctx.params
    return resolve_config(
        params["url"],
        output=params.get("output"),
        remote_name=bool(params.get("remote_name")),
        user_agent=params.get("user_agent"),
        max_redirects=params.get("max_redirects", DEFAULT_MAX_REDIRECTS),
        verbose=bool(params.get("verbose")),
        quiet=bool(params.get("quiet")),
    )


def main() -> None:
    app(prog_name=PROG_NAME)


if __name__ == "__main__":
    main()
