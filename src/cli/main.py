"""Main CLI entry point for the ShopSmart development environment setup."""

from pathlib import Path

import click
from pydantic import ValidationError

from src.cli.utils.branding import SetupBranding
from src.core.config import FreshnessStrategy, load_settings
from src.core.lib_logger import setup_logging
from src.lib.exceptions import InvalidArgumentError, SetupError
from src.logic.setup.core.orchestrator import SetupOrchestrator
from src.models.run_config import RunConfig
from src.version import __version__

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _format_error(error: ValueError) -> str:
    """Flatten a pydantic error into one line."""
    if not isinstance(error, ValidationError):
        return str(error)
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        parts.append(f"{location}: {item.get('msg')}" if location else item.get("msg", ""))
    return "; ".join(parts)


def _fail(ctx: click.Context, branding: SetupBranding, error: SetupError) -> None:
    """Report an error raised before the orchestrator runs and exit."""
    click.echo(f"[ERROR] {error.message}", err=True)
    branding.print_failure(error.exit_code)
    ctx.exit(error.exit_code)


class SetupCommand(click.Command):
    """Command that reports usage errors as general setup failures.

    Exit code 2 is reserved for a missing directory, so unknown options and
    extra arguments exit 1 with the failure banner instead.
    """

    def parse_args(self, ctx: click.Context, args: list) -> list:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            _fail(ctx, SetupBranding(), InvalidArgumentError(f"Invalid arguments: {e.format_message()}"))


@click.command(cls=SetupCommand, context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", help="Show version and exit")
@click.argument("environment", required=False, metavar="[ENV]")
@click.argument("server_port", required=False, metavar="[SERVER_PORT]")
@click.argument("client_port", required=False, metavar="[CLIENT_PORT]")
@click.option("--root", "root", type=click.Path(file_okay=False, path_type=Path),
              help="Project root containing server/ and client/ (default: current directory)")
@click.option("--config-file", type=click.Path(dir_okay=False, path_type=Path),
              help="YAML settings file (default: shopsmart-setup.yaml in the project root)")
@click.option("--freshness", type=click.Choice([s.value for s in FreshnessStrategy]),
              help="How to decide whether installed dependencies are current")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.option("--verbose", "-v", is_flag=True, help="Show a summary of every step")
@click.pass_context
def main(ctx: click.Context, environment: str | None, server_port: str | None,
         client_port: str | None, root: Path | None, config_file: Path | None,
         freshness: str | None, debug: bool, verbose: bool):
    """Set up the ShopSmart development environment.

    Checks that Node.js and npm are installed, writes server/.env and
    client/.env when they do not exist yet, installs server and client
    dependencies when they are stale, and verifies the result. Safe to
    re-run: completed work is skipped.

    \b
    ARGUMENTS:
      ENV           Environment: development, staging, production (default: development)
      SERVER_PORT   Backend server port (default: 5001)
      CLIENT_PORT   Frontend dev server port (default: 5173)

    \b
    EXAMPLES:
      shopsmart-setup                        # Development on default ports
      shopsmart-setup staging 5002 3000      # Custom env and ports
      shopsmart-setup production             # Production on default ports

    \b
    EXIT CODES:
      0  Success
      1  General error / prerequisites missing
      2  Directory not found
      3  Dependency installation failed
    """
    branding = SetupBranding()

    try:
        settings = load_settings(
            config_file=config_file,
            project_root=root,
            debug=debug or None,
            freshness_strategy=freshness
        )
    except ValueError as e:
        _fail(ctx, branding, InvalidArgumentError(f"Invalid settings: {_format_error(e)}"))

    try:
        manager = setup_logging(settings)
    except OSError as e:
        _fail(ctx, branding, InvalidArgumentError(
            f"Invalid settings: cannot open log file {settings.log_file}: {e.strerror or e}"
        ))

    logger = manager.get_component_logger("cli")
    logger.debug(f"Project root: {settings.resolve_project_root()}")

    try:
        run_config = RunConfig.from_args(environment, server_port, client_port)
    except ValidationError as e:
        _fail(ctx, branding, InvalidArgumentError(f"Invalid arguments: {_format_error(e)}"))

    orchestrator = SetupOrchestrator(settings, branding=branding)
    report = orchestrator.run(run_config)

    if verbose:
        branding.print_step_summary(report)

    ctx.exit(report.exit_code)


# CLI alias
cli = main

if __name__ == "__main__":
    main()
