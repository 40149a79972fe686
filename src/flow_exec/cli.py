"""Click entry point — all commands."""

import sys

import click
import yaml

from flow_exec import __version__, config, log, process

EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127


@click.group()
@click.version_option(version=__version__, prog_name="flow-exec")
def main():
    """Run executables with live, indented output capture."""


@main.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
@click.option("--strict", is_flag=True, help="Fail when the command exits non-zero")
@click.option("--verbose", "-v", is_flag=True, help="Echo the command and its live output")
@click.option("--config", "config_path", default=None, help="Path to a settings file")
@click.argument("name")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def run(strict, verbose, config_path, name, args):
    """Run NAME with ARGS and print its combined output."""
    try:
        settings = config.load_settings(config_path)
    except (ValueError, yaml.YAMLError) as e:
        log.error(f"Invalid settings: {e}")
        sys.exit(2)

    log.set_verbose(verbose or settings.verbose)
    runner = process.CommandRunner(chunk_size=settings.chunk_size)

    try:
        with log.indented(settings.indent):
            if strict:
                output = runner.run_strict(name, args)
                returncode = 0
            else:
                result = runner.execute(name, args)
                output, returncode = result.output, result.returncode
    except process.ResolutionError as e:
        log.error(str(e))
        sys.exit(EXIT_NOT_FOUND)
    except process.SpawnError as e:
        log.error(str(e))
        sys.exit(EXIT_NOT_EXECUTABLE)
    except process.CommandFailedError as e:
        log.error(str(e))
        sys.exit(e.returncode or 1)

    if not log.is_verbose():
        click.echo(output, nl=False)
    if returncode != 0:
        runner.report_failure(result)
        sys.exit(returncode)


@main.command()
@click.argument("name")
def which(name):
    """Print the absolute path NAME resolves to."""
    path = process.resolve(name)
    if not path:
        log.error(str(process.ResolutionError(name)))
        sys.exit(1)
    click.echo(path)
