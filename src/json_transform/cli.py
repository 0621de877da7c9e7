"""Command-line interface for JSON Transform."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from . import __version__
from .json_transformer import JSONTransformer, debug_from_env
from .types import TransformError


def _read_inputs(paths: Tuple[str, ...]) -> str:
    """Concatenate all inputs; stdin is read when none is given or for '-'."""
    chunks = []
    for path in paths or ("-",):
        if path == "-":
            chunks.append(sys.stdin.buffer.read())
        else:
            chunks.append(Path(path).read_bytes())
    return b"".join(chunks).decode("utf-8")


@click.command()
@click.version_option(version=__version__)
@click.argument("args", nargs=-1)
@click.option('--program-file', '-f', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Read the program from a file; all arguments are then inputs')
@click.option('--indent', type=int, default=None, help='Pretty-print the output with this indent')
@click.option('--ast', 'dump_ast', is_flag=True, help='Print the compiled program as JSON and exit')
@click.option('--profile', is_flag=True, help='Report performance metrics on stderr')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def main(args: Tuple[str, ...], program_file: Optional[Path], indent: Optional[int],
         dump_ast: bool, profile: bool, verbose: bool):
    """Transform JSON read from INPUTS (or stdin) with PROGRAM.

    \b
    Usage: json-transform PROGRAM [INPUTS]...
           json-transform -f PROGRAM_FILE [INPUTS]...
    """
    debug = verbose or debug_from_env()
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if program_file is not None:
        program_text = program_file.read_text(encoding="utf-8")
        input_paths = args
    elif args:
        program_text, input_paths = args[0], args[1:]
    else:
        raise click.UsageError("Missing PROGRAM argument")

    transformer = JSONTransformer(debug=debug, enable_profiling=profile, indent=indent)

    if dump_ast:
        try:
            compiled = transformer.compile(program_text)
        except TransformError as e:
            click.echo(f"Error: {transformer.error_handler.format_error(e)}", err=True)
            sys.exit(1)
        click.echo(json.dumps(compiled.program.to_dict(), indent=indent))
        return

    try:
        json_input = _read_inputs(input_paths)
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Error: cannot read input: {e}", err=True)
        sys.exit(1)

    result = transformer.transform(program_text, json_input)

    if profile and transformer.profiler:
        click.echo(transformer.profiler.format_summary(), err=True)

    if not result.success:
        for error in result.errors or []:
            click.echo(f"Error: {error}", err=True)
        sys.exit(1)

    try:
        click.echo(result.json_string)
    except UnicodeEncodeError as e:
        click.echo(f"Error: cannot write output: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
