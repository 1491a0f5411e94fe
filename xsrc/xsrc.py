import json
import logging
import sys

import click

from .cli_utils import reconstruct_command_line
from .pipeline import DocumentLoadError, GeneratorConfig, OutputMode, PipelineGenerator, XsrcError, load_document


def _load_config(path: str | None) -> GeneratorConfig:
    if path is None:
        return GeneratorConfig()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DocumentLoadError(f"Cannot decode config file: {e}", path) from e
    try:
        return GeneratorConfig.from_dict(data)
    except DocumentLoadError as e:
        raise e.with_path(path)


@click.command()
@click.option("--lang", "-x", default="javascript", type=str, help="Target language: javascript (js), typescript (ts) or python (py)")
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False, resolve_path=True), help="Output file (default: stdout)")
@click.option("--name", "-n", default=None, type=str, help="Client class name (overrides $as)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True), help="JSON configuration file")
@click.option("--no-clobber", is_flag=True, default=False, help="Fail if the output file already exists")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log each pipeline phase")
@click.argument("schema", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
def xsrc(lang, output, name, config, no_clobber, verbose, schema):
    """Generate a REST client from the SCHEMA document."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)

    try:
        generator_config = _load_config(config)
        if no_clobber:
            generator_config.output.mode = OutputMode.ERROR_IF_EXISTS
        if generator_config.add_generation_comment and not generator_config.generation_command:
            generator_config.generation_command = reconstruct_command_line(xsrc)

        document = load_document(schema)
        codegen = PipelineGenerator(document, generator_config, lang, name)

        if output is None:
            click.echo(codegen.generate(), nl=False)
        else:
            path = codegen.generate_to_file(output)
            click.echo(f"Code file generated at {path}", err=True)
    except XsrcError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
