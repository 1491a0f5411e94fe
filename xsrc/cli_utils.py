"""
Command line reconstruction for the generation comment.
"""

from pathlib import Path

import click

PROGRAM_NAME = "xsrc"


def _format_value(param: click.Parameter, value) -> str:
    # Paths are recorded by file name so the comment is the same wherever the compile runs
    if isinstance(param.type, click.Path):
        return Path(value).name
    return str(value)


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Rebuild the command line of the running invocation.

    Arguments come first, then options that differ from their default. Flags
    are left out since none of them changes the generated code.

    Args:
        click_command: Command whose parameters are looked up in the current context

    Returns:
        The command line, or just the program name outside of a Click context
    """
    try:
        ctx = click.get_current_context()
    except RuntimeError:
        return PROGRAM_NAME

    arguments: list[str] = []
    options: list[str] = []
    for param in click_command.params:
        value = ctx.params.get(param.name)
        if value is None or value == "" or value == param.default:
            continue
        if isinstance(param, click.Option):
            if param.is_flag:
                continue
            options.extend([param.opts[0], _format_value(param, value)])
        else:
            arguments.append(_format_value(param, value))

    return " ".join([PROGRAM_NAME, *arguments, *options])
