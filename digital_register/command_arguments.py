# Custom decorators for common command arguments
import functools

import click


def input_output_path(f):
    arguments = [
        click.argument("input-path", type=click.Path(exists=True)),
        click.argument("output-path", type=click.Path()),
    ]
    return functools.reduce(lambda x, arg: arg(x), reversed(arguments), f)


def input_path(f):
    return click.argument("input-path", type=click.Path(exists=True))(f)
