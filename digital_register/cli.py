import logging
import os
import sys

import click

from digital_register.commands import rsf_entries, rsf_items, rsf_verify
from digital_register.command_arguments import input_output_path, input_path


@click.group()
@click.option("-d", "--debug/--no-debug", type=click.BOOL, default=False)
@click.option(
    "--specification-dir", "-s", type=click.Path(), default="specification/"
)
@click.pass_context
def cli(ctx, debug, specification_dir):
    ctx.ensure_object(dict)

    from digital_register.specification import Specification

    ctx.obj["SPECIFICATION"] = None
    if os.path.isdir(specification_dir):
        ctx.obj["SPECIFICATION"] = Specification(specification_dir)
    ctx.obj["DEBUG"] = debug

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command("rsf-verify", short_help="check an RSF file is internally consistent")
@input_path
def rsf_verify_cmd(input_path):
    problems = rsf_verify(input_path)
    if problems:
        for problem in problems:
            print(problem)
        sys.exit(1)


@cli.command("rsf-entries", short_help="save the entries of an RSF file as CSV")
@input_output_path
def rsf_entries_cmd(input_path, output_path):
    rsf_entries(input_path, output_path)


@cli.command("rsf-items", short_help="save the current items of an RSF file as CSV")
@input_output_path
@click.pass_context
def rsf_items_cmd(ctx, input_path, output_path):
    rsf_items(input_path, output_path, ctx.obj["SPECIFICATION"])
