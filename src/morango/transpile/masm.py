import sys
from pathlib import Path
import logging as lg

import click

from morango.common.bytecode import Program
from morango.transpile.asm import transpile_file
from morango.transpile.context import AssemblyError


def format_listing(program: Program) -> list[str]:
    return [f'{index:04X}  {instr}' for index, instr in enumerate(program.instructions)]


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('source', type=Path)
def compile(verbose: bool, source: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('MORANGO TRANSPILER')

    try:
        program = transpile_file(source)
    except AssemblyError as e:
        lg.error(str(e))
        sys.exit(1)

    lg.info(f'{len(program)} instructions, {program.variable_slot_count()} variables')

    for line in format_listing(program):
        click.echo(line)


if __name__ == '__main__':
    compile()
