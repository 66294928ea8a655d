import logging as lg
from pathlib import Path
from typing import Iterable, List

from morango.common.bytecode import Instruction, Program
from morango.transpile.context import Context, AssemblyError
from morango.transpile.resolver import resolve


def split_source(source: str | Iterable[str]) -> Iterable[str]:
    if isinstance(source, str):
        return (line.rstrip('\r') for line in source.split('\n'))

    return (line.rstrip('\r\n') for line in source)


def assemble(source: str | Iterable[str]) -> Program:
    ctx = Context()
    instructions: List[Instruction] = []

    for index, line in enumerate(split_source(source)):
        if not line.strip():
            continue

        ctx.line_number = index + 1

        try:
            instr = resolve(ctx, line)
        except AssemblyError as e:
            raise e.at_line(ctx.line_number)

        if instr is not None:
            instructions.append(instr)

    if not instructions:
        raise AssemblyError('Empty program')

    program = Program(tuple(instructions), ctx.data_size())
    lg.debug(f'Assembled {len(program)} instructions, {program.data_size} variables')
    return program


def transpile_file(filepath: str | Path) -> Program:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Transpiling file {filepath}')

    try:
        contents = filepath.read_text(encoding='utf-8')
    except OSError as e:
        raise AssemblyError(f'Unable to open file: {e}')
    except UnicodeDecodeError as e:
        raise AssemblyError(f'Unable to read file: {e}')

    if not contents:
        raise AssemblyError('Empty file')

    return assemble(contents)
