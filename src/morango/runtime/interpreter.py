import sys
from pathlib import Path
import logging as lg

import click

from morango.common.bytecode import Program
from morango.common.settings import RunSettings, ConfigError, load_config
from morango.transpile.asm import transpile_file
from morango.transpile.context import AssemblyError
import morango.runtime.engine as engine


EXIT_OK = 0
EXIT_ASSEMBLY_ERROR = 1
EXIT_EXEC_ERROR = 2
EXIT_STEP_LIMIT = 3
EXIT_KEYBOARD = 4
EXIT_CONFIG_ERROR = 5


class StepLimitExceeded(Exception):
    def __init__(self, max_steps: int, ip: int):
        super().__init__(f'Step limit {max_steps} exceeded at ip = 0x{ip:02x}')
        self.max_steps = max_steps
        self.ip = ip


def run_bounded(program: Program, max_steps: int | None = None) -> int | None:
    proc = engine.Engine(program)

    while True:
        pending = proc.program.instruction_at(proc.ip) is not None

        if max_steps is not None and pending and proc.steps >= max_steps:
            raise StepLimitExceeded(max_steps, proc.ip)

        if not proc.step():
            return proc.result


def interpret(source_file: str | Path) -> int | None:
    program = transpile_file(source_file)
    return engine.execute(program)


@click.command()
@click.option('-f', '--file', 'source', type=Path, required=True, help='Source code to interpret')
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--max-steps', type=click.IntRange(min=1), help='Abort after this many executed instructions')
@click.option('--dump-bytecode', is_flag=True, help='Log the bytecode listing before execution')
@click.option(
    '-c', '--config', 'config_path',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='TOML file with a [morango] table')
def run(source: Path, verbose: bool, max_steps: int | None, dump_bytecode: bool, config_path: Path | None):
    settings = RunSettings()

    if config_path is not None:
        try:
            settings.update(**load_config(config_path))
        except ConfigError as e:
            click.echo(str(e), err=True)
            sys.exit(EXIT_CONFIG_ERROR)

    settings.update(verbose=verbose or None, max_steps=max_steps, dump_bytecode=dump_bytecode or None)

    lg.basicConfig(level=lg.DEBUG if settings.verbose else lg.INFO)
    lg.info('MORANGO')

    try:
        program = transpile_file(source)

        if settings.dump_bytecode:
            lg.info(f'Bytecode: {program.listing()}')

        result = run_bounded(program, settings.max_steps)

    except AssemblyError as e:
        lg.error(str(e))
        sys.exit(EXIT_ASSEMBLY_ERROR)

    except engine.ExecutionError as e:
        lg.error(str(e))
        sys.exit(EXIT_EXEC_ERROR)

    except StepLimitExceeded as e:
        lg.error(str(e))
        sys.exit(EXIT_STEP_LIMIT)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    if result is None:
        lg.info('Execution finished without a value')
    else:
        click.echo(result)

    sys.exit(EXIT_OK)


if __name__ == '__main__':
    run()
