import pytest
from click.testing import CliRunner

import morango.runtime.interpreter as interpreter
import morango.transpile.masm as masm
from morango.common.settings import RunSettings, ConfigError, load_config

from unit_utils import find_program


def invoke_run(*args: str):
    return CliRunner().invoke(interpreter.run, list(args))


def test_run_prints_result():
    result = invoke_run('-f', str(find_program('simple')))

    assert result.exit_code == interpreter.EXIT_OK
    assert result.output.strip().splitlines()[-1] == '4'


def test_run_without_value():
    result = invoke_run('--file', str(find_program('no_return')))

    assert result.exit_code == interpreter.EXIT_OK
    assert '4' not in result.output


def test_run_assembly_error():
    result = invoke_run('-f', str(find_program('undeclared')))

    assert result.exit_code == interpreter.EXIT_ASSEMBLY_ERROR


def test_run_execution_error():
    result = invoke_run('-f', str(find_program('underflow')))

    assert result.exit_code == interpreter.EXIT_EXEC_ERROR


def test_run_step_limit():
    result = invoke_run('-f', str(find_program('forever')), '--max-steps', '50')

    assert result.exit_code == interpreter.EXIT_STEP_LIMIT


def test_run_requires_file():
    result = invoke_run()

    assert result.exit_code != 0


def test_run_with_config(tmp_path):
    config = tmp_path / 'morango.toml'
    config.write_text('[morango]\nmax_steps = 20\n')

    result = invoke_run('-f', str(find_program('forever')), '-c', str(config))

    assert result.exit_code == interpreter.EXIT_STEP_LIMIT


def test_compile_prints_listing():
    result = CliRunner().invoke(masm.compile, [str(find_program('simple'))])

    assert result.exit_code == 0

    lines = [line for line in result.output.splitlines() if line.startswith('000')]
    assert lines[0] == '0000  0x01 0x01'
    assert lines[-1] == '0009  0x06'
    assert len(lines) == 10


def test_compile_error():
    result = CliRunner().invoke(masm.compile, [str(find_program('empty'))])

    assert result.exit_code == 1


def test_settings_update_ignores_none():
    settings = RunSettings().update(verbose=True, max_steps=10)
    settings.update(verbose=None, max_steps=None, dump_bytecode=True)

    assert settings.verbose
    assert settings.max_steps == 10
    assert settings.dump_bytecode


def test_load_config(tmp_path):
    config = tmp_path / 'morango.toml'
    config.write_text('[morango]\nverbose = true\ndump_bytecode = true\n')

    assert load_config(config) == {
        'verbose': True,
        'max_steps': None,
        'dump_bytecode': True,
    }


def test_load_config_without_section(tmp_path):
    config = tmp_path / 'other.toml'
    config.write_text('[tool]\nname = "x"\n')

    assert RunSettings().update(**load_config(config)).max_steps is None


def test_run_missing_config(tmp_path):
    result = invoke_run('-f', str(find_program('simple')), '-c', str(tmp_path / 'missing.toml'))

    assert result.exit_code == 2
    assert 'does not exist' in result.output


def test_run_malformed_config(tmp_path):
    config = tmp_path / 'morango.toml'
    config.write_text('[morango\nmax_steps = ')

    result = invoke_run('-f', str(find_program('simple')), '-c', str(config))

    assert result.exit_code == interpreter.EXIT_CONFIG_ERROR


@pytest.mark.parametrize('body', [
    'max_steps = "ten"',
    'max_steps = 0',
    'max_steps = true',
    'verbose = "yes"',
])
def test_load_config_rejects_bad_values(tmp_path, body):
    config = tmp_path / 'morango.toml'
    config.write_text(f'[morango]\n{body}\n')

    with pytest.raises(ConfigError):
        load_config(config)


def test_run_bad_max_steps_in_config(tmp_path):
    config = tmp_path / 'morango.toml'
    config.write_text('[morango]\nmax_steps = "ten"\n')

    result = invoke_run('-f', str(find_program('forever')), '-c', str(config))

    assert result.exit_code == interpreter.EXIT_CONFIG_ERROR
