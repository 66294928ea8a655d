import logging as lg
from pathlib import Path
from typing import Any, Dict
import tomllib


class ConfigError(Exception):
    pass


class RunSettings:
    verbose: bool
    max_steps: int | None
    dump_bytecode: bool

    def __init__(self):
        self.verbose = False
        self.max_steps = None
        self.dump_bytecode = False

    def update(
        self,
        verbose: bool | None = None,
        max_steps: int | None = None,
        dump_bytecode: bool | None = None,
        **_: Any
    ):
        if verbose is not None:
            self.verbose = verbose

        if max_steps is not None:
            self.max_steps = max_steps

        if dump_bytecode is not None:
            self.dump_bytecode = dump_bytecode

        return self


def check_flag(section: Dict[str, Any], key: str) -> bool | None:
    value = section.get(key)

    if value is not None and not isinstance(value, bool):
        raise ConfigError(f'{key} must be a boolean, got {value!r}')

    return value


def check_max_steps(section: Dict[str, Any]) -> int | None:
    value = section.get('max_steps')

    if value is None:
        return None

    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f'max_steps must be a positive integer, got {value!r}')

    return value


def load_config(config_path: Path) -> Dict[str, Any]:
    lg.debug(f'Loading config {config_path}')

    try:
        config = tomllib.loads(config_path.read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f'Unable to load config {config_path}: {e}')

    section = config.get('morango', {})

    if not isinstance(section, dict):
        raise ConfigError('[morango] must be a table')

    return {
        'verbose': check_flag(section, 'verbose'),
        'max_steps': check_max_steps(section),
        'dump_bytecode': check_flag(section, 'dump_bytecode'),
    }
