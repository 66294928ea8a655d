''' Symbol and label tables of a single transpilation pass '''

import logging as lg
from typing import Dict, List


class AssemblyError(Exception):
    message: str
    line: int | None

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def at_line(self, line: int):
        self.line = line
        return self

    def __str__(self) -> str:
        if self.line is None:
            return self.message

        return f'Transpilation error at line {self.line}: {self.message}'


class ResolveError(AssemblyError):
    pass


class UndeclaredVariable(AssemblyError):
    def __init__(self, name: str):
        super().__init__(f'undeclared variable {name}')
        self.name = name


class UndeclaredLabel(AssemblyError):
    def __init__(self, name: str):
        super().__init__(f'undeclared label `{name}`')
        self.name = name


class DuplicateLabel(AssemblyError):
    def __init__(self, name: str):
        super().__init__(f'duplicated label: {name}')
        self.name = name


class Context:
    variables: Dict[str, int]
    labels: Dict[str, int]
    args: List[str]
    line_number: int
    instruction_number: int

    def __init__(self):
        self.variables = dict()
        self.labels = dict()
        self.args = []
        self.line_number = 0
        self.instruction_number = 0

    # - Variables - #

    def resolve_variable(self, name: str) -> int:
        if name not in self.variables:
            address = len(self.variables)
            self.variables[name] = address
            lg.debug(f'Variable {name} @ 0x{address:02X}')

        return self.variables[name]

    def read_variable(self, name: str) -> int:
        if name not in self.variables:
            raise UndeclaredVariable(name)

        return self.variables[name]

    def data_size(self) -> int:
        return len(self.variables)

    # - Labels - #

    def has_label(self, name: str) -> bool:
        return name in self.labels

    def declare_label(self, name: str, index: int):
        if name in self.labels:
            raise DuplicateLabel(name)

        self.labels[name] = index
        lg.debug(f'Label {name} @ {index}')

    def resolve_label(self, name: str) -> int:
        if name not in self.labels:
            raise UndeclaredLabel(name)

        return self.labels[name]

    # - Current line - #

    def set_args(self, args: List[str]):
        self.args = args

    def get_arg(self, index: int) -> str:
        return self.args[index]

    def args_len(self) -> int:
        return len(self.args)
