import logging as lg
from typing import Callable, List

from morango.common.bytecode import Instruction, Program
from morango.common.ops import OpCode, arity, check_table
from morango.common.vmconf import wrap


class ExecutionError(Exception):
    message: str
    ip: int

    def __init__(self, message: str, ip: int):
        super().__init__(message)
        self.message = message
        self.ip = ip

    def __str__(self) -> str:
        return f'Runtime error: unable to process current instruction, ip = 0x{self.ip:02x}: {self.message}'


class StackUnderflow(ExecutionError):
    def __init__(self, ip: int):
        super().__init__('no value on stack', ip)


class InvalidAddress(ExecutionError):
    def __init__(self, address: int, ip: int):
        super().__init__(f'invalid variable address 0x{address:02x}', ip)
        self.address = address


class MalformedInstruction(ExecutionError):
    pass


class Return(Exception):
    def __init__(self, value: int):
        super().__init__(value)
        self.value = value


class Engine:
    ip: int             # Instruction pointer
    stack: List[int]    # Operand stack
    variables: List[int]
    finished: bool
    result: int | None

    def __init__(self, program: Program):
        self.program = program
        self.ip = 0
        self.stack = []
        self.variables = [0] * program.variable_slot_count()
        self.finished = False
        self.result = None
        self.steps = 0

    # - Helpers - #

    def debug_dump(self):
        lg.debug(f'IP:{self.ip:X} STACK:{self.stack} VARS:{self.variables}')

    def push_value(self, value: int):
        self.stack.append(value)

    def pop_value(self) -> int:
        if not self.stack:
            raise StackUnderflow(self.ip)

        return self.stack.pop()

    def check_address(self, address: int):
        if not 0 <= address < len(self.variables):
            raise InvalidAddress(address, self.ip)

    def write_var(self, address: int, value: int):
        self.check_address(address)
        self.variables[address] = value

    def read_var(self, address: int) -> int:
        self.check_address(address)
        return self.variables[address]

    def arithm_pair(self, op: Callable[[int, int], int]):
        v1 = self.pop_value()
        v2 = self.pop_value()
        self.push_value(wrap(op(v1, v2)))

    def check_shape(self, instr: Instruction):
        try:
            op = OpCode(instr.opcode)
        except ValueError:
            raise MalformedInstruction(f'Invalid instruction: unknown opcode {instr.opcode}', self.ip)

        expected = arity(op)

        if expected == 0:
            if instr.args is not None:
                raise MalformedInstruction(f'Invalid {op.name} instruction: unexpected args', self.ip)

            return

        if instr.args is None:
            raise MalformedInstruction(f'Invalid {op.name} instruction: empty args', self.ip)

        if len(instr.args) != expected:
            noun = 'argument' if expected == 1 else 'arguments'
            raise MalformedInstruction(
                f'Invalid {op.name} instruction: expected {expected} {noun}, got {len(instr.args)}',
                self.ip
            )

    # - Operations - #
    # Every handler returns the next instruction pointer

    def load(self, args) -> int:
        self.push_value(args[0])
        return self.ip + 1

    def wrt(self, args) -> int:
        value = self.pop_value()
        self.write_var(args[0], value)
        return self.ip + 1

    def read(self, args) -> int:
        self.push_value(self.read_var(args[0]))
        return self.ip + 1

    def add(self, _) -> int:
        self.arithm_pair(lambda a, b: a + b)
        return self.ip + 1

    def mult(self, _) -> int:
        self.arithm_pair(lambda a, b: a * b)
        return self.ip + 1

    def rtn(self, _) -> int:
        raise Return(self.pop_value())

    def tegt(self, _) -> int:
        self.arithm_pair(lambda a, b: int(a > b))
        return self.ip + 1

    def telt(self, _) -> int:
        self.arithm_pair(lambda a, b: int(a < b))
        return self.ip + 1

    def teeq(self, _) -> int:
        self.arithm_pair(lambda a, b: int(a == b))
        return self.ip + 1

    def goto(self, args) -> int:
        if self.pop_value() == 0:
            return self.ip + 1

        return args[0]

    def dup(self, _) -> int:
        value = self.pop_value()
        self.push_value(value)
        self.push_value(value)
        return self.ip + 1

    def pop(self, _) -> int:
        self.pop_value()
        return self.ip + 1

    HANDLERS = check_table('HANDLERS', {
        OpCode.LOAD: load,
        OpCode.WRT: wrt,
        OpCode.READ: read,
        OpCode.ADD: add,
        OpCode.MULT: mult,
        OpCode.RTN: rtn,
        OpCode.TEGT: tegt,
        OpCode.TELT: telt,
        OpCode.TEEQ: teeq,
        OpCode.GOTO: goto,
        OpCode.DUP: dup,
        OpCode.POP: pop,
    })

    # -- Implementation -- #

    def step(self) -> bool:
        ''' Executes one instruction, returns False once terminated '''
        if self.finished:
            return False

        instr = self.program.instruction_at(self.ip)

        if instr is None:
            lg.debug(f'Ran past the last instruction at {self.ip}')
            self.finished = True
            return False

        self.check_shape(instr)
        lg.debug(f'{self.ip:04X} {instr}')
        handler = self.HANDLERS[OpCode(instr.opcode)]

        try:
            self.ip = handler(self, instr.args)
        except Return as r:
            lg.debug(f'Returning {r.value} at {self.ip}')
            self.result = r.value
            self.finished = True
            return False

        self.debug_dump()
        self.steps += 1
        return True

    def run(self) -> int | None:
        while self.step():
            pass

        return self.result


def execute(program: Program) -> int | None:
    return Engine(program).run()
