from dataclasses import dataclass
from typing import Tuple

from morango.common.ops import OpCode


Args = Tuple[int, ...]


@dataclass(frozen=True)
class Instruction:
    opcode: OpCode
    args: Args | None = None

    def __str__(self) -> str:
        text = f'0x{int(self.opcode):02X}'

        if self.args:
            text += ' ' + ' '.join(f'0x{arg:02x}' for arg in self.args)

        return text


@dataclass(frozen=True)
class Program:
    instructions: Tuple[Instruction, ...]
    data_size: int

    def instruction_at(self, index: int) -> Instruction | None:
        if 0 <= index < len(self.instructions):
            return self.instructions[index]

        return None

    def variable_slot_count(self) -> int:
        return self.data_size

    def listing(self) -> str:
        return ' '.join(str(instr) for instr in self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)
