from enum import IntEnum


class OpCode(IntEnum):
    LOAD = 0x01  # push U1
    WRT = 0x02   # pop -> V[U1]
    READ = 0x03  # V[U1] -> push
    ADD = 0x04   # pop + pop -> push
    MULT = 0x05  # pop * pop -> push
    RTN = 0x06   # pop -> result; stop
    TEGT = 0x07  # pop .gt pop -> push
    TELT = 0x08  # pop .lt pop -> push
    TEEQ = 0x09  # pop .eq pop -> push
    GOTO = 0x0A  # if pop .ne 0 jmp U1
    DUP = 0x0B   # pop -> push; push
    POP = 0x0C   # pop


# Number of arguments every opcode carries
ARITY = {
    OpCode.LOAD: 1,
    OpCode.WRT: 1,
    OpCode.READ: 1,
    OpCode.ADD: 0,
    OpCode.MULT: 0,
    OpCode.RTN: 0,
    OpCode.TEGT: 0,
    OpCode.TELT: 0,
    OpCode.TEEQ: 0,
    OpCode.GOTO: 1,
    OpCode.DUP: 0,
    OpCode.POP: 0,
}

# Source keywords
KEYWORDS = {
    'LOAD_VAL': OpCode.LOAD,
    'WRITE_VAR': OpCode.WRT,
    'READ_VAR': OpCode.READ,
    'ADD': OpCode.ADD,
    'MULTIPLY': OpCode.MULT,
    'RETURN_VALUE': OpCode.RTN,
    'TEST_GT': OpCode.TEGT,
    'TEST_LT': OpCode.TELT,
    'TEST_EQ': OpCode.TEEQ,
    'GOTO': OpCode.GOTO,
    'DUP': OpCode.DUP,
    'POP': OpCode.POP,
}


def arity(op: OpCode) -> int:
    return ARITY[op]


def check_table(name: str, table: dict) -> dict:
    ''' Ensures a dispatch table covers every opcode '''
    missing = [op.name for op in OpCode if op not in table]

    if missing:
        raise Exception(f'{name} misses opcodes {", ".join(missing)}')

    return table


check_table('ARITY', ARITY)
check_table('KEYWORDS', {op: kw for kw, op in KEYWORDS.items()})
