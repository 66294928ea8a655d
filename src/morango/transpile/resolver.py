''' Resolves one source line into an instruction '''

import logging as lg
from typing import Callable

from morango.common.bytecode import Args, Instruction
from morango.common.ops import OpCode, KEYWORDS, arity, check_table
from morango.common.vmconf import fits
from morango.transpile.context import Context, ResolveError
import morango.transpile.grammar as g


def expect_args(ctx: Context, op: OpCode):
    expected = arity(op)
    got = ctx.args_len()

    if got != expected:
        noun = 'argument' if expected == 1 else 'arguments'
        raise ResolveError(f'expected {expected} {noun}, got {got}')


def variable_arg(ctx: Context) -> str:
    name = ctx.get_arg(0)

    if not g.is_variable(name):
        raise ResolveError(f'invalid variable name {name}')

    return name


def resolve_load(ctx: Context) -> Args:
    token = ctx.get_arg(0)
    value = g.parse_number(token)

    if value is None or not fits(value):
        raise ResolveError(f'invalid numeric literal {token}')

    return (value,)


def resolve_wrt(ctx: Context) -> Args:
    return (ctx.resolve_variable(variable_arg(ctx)),)


def resolve_read(ctx: Context) -> Args:
    return (ctx.read_variable(variable_arg(ctx)),)


def resolve_goto(ctx: Context) -> Args:
    name = ctx.get_arg(0)

    if not g.is_label(name):
        raise ResolveError(f'invalid label name `{name}`')

    return (ctx.resolve_label(name),)


def no_args(_: Context) -> None:
    return None


RESOLVERS: dict[OpCode, Callable[[Context], Args | None]] = check_table('RESOLVERS', {
    OpCode.LOAD: resolve_load,
    OpCode.WRT: resolve_wrt,
    OpCode.READ: resolve_read,
    OpCode.ADD: no_args,
    OpCode.MULT: no_args,
    OpCode.RTN: no_args,
    OpCode.TEGT: no_args,
    OpCode.TELT: no_args,
    OpCode.TEEQ: no_args,
    OpCode.GOTO: resolve_goto,
    OpCode.DUP: no_args,
    OpCode.POP: no_args,
})


def resolve(ctx: Context, line: str) -> Instruction | None:
    '''
    Returns the resolved instruction, or None when the line
    only declares a label
    '''
    tokens = line.split()

    if not tokens:
        raise ResolveError('Empty instruction')

    head = tokens[0]
    ctx.set_args(tokens[1:])

    op = KEYWORDS.get(head)

    if op is None:
        if not g.is_label(head):
            raise ResolveError(f'unknown instruction: {head}')

        ctx.declare_label(head, ctx.instruction_number)
        return None

    expect_args(ctx, op)
    args = RESOLVERS[op](ctx)

    instr = Instruction(op, args)
    lg.debug(f'Issuing {op.name} {instr}')
    ctx.instruction_number += 1
    return instr
