import pytest

from morango.transpile.context import (
    Context,
    AssemblyError,
    UndeclaredVariable,
    UndeclaredLabel,
    DuplicateLabel,
)


def test_variables_get_addresses_in_first_write_order():
    ctx = Context()

    assert ctx.resolve_variable('x') == 0
    assert ctx.resolve_variable('y') == 1
    assert ctx.resolve_variable('x') == 0
    assert ctx.resolve_variable('z') == 2
    assert ctx.data_size() == 3


def test_read_undeclared_variable():
    ctx = Context()

    with pytest.raises(UndeclaredVariable) as e:
        ctx.read_variable('x')

    assert e.value.message == 'undeclared variable x'


def test_read_declared_variable():
    ctx = Context()
    ctx.resolve_variable('a')
    ctx.resolve_variable('b')

    assert ctx.read_variable('b') == 1


def test_labels():
    ctx = Context()
    ctx.declare_label('&top', 3)

    assert ctx.has_label('&top')
    assert ctx.resolve_label('&top') == 3


def test_duplicate_label():
    ctx = Context()
    ctx.declare_label('&top', 0)

    with pytest.raises(DuplicateLabel) as e:
        ctx.declare_label('&top', 2)

    assert e.value.message == 'duplicated label: &top'
    assert ctx.resolve_label('&top') == 0


def test_undeclared_label():
    with pytest.raises(UndeclaredLabel) as e:
        Context().resolve_label('&nowhere')

    assert e.value.message == 'undeclared label `&nowhere`'


def test_error_formatting():
    assert str(AssemblyError('Empty program')) == 'Empty program'
    assert str(UndeclaredVariable('x').at_line(7)) == 'Transpilation error at line 7: undeclared variable x'
