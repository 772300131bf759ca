"""Tests for the standard host prelude."""

import pytest

from remix import (
    RemixArityError, RemixNativeFunction, RemixNumber, RemixPrelude, RemixTuple, RemixTypeMismatchError,
    RemixUnresolvedIdentifierError
)
from remix.remix_builders import (
    assign, bind, call, context, ident, lambda_of, list_of, number, sandbox, string, tuple_of
)


@pytest.fixture
def output():
    """Collect everything the print native writes."""
    return []


@pytest.fixture
def prelude(output):
    """Create a prelude whose print writes into a list."""
    return RemixPrelude(writer=output.append)


def run(remix, prelude, program):
    return remix.run(program, bindings=prelude.get_bindings(), context=prelude.get_context())


class TestPreludeContents:
    """Test which names the prelude provides."""

    def test_lexical_natives(self, prelude):
        """Test the lexical namespace natives."""
        bindings = prelude.get_bindings()
        assert sorted(bindings) == ["add", "apply", "map"]
        assert all(isinstance(v, RemixNativeFunction) for v in bindings.values())

    def test_contextual_natives(self, prelude):
        """Test the contextual namespace natives."""
        assert list(prelude.get_context()) == ["print"]


class TestAdd:
    """Test the add native."""

    def test_add(self, remix, prelude):
        """Test adding two numbers."""
        assert run(remix, prelude, call(ident("add"), [number(2), number(3)])) == RemixNumber(5)

    def test_add_rejects_strings(self, remix, prelude):
        """Test that add only accepts numbers."""
        with pytest.raises(RemixTypeMismatchError, match="Cannot add non-numbers"):
            run(remix, prelude, call(ident("add"), [number(1), string("2")]))

    def test_add_arity(self, remix, prelude):
        """Test that add takes exactly two arguments."""
        with pytest.raises(RemixArityError, match="Function 'add' expects 2 arguments, got 1"):
            run(remix, prelude, call(ident("add"), [number(1)]))


class TestApplyAndMap:
    """Test the higher-order natives."""

    def test_apply_lambda(self, remix, prelude):
        """Test apply with a lambda."""
        program = call(ident("apply"), [lambda_of([ident("a"), ident("b")], ident("b")), number(1), number(2)])
        assert run(remix, prelude, program) == RemixNumber(2)

    def test_apply_native(self, remix, prelude):
        """Test apply with a native."""
        program = call(ident("apply"), [ident("add"), number(1), number(2)])
        assert run(remix, prelude, program) == RemixNumber(3)

    def test_apply_without_arguments(self, remix, prelude):
        """Test apply with nothing to call."""
        with pytest.raises(RemixArityError, match="Function 'apply' expects 1 argument, got 0"):
            run(remix, prelude, call(ident("apply"), []))

    def test_apply_non_function(self, remix, prelude):
        """Test apply with a value that cannot be called."""
        with pytest.raises(RemixTypeMismatchError, match="'apply' first argument must be a function"):
            run(remix, prelude, call(ident("apply"), [number(1)]))

    def test_map(self, remix, prelude):
        """Test map over a list."""
        program = call(
            ident("map"),
            [lambda_of([ident("x")], call(ident("add"), [ident("x"), number(1)])), list_of([number(1), number(2)])]
        )
        assert run(remix, prelude, program).describe() == "[2, 3]"

    def test_map_requires_list(self, remix, prelude):
        """Test map with a tuple instead of a list."""
        program = call(ident("map"), [ident("add"), tuple_of([number(1)])])
        with pytest.raises(RemixTypeMismatchError, match="'map' second argument must be a list"):
            run(remix, prelude, program)

    def test_map_sees_call_site_context(self, remix, prelude):
        """Test that lambdas called by map see contextual bindings from the map call."""
        program = bind(
            [
                assign(ident("scale"), lambda_of([ident("x")], call(ident("add"), [ident("x"), context("offset")]))),
            ],
            bind(
                [assign(context("offset"), number(10))],
                call(ident("map"), [ident("scale"), list_of([number(1), number(2)])])
            )
        )
        assert run(remix, prelude, program).describe() == "[11, 12]"


class TestPrint:
    """Test the contextual print native."""

    def test_print_writes_and_returns_unit(self, remix, prelude, output):
        """Test that print writes its arguments and returns the empty tuple."""
        program = call(context("print"), [string("hello"), number(42)])

        assert run(remix, prelude, program) == RemixTuple(())
        assert output == ['"hello" 42']

    def test_print_hidden_by_sandbox(self, remix, prelude, output):
        """Test that sandboxed code cannot reach print."""
        with pytest.raises(RemixUnresolvedIdentifierError, match="'@print'"):
            run(remix, prelude, sandbox(call(context("print"), [string("x")])))

        assert output == []

    def test_program_can_replace_print(self, remix, prelude, output):
        """Test that a program can bind its own contextual print for callees."""
        program = bind(
            [
                assign(ident("log"), lambda_of([ident("m")], call(context("print"), [ident("m")]))),
            ],
            bind(
                [assign(context("print"), lambda_of([ident("m")], ident("m")))],
                call(ident("log"), [string("captured")])
            )
        )

        assert run(remix, prelude, program).to_python() == "captured"
        assert output == []
