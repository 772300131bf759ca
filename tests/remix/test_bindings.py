"""Tests for bind expressions: laziness, forward references and shadowing."""

import pytest

from remix import (
    RemixBoolean, RemixCircularBindingError, RemixNativeFunction, RemixNumber, RemixUnresolvedIdentifierError
)
from remix.remix_builders import (
    assign, bind, boolean, call, conditional, ident, lambda_of, number, string, tuple_of
)


# Small arithmetic prelude for the recursion tests
COUNTING = {
    "zero": RemixNativeFunction("zero", lambda args, _: RemixBoolean(args[0].value == 0)),
    "dec": RemixNativeFunction("dec", lambda args, _: RemixNumber(args[0].value - 1)),
}


class TestBindings:
    """Test bind expressions."""

    def test_resolve_bound_identifier(self, remix):
        """Test that a bound name resolves in the body."""
        program = bind([assign(ident("msg"), string("hello world"))], ident("msg"))
        assert remix.run(program).to_python() == "hello world"

    def test_resolve_from_outer_scope(self, remix):
        """Test that names from an enclosing bind stay visible."""
        program = bind(
            [assign(ident("x"), number(1))],
            bind([assign(ident("y"), number(2))], ident("x"))
        )
        assert remix.run(program) == RemixNumber(1)

    def test_resolve_from_same_binding_list(self, remix):
        """Test that a binding can use an earlier sibling."""
        program = bind(
            [assign(ident("x"), number(1)), assign(ident("y"), ident("x"))],
            ident("y")
        )
        assert remix.run(program) == RemixNumber(1)

    def test_forward_reference(self, remix):
        """Test that a binding can use a sibling bound after it."""
        program = bind(
            [assign(ident("a"), ident("b")), assign(ident("b"), number(5))],
            ident("a")
        )
        assert remix.run(program) == RemixNumber(5)

    def test_mutual_recursion_between_siblings(self, remix, helpers):
        """Test that sibling lambdas can call each other."""
        # is_even(n) = n == 0 ? true : is_odd(n - 1), with a native for the arithmetic
        program = bind(
            [
                assign(ident("is_even"), lambda_of(
                    [ident("n")],
                    conditional(
                        call(ident("zero"), [ident("n")]),
                        boolean(True),
                        call(ident("is_odd"), [call(ident("dec"), [ident("n")])])
                    )
                )),
                assign(ident("is_odd"), lambda_of(
                    [ident("n")],
                    conditional(
                        call(ident("zero"), [ident("n")]),
                        boolean(False),
                        call(ident("is_even"), [call(ident("dec"), [ident("n")])])
                    )
                )),
            ],
            tuple_of([call(ident("is_even"), [number(6)]), call(ident("is_odd"), [number(7)])])
        )
        helpers.assert_evaluates_to(remix, program, "(true, true)", bindings=COUNTING)

    def test_shadowing(self, remix):
        """Test that an inner binding hides an outer one."""
        program = bind(
            [assign(ident("x"), number(1))],
            bind([assign(ident("x"), number(2))], ident("x"))
        )
        assert remix.run(program) == RemixNumber(2)

    def test_shadowing_does_not_leak_out(self, remix, helpers):
        """Test that an inner binding does not change the outer scope."""
        program = bind(
            [assign(ident("x"), number(1))],
            tuple_of([
                bind([assign(ident("x"), number(2))], ident("x")),
                ident("x"),
            ])
        )
        helpers.assert_evaluates_to(remix, program, "(2, 1)")

    def test_bindings_invisible_outside_bind(self, remix):
        """Test that bindings are scoped to the bind body."""
        program = tuple_of([
            bind([assign(ident("inner"), number(1))], ident("inner")),
            ident("inner"),
        ])
        with pytest.raises(RemixUnresolvedIdentifierError, match="Could not resolve lexical identifier 'inner'"):
            remix.run(program)

    def test_later_duplicate_binding_wins(self, remix):
        """Test that a repeated name in one list resolves to the last binding."""
        program = bind(
            [assign(ident("x"), number(1)), assign(ident("x"), number(2))],
            ident("x")
        )
        assert remix.run(program) == RemixNumber(2)

    def test_binding_evaluated_at_most_once(self, remix, helpers):
        """Test that a binding referenced many times is evaluated once."""
        recorder = helpers.recorder("effect", RemixNumber(7))
        program = bind(
            [assign(ident("x"), call(ident("effect"), []))],
            tuple_of([ident("x"), ident("x"), ident("x")])
        )

        helpers.assert_evaluates_to(remix, program, "(7, 7, 7)", bindings={"effect": recorder.native()})
        assert len(recorder.calls) == 1

    def test_unused_binding_never_evaluated(self, remix, helpers):
        """Test that a binding the body never uses is never evaluated."""
        program = bind(
            [assign(ident("unused"), call(ident("explode"), []))],
            number(1)
        )
        assert remix.run(program, bindings={"explode": helpers.failing_native()}) == RemixNumber(1)

    def test_binding_evaluated_when_first_used(self, remix, helpers):
        """Test that bindings are forced in the order the body uses them."""
        recorder = helpers.recorder("note")
        program = bind(
            [
                assign(ident("first"), call(ident("note"), [string("first")])),
                assign(ident("second"), call(ident("note"), [string("second")])),
            ],
            tuple_of([ident("second"), ident("first")])
        )

        remix.run(program, bindings={"note": recorder.native()})
        assert [c[0].to_python() for c in recorder.calls] == ["second", "first"]

    def test_self_referencing_binding_fails(self, remix):
        """Test that a binding whose value needs itself is reported."""
        program = bind([assign(ident("a"), ident("a"))], ident("a"))
        with pytest.raises(RemixCircularBindingError, match="Binding 'a' depends on its own value"):
            remix.run(program)

    def test_mutually_dependent_values_fail(self, remix):
        """Test that a cycle through two non-function bindings is reported."""
        program = bind(
            [assign(ident("a"), ident("b")), assign(ident("b"), ident("a"))],
            ident("a")
        )
        with pytest.raises(RemixCircularBindingError):
            remix.run(program)

    def test_recursive_lambda_binding(self, remix):
        """Test that a lambda can refer to its own binding."""
        program = bind(
            [assign(ident("countdown"), lambda_of(
                [ident("n")],
                conditional(
                    call(ident("zero"), [ident("n")]),
                    string("done"),
                    call(ident("countdown"), [call(ident("dec"), [ident("n")])])
                )
            ))],
            call(ident("countdown"), [number(10)])
        )

        assert remix.run(program, bindings=COUNTING).to_python() == "done"

    def test_empty_binding_list(self, remix):
        """Test a bind expression with no bindings."""
        assert remix.run(bind([], number(42))) == RemixNumber(42)
