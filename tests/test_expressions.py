"""
Tests for layoutdsl expression nodes.

These tests verify:
    - Each Either shape carries its kind
    - Nodes are immutable
    - Equality is structural
"""

import pytest
from layoutdsl.expressions import (
    Clone,
    DefaultConstructor,
    Either,
    EitherKind,
    Expression,
    Identifier,
    Literal,
    Reference,
    ZERO_SPACING,
)


class TestEither:
    """Test the three value shapes."""

    def test_literal_keeps_text_and_value(self):
        """A literal remembers both its spelling and its decoded value."""
        lit = Literal('"Hello"', "Hello")
        assert lit.text == '"Hello"'
        assert lit.value == "Hello"
        assert lit.kind is EitherKind.LITERAL

    def test_identifier_kind(self):
        """Bare names are identifiers."""
        ident = Identifier("space")
        assert ident.name == "space"
        assert ident.kind is EitherKind.IDENTIFIER

    def test_reference_kind(self):
        """&-prefixed names are references."""
        ref = Reference("string")
        assert ref.name == "string"
        assert ref.kind is EitherKind.REFERENCE

    def test_all_shapes_are_either_and_expression(self):
        """Every shape is usable wherever an Either or Expression is expected."""
        for value in (Literal("1", 1), Identifier("x"), Reference("y")):
            assert isinstance(value, Either)
            assert isinstance(value, Expression)

    def test_kind_is_not_a_field(self):
        """kind is a class attribute, so it does not take part in construction."""
        with pytest.raises(TypeError):
            Identifier("x", EitherKind.REFERENCE)

    def test_identifier_and_reference_differ(self):
        """The same name by value and by reference are different values."""
        assert Identifier("string") != Reference("string")


class TestImmutability:
    """Nodes must not change once built."""

    def test_literal_immutable(self):
        lit = Literal("1.0", 1.0)
        with pytest.raises(AttributeError):
            lit.value = 2.0

    def test_identifier_immutable(self):
        ident = Identifier("fmt")
        with pytest.raises(AttributeError):
            ident.name = "other"

    def test_clone_immutable(self):
        clone = Clone(Identifier("fmt"))
        with pytest.raises(AttributeError):
            clone.target = Identifier("other")


class TestEmittedExpressions:
    """Test format expressions produced by the emitter."""

    def test_clone_equality(self):
        """Clones of the same name compare equal."""
        assert Clone(Identifier("fmt")) == Clone(Identifier("fmt"))
        assert Clone(Identifier("fmt")) != Clone(Identifier("other"))

    def test_default_constructors_are_equal(self):
        assert DefaultConstructor() == DefaultConstructor()

    def test_default_constructor_is_not_a_clone(self):
        assert DefaultConstructor() != Clone(Identifier("fmt"))

    def test_zero_spacing(self):
        """The spacing filled in for lines without one is the 0.0 literal."""
        assert ZERO_SPACING == Literal("0.0", 0.0)
        assert isinstance(ZERO_SPACING.value, float)
