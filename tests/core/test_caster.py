"""Tests for typeref.core.caster (input shapes and resolution)."""

import json

import pytest

from typeref.core.caster import Caster, InputShape, Symbol, classify, is_entity
from typeref.core.errors import ResolutionFailure, UnresolvableIdentifierError
from typeref.core.identifier import Identifier, qualname_segments
from typeref.core.registry import Registry

from tests._support.entities import (
    Nested,
    RandomModule,
    StrategyA,
    StrategyB,
    helper_function,
)


@pytest.fixture
def caster(registry):
    return Caster(registry)


# =========================================================================
# classify
# =========================================================================


class TestClassify:
    @pytest.mark.parametrize(
        "value, shape",
        [
            (None, InputShape.NONE),
            (StrategyA, InputShape.IDENTIFIER),
            (json, InputShape.IDENTIFIER),
            (helper_function, InputShape.IDENTIFIER),
            (Identifier.parse("A"), InputShape.IDENTIFIER),
            (Symbol("A"), InputShape.SYMBOL),
            ("A", InputShape.TEXT),
            (42, InputShape.UNSUPPORTED),
            (b"A", InputShape.UNSUPPORTED),
            (StrategyA(), InputShape.UNSUPPORTED),
        ],
    )
    def test_shapes(self, value, shape):
        assert classify(value) is shape

    def test_is_entity(self):
        assert is_entity(StrategyA)
        assert not is_entity("StrategyA")

    def test_symbol_is_a_string(self):
        assert Symbol("MoreNesting") == "MoreNesting"
        assert repr(Symbol("x")) == "Symbol('x')"


# =========================================================================
# cast
# =========================================================================


class TestCastAbsent:
    def test_none_propagates(self, caster):
        assert caster.cast(None) is None


class TestCastIdentifierShaped:
    def test_allowed_entity(self, caster):
        assert caster.cast(StrategyA).handle is StrategyA

    def test_allowed_identifier_returned(self, caster, registry):
        ident = registry.identifiers[3]
        assert caster.cast(ident) is ident

    def test_foreign_identifier_for_allowed_entity(self, caster, registry):
        assert caster.cast(Identifier(("Other",), StrategyB)) is registry.identifiers[1]

    def test_entity_not_allowed(self, caster):
        with pytest.raises(UnresolvableIdentifierError) as exc:
            caster.cast(RandomModule)
        assert exc.value.reason is ResolutionFailure.NOT_ALLOWED
        assert exc.value.value is RandomModule

    def test_module_entities(self):
        caster = Caster(Registry([json]))
        assert caster.cast(json).handle is json
        assert caster.cast("json").handle is json

    def test_function_entities(self):
        caster = Caster(Registry([helper_function], segments_of=qualname_segments))
        assert caster.cast("helper_function").handle is helper_function


class TestCastSymbolAndText:
    def test_bare_last_segment(self, caster):
        assert caster.cast("MoreNesting").handle is Nested.MyClass.MoreNesting

    def test_partial_suffix(self, caster):
        assert caster.cast("MyClass::MoreNesting").handle is Nested.MyClass.MoreNesting

    def test_symbol(self, caster):
        assert caster.cast(Symbol("StrategyA")).handle is StrategyA

    def test_qualified_form(self, caster):
        assert caster.cast("::Nested::StrategyA").handle is Nested.StrategyA

    def test_unknown_text(self, caster, registry):
        with pytest.raises(UnresolvableIdentifierError) as exc:
            caster.cast("RandomModule")
        assert exc.value.reason is ResolutionFailure.UNKNOWN_ALIAS
        assert exc.value.aliases == registry.index.keys()
        assert exc.value.allowed == registry.identifiers

    def test_unknown_symbol(self, caster):
        with pytest.raises(UnresolvableIdentifierError):
            caster.cast(Symbol("WrongStringThatIsNotAModule"))

    def test_case_sensitive(self, caster):
        with pytest.raises(UnresolvableIdentifierError):
            caster.cast("morenesting")

    def test_no_whitespace_trimming(self, caster):
        with pytest.raises(UnresolvableIdentifierError):
            caster.cast(" MoreNesting")

    def test_enum_symbol_needs_compat_mode(self, caster):
        with pytest.raises(UnresolvableIdentifierError):
            caster.cast("more_nesting")


class TestCastUnsupported:
    @pytest.mark.parametrize("value", [42, 3.5, b"StrategyA", ["StrategyA"], StrategyA()])
    def test_unsupported_shapes(self, caster, value):
        with pytest.raises(UnresolvableIdentifierError) as exc:
            caster.cast(value)
        assert exc.value.reason is ResolutionFailure.UNSUPPORTED_INPUT


# =========================================================================
# Properties over the scenario
# =========================================================================


class TestAliasCompleteness:
    def test_every_alias_resolves_without_collisions(self):
        allowed = [StrategyB, Nested.MyClass, Nested.MyClass.MoreNesting]
        registry = Registry(allowed, compat_mode=True, segments_of=qualname_segments)
        caster = Caster(registry)
        for identifier in registry.identifiers:
            for alias in identifier.aliases(compat_mode=True):
                assert caster.cast(alias) is identifier, alias


class TestTieBreak:
    def test_later_registration_wins(self):
        alpha = Identifier.parse("Alpha::Shared")
        beta = Identifier.parse("Beta::Shared")
        assert Caster(Registry([alpha, beta])).cast("Shared") is beta
        assert Caster(Registry([beta, alpha])).cast("Shared") is alpha

    def test_first_wins_policy(self):
        alpha = Identifier.parse("Alpha::Shared")
        beta = Identifier.parse("Beta::Shared")
        caster = Caster(Registry([alpha, beta], collision_policy="first_wins"))
        assert caster.cast("Shared") is alpha

    def test_compat_symbol_collision(self, compat_registry):
        # StrategyA and Nested::StrategyA both answer to "strategy_a".
        assert Caster(compat_registry).cast("strategy_a").handle is Nested.StrategyA

    def test_canonical_name_resolves_to_its_owner(self, caster):
        assert caster.cast("StrategyA").handle is StrategyA
        assert caster.cast("Nested::StrategyA").handle is Nested.StrategyA


class TestCompatMode:
    def test_enum_symbol(self, compat_registry):
        caster = Caster(compat_registry)
        assert caster.cast("more_nesting").handle is Nested.MyClass.MoreNesting
        assert caster.cast(Symbol("my_class")).handle is Nested.MyClass

    def test_exact_names_still_work(self, compat_registry):
        assert Caster(compat_registry).cast("MoreNesting").handle is Nested.MyClass.MoreNesting


class TestCastEntity:
    def test_returns_entity(self, caster):
        assert caster.cast_entity("MoreNesting") is Nested.MyClass.MoreNesting

    def test_none(self, caster):
        assert caster.cast_entity(None) is None

    def test_callable(self, caster):
        assert caster("StrategyB").handle is StrategyB
