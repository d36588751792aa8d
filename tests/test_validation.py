"""Tests for roundtrip.validation."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from roundtrip import validation as V
from roundtrip.either import Left, Right
from roundtrip.errors import DecodeFailure
from roundtrip.maybe import NOTHING, Just
from roundtrip.validation import Invalid, Valid


class TestMergeFailures:
    def test_lists_concatenate_without_dedup(self):
        assert V.merge_failures(["a"], ["a", "b"]) == ["a", "a", "b"]

    def test_mappings_merge(self):
        assert V.merge_failures({"x": "1"}, {"y": "2"}) == {"x": "1", "y": "2"}

    def test_later_key_wins(self):
        assert V.merge_failures({"x": "1"}, {"x": "2"}) == {"x": "2"}

    def test_mixed_shapes_raise(self):
        with pytest.raises(TypeError):
            V.merge_failures(["a"], {"x": "1"})


class TestMethods:
    def test_map_and_map_error(self):
        assert Valid(1).map(lambda x: x + 1) == Valid(2)
        assert Invalid(["e"]).map(lambda x: x + 1) == Invalid(["e"])
        assert Invalid(["e"]).map_error(lambda es: es + ["f"]) == Invalid(["e", "f"])
        assert Valid(1).map_error(lambda es: es + ["f"]) == Valid(1)

    def test_match_case(self):
        cases = {"invalid": len, "valid": lambda v: v * 10}
        assert Valid(2).match_case(**cases) == 20
        assert Invalid(["a", "b"]).match_case(**cases) == 2

    def test_or_else_is_lazy(self):
        calls = []

        def fallback():
            calls.append(1)
            return Valid(2)

        assert Valid(1).or_else(fallback) == Valid(1)
        assert calls == []
        assert Invalid(["e"]).or_else(fallback) == Valid(2)
        assert Invalid(["e"]).or_else(lambda: Invalid(["f"])) == Invalid(["f"])

    def test_replace_merges_failures(self):
        assert Valid(1).replace(Valid(2)) == Valid(2)
        assert Valid(1).replace(Invalid(["b"])) == Invalid(["b"])
        assert Invalid(["a"]).replace(Valid(2)) == Invalid(["a"])
        assert Invalid(["a"]).replace(Invalid(["b"])) == Invalid(["a", "b"])
        assert Invalid({"x": "1"}).replace(Invalid({"y": "2"})) == Invalid({"x": "1", "y": "2"})

    def test_replace_pure_and_void_out(self):
        assert Valid(1).replace_pure("a") == Valid("a")
        assert Invalid(["e"]).replace_pure("a") == Invalid(["e"])
        assert Valid(1).void_out() == Valid(())

    def test_projections(self):
        assert Valid(1).to_either() == Right(1)
        assert Invalid(["e"]).to_either() == Left(["e"])
        assert Valid(1).to_maybe() == Just(1)
        assert Invalid(["e"]).to_maybe() == NOTHING
        assert Invalid(["e"]).default_with(0) == 0

    def test_unwrap(self):
        assert Valid(1).unwrap() == 1
        with pytest.raises(DecodeFailure) as exc_info:
            Invalid({"bar": "Expected a string"}).unwrap()
        assert exc_info.value.errors == {"bar": "Expected a string"}
        assert "bar: Expected a string" in str(exc_info.value)

    def test_no_chain(self):
        assert not hasattr(Valid(1), "chain")
        assert not hasattr(Invalid(["e"]), "chain")


class TestLifting:
    def test_lift_f_all_valid(self):
        assert V.lift_f(lambda a, b: a + b, Valid(1), Valid(2)) == Valid(3)

    def test_lift_f_collects_every_failure(self):
        result = V.lift_f(lambda a, b, c: a, Invalid(["a"]), Valid(2), Invalid(["c"]))
        assert result == Invalid(["a", "c"])

    def test_lift_o_aggregates(self):
        result = V.lift_o({"bar": Invalid(["e1"]), "baz": Invalid(["e2"])})
        assert result == Invalid(["e1", "e2"])

    def test_lift_o_aggregates_keyed_failures(self):
        result = V.lift_o({"bar": Invalid({"bar": "e1"}), "baz": Invalid({"baz": "e2"})})
        assert result == Invalid({"bar": "e1", "baz": "e2"})

    def test_lift_o_valid(self):
        assert V.lift_o({"bar": Valid(1), "baz": Valid("x")}) == Valid({"bar": 1, "baz": "x"})

    def test_sequence(self):
        assert V.sequence([]) == Valid([])
        assert V.sequence([Valid(1), Invalid(["a"]), Invalid(["b"])]) == Invalid(["a", "b"])

    def test_map_m_and_for_m(self):
        def check(x):
            return Valid(x) if x > 0 else Invalid([f"{x} is not positive"])

        assert V.map_m(check, [1, 2]) == Valid([1, 2])
        assert V.for_m([1, -1, 0], check) == Invalid(["-1 is not positive", "0 is not positive"])

    def test_zip_with_m(self):
        def pair(a, b):
            return Valid(a + b) if a == b else Invalid([f"{a} != {b}"])

        assert V.zip_with_m(pair, [1, 2], [1, 2]) == Valid([2, 4])
        assert V.zip_with_m(pair, [1, 2, 3], [0, 2, 4]) == Invalid(["1 != 0", "3 != 4"])

    def test_map_and_unzip_with(self):
        assert V.map_and_unzip_with(lambda x: Valid((x, x * 2)), [1, 2]) == Valid(([1, 2], [2, 4]))

    def test_failures_and_successful(self):
        vs = [Valid(1), Invalid(["a"]), Valid(2)]
        assert V.failures(vs) == [["a"]]
        assert V.successful(vs) == [1, 2]
        assert V.is_valid(vs[0]) and V.is_invalid(vs[1])


class TestAggregationProperties:
    @given(st.lists(st.one_of(st.integers().map(Valid), st.text().map(lambda t: Invalid([t])))))
    def test_sequence_reports_every_failure_in_order(self, vs):
        expected_failures = [v.failure[0] for v in vs if isinstance(v, Invalid)]
        result = V.sequence(vs)
        if expected_failures:
            assert result == Invalid(expected_failures)
        else:
            assert result == Valid([v.value for v in vs])
