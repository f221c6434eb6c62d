"""Tests for toxic field parsing and validation (core/fields.py).

Every function under test is pure — no mocks required.
"""

from __future__ import annotations

import pytest

from toxiproxy_cli.core.fields import (
    build_attributes,
    merge_attributes,
    parse_fields,
    resolve_kind,
)
from toxiproxy_cli.core.models import (
    GenericAttributes,
    LatencyAttributes,
    SlicerAttributes,
    ToxicKind,
)
from toxiproxy_cli.exceptions import (
    FieldFormatError,
    FieldValueError,
    InvalidToxicTypeError,
    UnknownToxicFieldError,
)


# ---------------------------------------------------------------------------
# parse_fields — happy path
# ---------------------------------------------------------------------------

class TestParseFields:
    def test_two_pairs(self) -> None:
        assert parse_fields("latency=100,jitter=50") == {"latency": 100, "jitter": 50}

    def test_single_pair(self) -> None:
        assert parse_fields("rate=1000") == {"rate": 1000}

    def test_signed_values(self) -> None:
        assert parse_fields("a=-5,b=+7") == {"a": -5, "b": 7}

    def test_zero(self) -> None:
        assert parse_fields("timeout=0") == {"timeout": 0}

    def test_last_duplicate_wins(self) -> None:
        assert parse_fields("latency=1,latency=2") == {"latency": 2}

    def test_values_are_ints(self) -> None:
        parsed = parse_fields("delay=10")
        assert type(parsed["delay"]) is int


# ---------------------------------------------------------------------------
# parse_fields — rejection
# ---------------------------------------------------------------------------

class TestParseFieldsErrors:
    def test_empty_string_rejected(self) -> None:
        with pytest.raises(FieldFormatError, match="key=value"):
            parse_fields("")

    def test_missing_equals_rejected(self) -> None:
        with pytest.raises(FieldFormatError):
            parse_fields("latency100")

    def test_one_bad_pair_rejects_all(self) -> None:
        with pytest.raises(FieldFormatError):
            parse_fields("latency=100,jitter")

    def test_trailing_comma_rejected(self) -> None:
        with pytest.raises(FieldFormatError):
            parse_fields("latency=100,")

    def test_non_integer_rejected(self) -> None:
        with pytest.raises(FieldValueError, match="integer"):
            parse_fields("latency=100,jitter=abc")

    @pytest.mark.parametrize("value", ["1.5", "", " 5", "1_000", "0x10", "٣"])
    def test_not_plain_base_ten(self, value: str) -> None:
        with pytest.raises(FieldValueError):
            parse_fields(f"latency={value}")

    def test_only_first_equals_splits(self) -> None:
        with pytest.raises(FieldValueError):
            parse_fields("latency=1=2")


# ---------------------------------------------------------------------------
# resolve_kind
# ---------------------------------------------------------------------------

class TestResolveKind:
    @pytest.mark.parametrize("kind", list(ToxicKind))
    def test_known_kinds(self, kind: ToxicKind) -> None:
        assert resolve_kind(kind.value) is kind

    def test_service_defined_kind_passes_through(self) -> None:
        assert resolve_kind("noop") == "noop"
        assert not isinstance(resolve_kind("noop"), ToxicKind)

    def test_surrounding_whitespace_ignored(self) -> None:
        assert resolve_kind(" latency ") is ToxicKind.LATENCY

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_blank_type_lists_known(self, raw: str) -> None:
        with pytest.raises(InvalidToxicTypeError) as exc_info:
            resolve_kind(raw)
        assert exc_info.value.hint is not None
        assert "latency" in exc_info.value.hint


# ---------------------------------------------------------------------------
# build_attributes / merge_attributes
# ---------------------------------------------------------------------------

class TestBuildAttributes:
    def test_latency(self) -> None:
        attrs = build_attributes(ToxicKind.LATENCY, {"latency": 100, "jitter": 50})
        assert attrs == LatencyAttributes(latency=100, jitter=50)

    def test_missing_fields_default_to_zero(self) -> None:
        attrs = build_attributes(ToxicKind.SLICER, {"average_size": 64})
        assert attrs == SlicerAttributes(average_size=64, size_variation=0, delay=0)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(UnknownToxicFieldError, match="rate") as exc_info:
            build_attributes(ToxicKind.LATENCY, {"rate": 10})
        assert exc_info.value.hint is not None
        assert "jitter" in exc_info.value.hint

    def test_reserved_names_are_not_fields(self) -> None:
        with pytest.raises(UnknownToxicFieldError):
            build_attributes(ToxicKind.TIMEOUT, {"stream": 1})

    def test_service_defined_kind_accepts_any_field(self) -> None:
        attrs = build_attributes("noop", {"x": 1, "y": -2})
        assert attrs == GenericAttributes({"x": 1, "y": -2})


class TestMergeAttributes:
    def test_overwrites_only_given_fields(self) -> None:
        existing = LatencyAttributes(latency=100, jitter=50)
        merged = merge_attributes(ToxicKind.LATENCY, existing, {"jitter": 25})
        assert merged == LatencyAttributes(latency=100, jitter=25)
        assert existing.jitter == 50

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(UnknownToxicFieldError):
            merge_attributes(ToxicKind.LATENCY, LatencyAttributes(), {"delay": 1})

    def test_service_defined_kind_merges_open_map(self) -> None:
        existing = GenericAttributes({"x": 1, "y": 2})
        merged = merge_attributes("noop", existing, {"y": 5, "z": 0})
        assert merged == GenericAttributes({"x": 1, "y": 5, "z": 0})
        assert existing.values == {"x": 1, "y": 2}
