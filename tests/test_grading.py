"""Testes do cálculo de médias e do lançamento de notas."""

import pytest

from gradebook.grading import (
    FillMode,
    ScoreValidationError,
    bulk_fill,
    compute_average,
    format_score,
    normalize_score,
    parse_score,
    set_score,
)


# ─── Média ────────────────────────────────────────────────────────────────────

class TestComputeAverage:
    def test_all_tens(self):
        scores = {"m1": "10", "m2": "10", "m3": "10", "res": "10", "bi": "10"}
        result = compute_average(scores)
        assert result.display == "10,0"
        assert result.value == pytest.approx(10.0)

    def test_empty_is_zero(self):
        result = compute_average({})
        assert result.display == "0,0"
        assert result.value == 0.0

    def test_reading_bonus_clamped(self):
        """Bônus que passa de 10 é limitado a 10,0."""
        scores = {"m1": "10", "m2": "10", "m3": "10", "res": "10", "bi": "10", "read": "5"}
        assert compute_average(scores).display == "10,0"

    def test_bimonthly_weighs_double(self):
        """Só a bimestral com 10: (0 + 0 + 2 × 10) / 4 = 5,0."""
        assert compute_average({"bi": "10"}).display == "5,0"

    def test_weighted_formula(self):
        # mensal = 7, base = (7 + 6 + 2 × 8) / 4 = 7,25
        scores = {"m1": "6", "m2": "7", "m3": "8", "res": "6", "bi": "8"}
        result = compute_average(scores)
        assert result.value == pytest.approx(7.25)
        assert result.display == "7,3"

    def test_reading_bonus_added(self):
        scores = {"bi": "10", "read": "1.5"}
        assert compute_average(scores).display == "6,5"

    def test_invalid_text_counts_as_zero(self):
        assert compute_average({"bi": "abc"}).display == "0,0"

    def test_comma_decimal_accepted(self):
        assert compute_average({"bi": "9,0"}).display == "4,5"

    def test_always_between_zero_and_ten(self):
        """Qualquer combinação de notas válidas fica em [0, 10]."""
        import random
        rng = random.Random(2024)
        values = ["", "0", "10"] + [f"{rng.uniform(0, 10):.1f}" for _ in range(20)]
        for _ in range(500):
            scores = {aid: rng.choice(values) for aid in ("m1", "m2", "m3", "res", "bi", "read")}
            assert 0.0 <= compute_average(scores).value <= 10.0


# ─── Conversão e validação ────────────────────────────────────────────────────

class TestScoreParsing:
    def test_parse_score(self):
        assert parse_score("7.5") == 7.5
        assert parse_score("7,5") == 7.5
        assert parse_score("") == 0.0
        assert parse_score(None) == 0.0
        assert parse_score("nan") == 0.0

    def test_normalize_comma(self):
        assert normalize_score("8,5") == "8.5"

    def test_normalize_empty_clears(self):
        assert normalize_score("  ") == ""

    def test_normalize_empty_not_allowed(self):
        with pytest.raises(ScoreValidationError):
            normalize_score("", allow_empty=False)

    @pytest.mark.parametrize("text", ["abc", "-1", "10.5", "inf"])
    def test_normalize_rejects(self, text):
        with pytest.raises(ScoreValidationError):
            normalize_score(text)

    def test_normalize_bounds_inclusive(self):
        assert normalize_score("0") == "0"
        assert normalize_score("10") == "10"

    def test_format_score(self):
        assert format_score(6.0) == "6,0"
        assert format_score(8.04) == "8,0"

    @pytest.mark.parametrize("value,expected", [
        (7.25, "7,3"), (5.25, "5,3"), (8.75, "8,8"), (0.05, "0,1"), (10.0, "10,0"),
    ])
    def test_format_score_rounds_half_up(self, value, expected):
        """Meio décimo arredonda para cima, como no boletim impresso."""
        assert format_score(value) == expected

    def test_quarter_average_rounds_up(self):
        # (5 + 5 + 2 × 5,5) / 4 = 5,25
        assert compute_average({"m1": "5", "m2": "5", "m3": "5", "res": "5", "bi": "5.5"}).display == "5,3"


# ─── Lançamento ───────────────────────────────────────────────────────────────

class TestSetScore:
    def test_returns_new_map(self):
        grades = {"s1": {"m1": "5"}}
        updated = set_score(grades, "s1", "m2", "7")
        assert updated == {"s1": {"m1": "5", "m2": "7"}}
        assert grades == {"s1": {"m1": "5"}}

    def test_new_student_row(self):
        assert set_score({}, "s2", "bi", "9") == {"s2": {"bi": "9"}}

    def test_unknown_assessment(self):
        with pytest.raises(KeyError):
            set_score({}, "s1", "xyz", "5")


class TestBulkFill:
    def test_fill_empty_keeps_existing(self):
        grades = {"s1": {"m1": "5"}}
        updated, written = bulk_fill(grades, ["s1", "s2"], "m1", "10", FillMode.FILL_EMPTY)
        assert updated["s1"]["m1"] == "5"
        assert updated["s2"]["m1"] == "10"
        assert written == 1

    def test_overwrite_all(self):
        grades = {"s1": {"m1": "5"}}
        updated, written = bulk_fill(grades, ["s1", "s2"], "m1", "10", FillMode.OVERWRITE_ALL)
        assert updated["s1"]["m1"] == "10"
        assert updated["s2"]["m1"] == "10"
        assert written == 2

    def test_empty_string_counts_as_missing(self):
        grades = {"s1": {"m1": ""}}
        updated, written = bulk_fill(grades, ["s1"], "m1", "8", "fill-empty")
        assert updated["s1"]["m1"] == "8"
        assert written == 1

    def test_invalid_value_writes_nothing(self):
        grades = {"s1": {}}
        with pytest.raises(ScoreValidationError):
            bulk_fill(grades, ["s1"], "m1", "11")
        assert grades == {"s1": {}}

    def test_comma_value_normalized(self):
        updated, _ = bulk_fill({}, ["s1"], "res", "7,5")
        assert updated["s1"]["res"] == "7.5"
