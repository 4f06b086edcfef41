"""Testes do painel e das tabelas exibidas no terminal."""

from datetime import date

import pytest

from analysis.dashboard import compute_dashboard, filter_classes, greeting
from shell.render import (
    dashboard_table,
    diary_rows,
    diary_table,
    gradebook_rows,
    gradebook_table,
    roster_rows,
    schedule_rows,
)
from store import RegistrationNumberGenerator, SequentialIdGenerator, Store


@pytest.fixture
def store() -> Store:
    store = Store(ids=SequentialIdGenerator("id"), registration=RegistrationNumberGenerator(seed=3))
    store.login("Maria")
    math = store.create_class("6º Ano - Fundamental II", "A", "Matemática")
    store.import_students(math.id, "Bruno\nAna")
    store.save_planning(math.id, "Frações\nDecimais", {1: 1, 3: 2})
    store.generate_diary(math.id, date(2024, 3, 4), date(2024, 3, 6))
    store.bulk_fill(math.id, "bi", "10")

    hist = store.create_class("1ª Série - Ensino Médio", "Única", "História")
    store.import_students(hist.id, "Carla")
    return store


# ─── Painel ───────────────────────────────────────────────────────────────────

class TestDashboard:
    def test_totals(self, store: Store):
        stats = compute_dashboard(store.classes)
        assert stats.total_classes == 2
        assert stats.total_students == 3
        assert stats.total_lessons == 3
        assert stats.filled_grades == 2
        assert not stats.is_empty

    def test_activity_per_class(self, store: Store):
        activity = compute_dashboard(store.classes).activity
        assert [(a.subject, a.students, a.lessons) for a in activity] == [
            ("Matemática", 2, 3), ("História", 1, 0),
        ]

    def test_empty(self):
        stats = compute_dashboard([])
        assert stats.is_empty
        assert stats.total_students == 0

    def test_filter_by_subject_case_insensitive(self, store: Store):
        assert [c.subject for c in filter_classes(store.classes, "histó")] == ["História"]

    def test_filter_by_name(self, store: Store):
        assert [c.subject for c in filter_classes(store.classes, "turma a")] == ["Matemática"]

    def test_filter_blank_returns_all(self, store: Store):
        assert len(filter_classes(store.classes, "  ")) == 2

    @pytest.mark.parametrize("hour,expected", [
        (0, "Bom dia"), (11, "Bom dia"), (12, "Boa tarde"), (17, "Boa tarde"), (18, "Boa noite"),
    ])
    def test_greeting(self, hour, expected):
        assert greeting(hour) == expected


# ─── Tabelas ──────────────────────────────────────────────────────────────────

class TestRender:
    def test_roster_rows(self, store: Store):
        rows = roster_rows(store.classes[0])
        assert [r[:2] for r in rows] == [["1", "Ana"], ["2", "Bruno"]]

    def test_schedule_rows(self, store: Store):
        assert schedule_rows(store.classes[0]) == [["Segunda", "1"], ["Quarta", "2"]]

    def test_diary_rows(self, store: Store):
        rows = diary_rows(store.classes[0])
        assert rows[0] == ["1", "04/03", "Segunda", "1ª", "Frações", "Frações"]
        assert rows[1][1:5] == ["06/03", "Quarta", "1ª", "Decimais"]
        assert rows[2][3:5] == ["2ª", "—"]

    def test_diary_rows_limit(self, store: Store):
        assert len(diary_rows(store.classes[0], limit=2)) == 2

    def test_long_content_truncated(self, store: Store):
        cls = store.classes[0]
        store.update_lesson(cls.id, cls.lessons[0].id, content="x" * 100)
        row = diary_rows(store.get_class(cls.id))[0]
        assert len(row[5]) == 60
        assert row[5].endswith("...")

    def test_gradebook_rows(self, store: Store):
        rows = gradebook_rows(store.classes[0])
        # Nº, nome, M1, M2, M3, Pesq, Bim, Leit, Média
        assert rows[0] == ["1", "Ana", "-", "-", "-", "-", "10", "-", "5,0"]

    def test_tables_build(self, store: Store):
        cls = store.classes[0]
        assert dashboard_table(compute_dashboard(store.classes)).row_count == 3
        assert diary_table(cls).row_count == 3
        assert gradebook_table(cls).row_count == 2
