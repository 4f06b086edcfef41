"""Testes do relatório Excel e dos dados de demonstração."""

from datetime import date
from pathlib import Path

import pytest

from config.defaults import ASSESSMENTS, default_app_config
from data.fake_data import DemoDataGenerator
from export.excel_export import ExcelExporter
from export.helpers import COLORS, average_color, format_lesson_date, lesson_weekday_name
from gradebook.grading import GradeResult
from models.class_group import ClassGroup
from models.lesson import Lesson
from store import RegistrationNumberGenerator, SequentialIdGenerator, Store


# ─── Dados de teste ───────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def mini_class() -> ClassGroup:
    store = Store(ids=SequentialIdGenerator("id"), registration=RegistrationNumberGenerator(seed=1))
    store.login("Maria")
    cls = store.create_class("8º Ano - Fundamental II", "B", "Ciências")
    store.import_students(cls.id, "Ana Lima\nBruno Costa")
    store.save_planning(cls.id, "Célula\nTecidos", {2: 1})
    store.generate_diary(cls.id, date(2024, 3, 5), date(2024, 3, 19))
    ana, bruno = store.get_class(cls.id).students
    for aid in ("m1", "m2", "m3", "res", "bi"):
        store.set_score(cls.id, ana.id, aid, "8")
    store.set_score(cls.id, bruno.id, "bi", "7,0")
    return store.get_class(cls.id)


@pytest.fixture(scope="module")
def workbook(tmp_path_factory, mini_class: ClassGroup):
    from openpyxl import load_workbook
    out = tmp_path_factory.mktemp("xlsx") / "ciencias.xlsx"
    ExcelExporter(mini_class).export(out)
    return load_workbook(out)


# ─── Auxiliares ───────────────────────────────────────────────────────────────

class TestHelpers:
    def test_format_lesson_date(self):
        assert format_lesson_date(Lesson(id="l", class_id="c", date="2024-03-04")) == "04/03"

    def test_lesson_weekday_name(self):
        assert lesson_weekday_name(Lesson(id="l", class_id="c", date="2024-03-03")) == "Domingo"

    def test_average_color(self):
        assert average_color(GradeResult(display="6,0", value=6.0)) == COLORS["passing"]
        assert average_color(GradeResult(display="5,9", value=5.94)) == COLORS["failing"]

    def test_palette_entries(self):
        """Só as cores usadas pela exportação."""
        assert set(COLORS) == {"header", "failing", "passing", "empty"}


# ─── Excel ────────────────────────────────────────────────────────────────────

class TestExcelExport:
    def test_creates_file(self, tmp_path: Path, mini_class: ClassGroup):
        """export() cria o .xlsx, inclusive a pasta."""
        out = tmp_path / "sub" / "turma.xlsx"
        ExcelExporter(mini_class).export(out)
        assert out.exists()
        assert out.stat().st_size > 0

    def test_sheets(self, workbook):
        assert [ws.title for ws in workbook.worksheets] == ["Notas", "Diário"]

    def test_title(self, workbook):
        ws = workbook["Notas"]
        assert ws.cell(row=1, column=1).value == "Colégio Estrela Sirius - Boletim"
        assert ws.cell(row=2, column=1).value == "8º Ano - Fundamental II - Turma B - Ciências"

    def test_grade_header(self, workbook):
        ws = workbook["Notas"]
        header = [c.value for c in ws[4]]
        assert header == ["Nº", "Aluno", "Matrícula"] + \
            [a["short"] for a in ASSESSMENTS.values()] + ["Média"]

    def test_grade_rows(self, workbook):
        ws = workbook["Notas"]
        ana = [c.value for c in ws[5]]
        bruno = [c.value for c in ws[6]]
        assert ana[1] == "Ana Lima"
        assert ana[3] == "8"
        assert ana[-1] == "8,0"
        assert bruno[1] == "Bruno Costa"
        assert bruno[7] == "7,0"
        assert bruno[-1] == "3,5"

    def test_diary_rows(self, workbook):
        ws = workbook["Diário"]
        assert [c.value for c in ws[4]] == ["Data", "Dia", "Aula", "Tópico", "Conteúdo"]
        rows = [[c.value for c in row] for row in ws.iter_rows(min_row=5)]
        assert [r[0] for r in rows] == ["05/03", "12/03", "19/03"]
        assert rows[0][1] == "Terça"
        assert rows[0][3] == "Célula"
        assert not rows[2][3]

    def test_custom_school_name(self, tmp_path: Path, mini_class: ClassGroup):
        from openpyxl import load_workbook
        out = tmp_path / "escola.xlsx"
        ExcelExporter(mini_class, school_name="Escola Teste").export(out)
        ws = load_workbook(out)["Diário"]
        assert ws.cell(row=1, column=1).value == "Escola Teste - Diário de Classe"


# ─── Dados de demonstração ────────────────────────────────────────────────────

class TestDemoData:
    def test_generate(self):
        store = DemoDataGenerator(seed=42, students_per_class=5).generate(year=2024)
        assert store.current_user is not None
        assert len(store.classes) == 4
        for cls in store.classes:
            assert len(cls.students) == 5
            assert cls.lessons
            assert cls.lessons[0].topic
            assert all(l.date.startswith("2024-") for l in cls.lessons)
            assert cls.filled_grades > 0

    def test_reproducible(self):
        a = DemoDataGenerator(seed=7).generate(year=2024)
        b = DemoDataGenerator(seed=7).generate(year=2024)
        assert [c.name for c in a.classes] == [c.name for c in b.classes]
        assert [s.name for s in a.classes[0].students] == [s.name for s in b.classes[0].students]
        assert a.classes[0].grades == b.classes[0].grades

    def test_reading_bonus_clamped(self):
        store = DemoDataGenerator(seed=1).generate(year=2024)
        cls = store.classes[0]
        first = cls.students[0]
        assert cls.grades[first.id]["read"] == "5"
        assert store.averages(cls.id)[first.id].value <= 10.0

    def test_uses_config_period(self):
        config = default_app_config()
        config.planner.default_start = "03-01"
        config.planner.default_end = "03-31"
        store = DemoDataGenerator(config, seed=3).generate(year=2024)
        for cls in store.classes:
            assert all("2024-03-01" <= l.date <= "2024-03-31" for l in cls.lessons)

    def test_export_all_classes(self, tmp_path: Path):
        store = DemoDataGenerator(seed=5, students_per_class=3).generate(year=2024)
        for cls in store.classes:
            out = tmp_path / f"{cls.id}.xlsx"
            ExcelExporter(cls).export(out)
            assert out.exists()
