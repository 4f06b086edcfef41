"""Testes do sistema de configuração e dos modelos básicos."""

from datetime import date
from pathlib import Path

import pytest

from config.schema import AIConfig, AppConfig, Holiday, PlannerConfig, Role
from config.defaults import (
    ASSESSMENTS,
    FIXED_HOLIDAYS,
    GRADE_OPTIONS,
    LETTER_OPTIONS,
    WEEKDAY_NAMES,
    default_app_config,
)
from config.manager import ConfigManager
from models.lesson import Lesson
from models.student import Student, sort_students
from models.user import User


# ─── CONFIGURAÇÃO PADRÃO ──────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_app_config_valid(self):
        """Configuração padrão completa é válida."""
        config = default_app_config()
        assert config.school_name == "Colégio Estrela Sirius"
        assert config.planner.default_start == "02-01"
        assert config.planner.default_end == "12-15"
        assert config.log_level == "WARNING"

    def test_fixed_holidays_table(self):
        """Tabela de feriados fixos tem os 8 feriados nacionais."""
        pairs = {(h.day, h.month) for h in FIXED_HOLIDAYS}
        assert pairs == {
            (1, 1), (21, 4), (1, 5), (7, 9), (12, 10), (2, 11), (15, 11), (25, 12),
        }

    def test_holidays_none_means_national_table(self):
        """holidays=None usa a tabela nacional."""
        planner = PlannerConfig()
        assert planner.holidays is None
        assert (25, 12) in planner.holiday_pairs
        assert len(planner.holiday_pairs) == 8

    def test_custom_holidays(self):
        """Lista própria substitui a tabela nacional."""
        planner = PlannerConfig(holidays=[Holiday(day=20, month=11, name="Consciência Negra")])
        assert planner.holiday_pairs == {(20, 11)}

    def test_assessment_weights(self):
        """Bimestral tem peso 2 e Leitura é bônus (peso 0)."""
        assert list(ASSESSMENTS) == ["m1", "m2", "m3", "res", "bi", "read"]
        assert ASSESSMENTS["bi"]["weight"] == 2
        assert ASSESSMENTS["read"]["weight"] == 0

    def test_class_options(self):
        assert len(GRADE_OPTIONS) == 7
        assert LETTER_OPTIONS[-1] == "Única"
        assert WEEKDAY_NAMES[0] == "Domingo"


# ─── VALIDAÇÃO PYDANTIC ───────────────────────────────────────────────────────

class TestPydanticValidation:
    def test_month_day_normalized(self):
        """'2-1' vira '02-01'."""
        assert PlannerConfig(default_start="2-1").default_start == "02-01"

    def test_month_day_invalid_format(self):
        with pytest.raises(Exception):
            PlannerConfig(default_start="2024-02-01")

    def test_month_day_out_of_range(self):
        with pytest.raises(Exception):
            PlannerConfig(default_end="13-01")

    @pytest.mark.parametrize("value", ["02-30", "04-31", "00-10"])
    def test_month_day_nonexistent_date(self, value):
        """Datas que não existem no calendário são recusadas."""
        with pytest.raises(Exception):
            PlannerConfig(default_start=value)

    def test_leap_day_accepted(self):
        planner = PlannerConfig(default_start="02-29")
        assert planner.period_for(2024)[0] == date(2024, 2, 29)
        assert planner.period_for(2023)[0] == date(2023, 2, 28)

    def test_period_for_year(self):
        assert PlannerConfig().period_for(2025) == (date(2025, 2, 1), date(2025, 12, 15))

    def test_holiday_bounds(self):
        with pytest.raises(Exception):
            Holiday(day=32, month=1)

    def test_log_level_uppercased(self):
        assert AppConfig(log_level="debug").log_level == "DEBUG"

    def test_log_level_unknown_raises(self):
        with pytest.raises(Exception):
            AppConfig(log_level="verbose")

    def test_ai_defaults(self):
        ai = AIConfig()
        assert ai.model == "gemini-2.5-flash"
        assert ai.api_key_env == "API_KEY"

    def test_student_name_stripped(self):
        s = Student(id="s1", name="  Ana Silva ", registration_number="12345")
        assert s.name == "Ana Silva"

    def test_student_blank_name_raises(self):
        with pytest.raises(Exception):
            Student(id="s1", name="   ", registration_number="12345")

    def test_sort_students_case_insensitive(self):
        students = [
            Student(id="1", name="bruno", registration_number="1"),
            Student(id="2", name="Ana", registration_number="2"),
        ]
        assert [s.name for s in sort_students(students)] == ["Ana", "bruno"]

    def test_lesson_day(self):
        lesson = Lesson(id="l1", class_id="c1", date="2024-03-04")
        assert lesson.day.isoformat() == "2024-03-04"
        assert lesson.lesson_index == 1
        assert lesson.completed is False

    def test_coordinator_is_read_only(self):
        assert User(id="u", name="X", role=Role.COORDINATOR).is_read_only
        assert not User(id="u", name="X").is_read_only


# ─── SALVAR / CARREGAR YAML ───────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Salvar e carregar preserva os valores."""
        config = default_app_config()
        mgr = ConfigManager(tmp_path / "app_config.yaml")

        mgr.save(config)
        assert mgr.path.exists()

        loaded = mgr.load()
        assert loaded.school_name == config.school_name
        assert loaded.planner.holiday_pairs == config.planner.holiday_pairs
        assert loaded.ai.model == config.ai.model

    def test_saved_file_has_section_comments(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "app_config.yaml")
        mgr.save(default_app_config())
        text = mgr.path.read_text(encoding="utf-8")
        assert text.startswith("# ====")
        assert "Diário de classe" in text

    def test_first_run_check_no_file(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "nao_existe.yaml")
        assert mgr.first_run_check() is True

    def test_first_run_check_with_file(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "app_config.yaml")
        mgr.save(default_app_config())
        assert mgr.first_run_check() is False

    def test_load_missing_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "nao_existe.yaml").load()

    def test_load_invalid_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "app_config.yaml"
        path.write_text("log_level: verbose\n", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigManager(path).load()

    def test_load_or_default_without_file(self, tmp_path: Path):
        config = ConfigManager(tmp_path / "nao_existe.yaml").load_or_default()
        assert config.school_name == "Colégio Estrela Sirius"

    def test_partial_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "app_config.yaml"
        path.write_text("school_name: Escola Teste\n", encoding="utf-8")
        config = ConfigManager(path).load()
        assert config.school_name == "Escola Teste"
        assert config.planner.default_start == "02-01"
