"""Relatório Excel de uma turma: boletim e diário (openpyxl).

Somente saída; o arquivo não é lido de volta pela aplicação.
"""

from pathlib import Path

from config.defaults import ASSESSMENTS
from gradebook.grading import class_averages
from models.class_group import ClassGroup

from export.helpers import (
    COLORS, average_color, format_lesson_date, lesson_weekday_name, today_str,
)


class ExcelExporter:
    """Exporta uma turma para um arquivo .xlsx com as planilhas "Notas" e "Diário"."""

    # Larguras de coluna (unidades do Excel)
    COL_NUM_W     = 5
    COL_NAME_W    = 35
    COL_REG_W     = 12
    COL_SCORE_W   = 9
    COL_TOPIC_W   = 40
    COL_CONTENT_W = 70

    def __init__(self, class_group: ClassGroup, school_name: str = "Colégio Estrela Sirius"):
        self.cls = class_group
        self.school_name = school_name

    # ─── API pública ──────────────────────────────────────────────────────────

    def export(self, output_path: Path) -> None:
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Remove a planilha vazia padrão

        self._sheet_notas(wb)
        self._sheet_diario(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)

    # ─── Estilos ──────────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_title(self, ws, title: str) -> int:
        """Título da turma nas duas primeiras linhas; retorna a próxima linha livre."""
        from openpyxl.styles import Font
        ws.cell(row=1, column=1, value=f"{self.school_name} - {title}").font = Font(bold=True, size=14)
        ws.cell(row=2, column=1, value=f"{self.cls.name} - {self.cls.subject}")
        ws.cell(row=2, column=5, value=f"Gerado em: {today_str()}")
        return 4

    def _write_header(self, ws, row: int, headers: list[str]) -> None:
        from openpyxl.styles import Font, Alignment
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            c = ws.cell(row=row, column=col, value=text)
            c.fill = fill
            c.font = Font(bold=True, color="FFFFFF")
            c.alignment = Alignment(horizontal="center", vertical="center")
            c.border = border

    # ─── Planilha: Notas ──────────────────────────────────────────────────────

    def _sheet_notas(self, wb) -> None:
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        ws = wb.create_sheet(title="Notas")
        row = self._write_title(ws, "Boletim")

        headers = ["Nº", "Aluno", "Matrícula"] + [a["short"] for a in ASSESSMENTS.values()] + ["Média"]
        self._write_header(ws, row, headers)
        row += 1

        averages = class_averages(self.cls)
        border = self._thin_border()
        for idx, student in enumerate(self.cls.students, 1):
            scores = self.cls.grades.get(student.id, {})
            ws.cell(row=row, column=1, value=idx).border = border
            ws.cell(row=row, column=2, value=student.name).border = border
            ws.cell(row=row, column=3, value=student.registration_number).border = border
            for col, assessment_id in enumerate(ASSESSMENTS, 4):
                raw = scores.get(assessment_id, "")
                c = ws.cell(row=row, column=col, value=raw.replace(".", ",") if raw else "")
                c.border = border
                if not raw:
                    c.fill = self._fill(COLORS["empty"])
            result = averages[student.id]
            c = ws.cell(row=row, column=4 + len(ASSESSMENTS), value=result.display)
            c.font = Font(bold=True)
            c.fill = self._fill(average_color(result))
            c.border = border
            row += 1

        ws.column_dimensions["A"].width = self.COL_NUM_W
        ws.column_dimensions["B"].width = self.COL_NAME_W
        ws.column_dimensions["C"].width = self.COL_REG_W
        for col in range(4, 5 + len(ASSESSMENTS)):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_SCORE_W

    # ─── Planilha: Diário ─────────────────────────────────────────────────────

    def _sheet_diario(self, wb) -> None:
        from openpyxl.styles import Alignment

        ws = wb.create_sheet(title="Diário")
        row = self._write_title(ws, "Diário de Classe")

        self._write_header(ws, row, ["Data", "Dia", "Aula", "Tópico", "Conteúdo"])
        row += 1

        border = self._thin_border()
        wrap = Alignment(wrap_text=True, vertical="top")
        for lesson in self.cls.lessons:
            ws.cell(row=row, column=1, value=format_lesson_date(lesson)).border = border
            ws.cell(row=row, column=2, value=lesson_weekday_name(lesson)).border = border
            ws.cell(row=row, column=3, value=lesson.lesson_index).border = border
            c = ws.cell(row=row, column=4, value=lesson.topic)
            c.border = border
            if not lesson.topic:
                c.fill = self._fill(COLORS["empty"])
            c = ws.cell(row=row, column=5, value=lesson.content)
            c.border = border
            c.alignment = wrap
            row += 1

        ws.column_dimensions["A"].width = 8
        ws.column_dimensions["B"].width = 10
        ws.column_dimensions["C"].width = 6
        ws.column_dimensions["D"].width = self.COL_TOPIC_W
        ws.column_dimensions["E"].width = self.COL_CONTENT_W
