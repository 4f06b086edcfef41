"""Exportação: relatório Excel (openpyxl) da turma."""

from export.excel_export import ExcelExporter

__all__ = ["ExcelExporter"]
