"""Sirius Edu: CLI principal.

Uso:
  python main.py                          Sessão interativa (padrão)
  python main.py shell                    Sessão interativa
  python main.py shell --demo             Sessão interativa com dados de demonstração
  python main.py config init              Cria config/app_config.yaml
  python main.py config show              Mostra a configuração
  python main.py average --m1 8 ...       Calcula a média de um aluno
  python main.py distribute <tópicos.txt> Distribui tópicos no calendário
  python main.py demo                     Gera dados de demonstração
  python main.py demo --export <arq.xlsx> Dados de demonstração + Excel
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _setup_logging(level: str) -> None:
    from rich.logging import RichHandler
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def _load_config():
    """Carrega a configuração (ou a padrão) e liga o log no nível configurado."""
    from config.manager import ConfigManager
    try:
        config = ConfigManager().load_or_default()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    _setup_logging(config.log_level)
    return config


def _parse_schedule(text: str) -> dict[int, int]:
    """"1=2,3=1" → {1: 2, 3: 1} (dia da semana com 0 = domingo)."""
    schedule: dict[int, int] = {}
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        day, sep, count = part.partition("=")
        if not sep or not day.strip().isdigit() or not count.strip().isdigit():
            raise click.BadParameter(f"Entrada inválida: '{part}' (use DIA=AULAS)")
        day_idx = int(day)
        if not 0 <= day_idx <= 6:
            raise click.BadParameter(f"Dia fora de 0-6: {day_idx}")
        schedule[day_idx] = int(count)
    return schedule


# ─── SHELL ────────────────────────────────────────────────────────────────────

@click.command("shell")
@click.option("--demo", is_flag=True, default=False,
              help="Começa com dados de demonstração já carregados.")
@click.option("--seed", default=None, type=int, help="Seed dos dados de demonstração.")
def cmd_shell(demo: bool, seed: Optional[int]):
    """Abre a sessão interativa (login, turmas, diário, notas)."""
    config = _load_config()
    from shell.session import InteractiveSession
    from store.store import Store

    if demo:
        from data.fake_data import DemoDataGenerator
        store = DemoDataGenerator(config, seed=seed).generate()
        store.logout()
    else:
        store = Store(holidays=config.planner.holiday_pairs)
    InteractiveSession(store, config, console=console).run()


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Cria ou mostra a configuração."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False, help="Sobrescreve o arquivo existente.")
def config_init(force: bool):
    """Grava config/app_config.yaml com os valores padrão."""
    from config.defaults import default_app_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            f"[yellow]{mgr.path} já existe.[/yellow] Use [bold]--force[/bold] para sobrescrever."
        )
        return
    mgr.save(default_app_config())


@cmd_config.command("show")
def config_show():
    """Mostra a configuração em uso."""
    config = _load_config()
    planner = config.planner

    console.print(Panel(
        f"[bold]{config.school_name}[/bold]  |  "
        f"Período padrão: {planner.default_start} a {planner.default_end}  |  "
        f"Log: {config.log_level}",
        title="Configuração",
        border_style="cyan",
    ))

    table = Table(title="Feriados fixos", box=box.ROUNDED)
    table.add_column("Data")
    table.add_column("Feriado")
    if planner.holidays is None:
        from config.defaults import FIXED_HOLIDAYS
        holidays = FIXED_HOLIDAYS
    else:
        holidays = planner.holidays
    for h in sorted(holidays, key=lambda h: (h.month, h.day)):
        table.add_row(f"{h.day:02d}/{h.month:02d}", h.name)
    console.print(table)

    ai = config.ai
    console.print(
        f"[bold]IA:[/bold] {ai.model} | chave em ${ai.api_key_env}"
    )


# ─── AVERAGE ──────────────────────────────────────────────────────────────────

@click.command("average")
@click.option("--m1", default="", help="Mensal 1")
@click.option("--m2", default="", help="Mensal 2")
@click.option("--m3", default="", help="Mensal 3")
@click.option("--res", default="", help="Pesquisa")
@click.option("--bi", default="", help="Prova bimestral (peso 2)")
@click.option("--read", default="", help="Bônus de leitura")
def cmd_average(m1: str, m2: str, m3: str, res: str, bi: str, read: str):
    """Calcula a média final de um aluno."""
    from gradebook.grading import compute_average
    result = compute_average({"m1": m1, "m2": m2, "m3": m3, "res": res, "bi": bi, "read": read})
    click.echo(result.display)


# ─── DISTRIBUTE ───────────────────────────────────────────────────────────────

@click.command("distribute")
@click.argument("topics_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--start", "start_str", required=True, help="Início (AAAA-MM-DD).")
@click.option("--end", "end_str", required=True, help="Fim (AAAA-MM-DD).")
@click.option("--schedule", "schedule_str", required=True,
              help='Grade horária "DIA=AULAS,..." com 0 = domingo, ex.: "1=2,3=1".')
def cmd_distribute(topics_file: str, start_str: str, end_str: str, schedule_str: str):
    """Distribui os tópicos de um arquivo (um por linha) no calendário."""
    config = _load_config()
    from planner.distribution import DistributionError, distribute, parse_topics
    from shell.render import diary_table
    from models.class_group import ClassGroup

    try:
        start, end = date.fromisoformat(start_str), date.fromisoformat(end_str)
    except ValueError as e:
        raise click.BadParameter(f"Data inválida: {e}")
    schedule = _parse_schedule(schedule_str)

    topics = parse_topics(Path(topics_file).read_text(encoding="utf-8"))
    try:
        lessons = distribute(topics, start, end, schedule,
                             holidays=config.planner.holiday_pairs)
    except DistributionError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    preview = ClassGroup(id="preview", teacher_id="cli", name=Path(topics_file).stem,
                         subject="Planejamento", lessons=lessons)
    console.print(diary_table(preview))
    console.print(f"[bold]{len(lessons)}[/bold] aulas geradas.")


# ─── DEMO ─────────────────────────────────────────────────────────────────────

@click.command("demo")
@click.option("--seed", default=42, help="Seed para dados reproduzíveis.")
@click.option("--year", default=None, type=int, help="Ano letivo (padrão: ano corrente).")
@click.option("--export", "export_path", default=None,
              help="Pasta para os relatórios Excel de cada turma.")
def cmd_demo(seed: int, year: Optional[int], export_path: Optional[str]):
    """Gera turmas de demonstração e mostra o resumo."""
    config = _load_config()
    from data.fake_data import DemoDataGenerator

    gen = DemoDataGenerator(config, seed=seed)
    store = gen.generate(year=year)
    gen.print_summary(store)

    if export_path:
        from export.excel_export import ExcelExporter
        out_dir = Path(export_path)
        for cls in store.classes:
            path = out_dir / f"{cls.subject.lower()}_{cls.id}.xlsx"
            ExcelExporter(cls, school_name=config.school_name).export(path)
            console.print(f"[green]✓[/green] {path}")


# ─── CLI-GROUP ────────────────────────────────────────────────────────────────

@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx):
    """Sirius Edu: diário de classe, planejamento e notas.

    Sem subcomando, abre a sessão interativa.
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(cmd_shell)


def main():
    cli()


# Registra os comandos
cli.add_command(cmd_shell)
cli.add_command(cmd_config)
cli.add_command(cmd_average)
cli.add_command(cmd_distribute)
cli.add_command(cmd_demo)


if __name__ == "__main__":
    main()
