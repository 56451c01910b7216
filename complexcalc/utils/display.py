"""Rich console display utilities for expressions and results."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from complexcalc.checking.equivalence import EquivalenceReport
from complexcalc.core.ast_nodes import BinaryOp, Call, Expr, Literal, UnaryOp, Var
from complexcalc.core.complex_number import Complex
from complexcalc.core.printer import render

console = Console()


def _node_label(expr: Expr) -> str:
    if isinstance(expr, Literal):
        return f"[green]{expr.text}[/green]"
    if isinstance(expr, Var):
        return f"[cyan]{expr.name}[/cyan]"
    if isinstance(expr, (UnaryOp, BinaryOp)):
        return f"[bold yellow]{expr.op}[/bold yellow]"
    if isinstance(expr, Call):
        return f"[magenta]{expr.name}()[/magenta]"
    return repr(expr)


def build_tree(expr: Expr, tree: Tree | None = None) -> Tree:
    """Build a rich Tree mirroring the AST."""
    if tree is None:
        tree = Tree(_node_label(expr))
        node = tree
    else:
        node = tree.add(_node_label(expr))
    for child in expr.children():
        build_tree(child, node)
    return tree


def display_tree(expr: Expr) -> None:
    """Display an AST as a tree plus its prefix rendering."""
    console.print(Panel(build_tree(expr), title=render(expr), border_style="blue"))


def display_result(expr: Expr, value: Complex, env: dict[str, Complex] | None = None) -> None:
    """Display an evaluation result with the bindings used."""
    console.print(f"[bold]Expression:[/bold] {render(expr)}")
    if env:
        table = Table(title="Bindings")
        table.add_column("Variable", style="cyan")
        table.add_column("Value", style="green", justify="right")
        for name in sorted(env):
            table.add_row(name, str(env[name]))
        console.print(table)
    console.print(f"[bold]Result:[/bold] {value}")


def display_equivalence(report: EquivalenceReport) -> None:
    """Display an equivalence report."""
    if report.equivalent:
        verdict = "[bold green]The expressions are (numerically) equivalent.[/bold green]"
    else:
        verdict = "[bold red]The expressions are NOT equivalent.[/bold red]"

    table = Table(title="Trials")
    table.add_column("#", style="dim", justify="right")
    for name in report.variables:
        table.add_column(name, style="cyan")
    table.add_column("Left", style="green")
    table.add_column("Right", style="yellow")

    for i, (env, left, right) in enumerate(report.samples, 1):
        table.add_row(str(i), *(str(env[name]) for name in report.variables), str(left), str(right))

    console.print(table)
    console.print(Panel(
        f"{verdict}\n"
        f"Trials: {report.trials_run}\n"
        f"Discarded (evaluation errors): {report.retries}",
        title="Equivalence",
        border_style="green" if report.equivalent else "red",
    ))
