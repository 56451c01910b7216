"""CLI interface for the complex-number calculator.

Usage:
    complexcalc eval "(3+2i)*(1-4i)"
    complexcalc eval "a*conj(a)" --var a=3+4i
    complexcalc tree "(a+b)*conj(c)" --rich
    complexcalc equiv "(a+b)**2" "a**2+2*a*b+b**2" --seed 1
    complexcalc repl
"""

from __future__ import annotations

import logging
import sys
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.prompt import Prompt

from complexcalc.core.complex_number import Complex
from complexcalc.core.errors import ComplexCalcError
from complexcalc.utils.complex_input import parse_complex_input

console = Console()

VALUE_EXAMPLES = "3+4i, -2-3i, 4i, 5, i"


def _parse_bindings(pairs: tuple[str, ...]) -> dict[str, Complex]:
    env: dict[str, Complex] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got {pair!r}", param_hint="--var")
        try:
            env[name.strip()] = parse_complex_input(value)
        except ComplexCalcError as e:
            raise click.BadParameter(f"{e} (examples: {VALUE_EXAMPLES})", param_hint="--var") from e
    return env


def prompt_for_env(names: list[str], env: dict[str, Complex] | None = None) -> dict[str, Complex]:
    """Ask for a value for every name not already bound, re-asking on bad input."""
    env = dict(env or {})
    for name in names:
        while name not in env:
            answer = Prompt.ask(f"Value for variable [cyan]{name}[/cyan] (e.g. 3+4i)", console=console)
            try:
                env[name] = parse_complex_input(answer)
            except ComplexCalcError as e:
                console.print(f"[red]Invalid input: {escape(str(e))}[/red]")
    return env


def _fail(e: Exception) -> NoReturn:
    console.print(f"[red]Error: {escape(str(e))}[/red]")
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Complex-number expression calculator."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@main.command("eval")
@click.argument("expression")
@click.option("--var", "bindings", multiple=True, help="Variable binding NAME=VALUE (repeatable)")
@click.option("--no-prompt", is_flag=True, help="Fail instead of prompting for unbound variables")
def eval_command(expression: str, bindings: tuple[str, ...], no_prompt: bool) -> None:
    """Evaluate an expression."""
    from complexcalc.core.evaluator import evaluate
    from complexcalc.core.parser import parse
    from complexcalc.utils.display import display_result

    env = _parse_bindings(bindings)
    try:
        ast = parse(expression)
        if not no_prompt:
            env = prompt_for_env(sorted(ast.variables()), env)
        value = evaluate(ast, env)
    except ComplexCalcError as e:
        _fail(e)
    display_result(ast, value, env)


@main.command()
@click.argument("expression")
@click.option("--rich", "as_tree", is_flag=True, help="Draw the tree instead of printing prefix form")
def tree(expression: str, as_tree: bool) -> None:
    """Show the syntax tree of an expression (Lisp prefix notation)."""
    from complexcalc.core.parser import parse
    from complexcalc.core.printer import render
    from complexcalc.utils.display import display_tree

    try:
        ast = parse(expression)
    except ComplexCalcError as e:
        _fail(e)
    if as_tree:
        display_tree(ast)
    else:
        console.print(f"Tree (LISP): {render(ast)}", markup=False)


@main.command()
@click.argument("first")
@click.argument("second")
@click.option("--trials", default=6, help="Number of random trials")
@click.option("--tolerance", default=1e-7, help="Component-wise tolerance")
@click.option("--seed", default=None, type=int, help="Random seed for reproducible trials")
@click.option("--max-retries", default=1000, help="Discarded trials allowed before giving up")
def equiv(first: str, second: str, trials: int, tolerance: float, seed: int | None, max_retries: int) -> None:
    """Check two expressions for numerical equivalence."""
    from complexcalc.checking.equivalence import CheckerConfig, EquivalenceChecker
    from complexcalc.core.parser import parse
    from complexcalc.utils.display import display_equivalence

    try:
        config = CheckerConfig(trials=trials, tolerance=tolerance, seed=seed, max_retries=max_retries)
        checker = EquivalenceChecker(config)
        report = checker.compare(parse(first), parse(second))
    except ComplexCalcError as e:
        _fail(e)
    display_equivalence(report)


MENU = """
=== Complex Number Calculator ===
1) Evaluate expression
2) Show LISP tree of expression
3) Check equality of two expressions (numerical)
4) Quit"""


@main.command()
def repl() -> None:
    """Interactive menu loop."""
    from complexcalc.checking.equivalence import EquivalenceChecker
    from complexcalc.core.evaluator import evaluate
    from complexcalc.core.parser import parse
    from complexcalc.core.printer import render
    from complexcalc.utils.display import display_equivalence

    checker = EquivalenceChecker()
    while True:
        console.print(MENU, markup=False)
        try:
            option = Prompt.ask("Choice", console=console).strip()
        except (EOFError, KeyboardInterrupt):
            console.print("\nExiting...")
            break

        try:
            if option == "1":
                ast = parse(Prompt.ask("Expression", console=console))
                env = prompt_for_env(sorted(ast.variables()))
                console.print(f"Result: {evaluate(ast, env)}", markup=False)
            elif option == "2":
                ast = parse(Prompt.ask("Expression", console=console))
                console.print(f"Tree (LISP): {render(ast)}", markup=False)
            elif option == "3":
                first = parse(Prompt.ask("Expression 1", console=console))
                second = parse(Prompt.ask("Expression 2", console=console))
                display_equivalence(checker.compare(first, second))
            elif option == "4":
                console.print("Exiting...")
                break
            else:
                console.print("[yellow]Invalid option[/yellow]")
        except ComplexCalcError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
        except (EOFError, KeyboardInterrupt):
            console.print("\nExiting...")
            break


if __name__ == "__main__":
    main()
