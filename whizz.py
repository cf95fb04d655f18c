#!/usr/bin/env python3
"""
whizz.py — CLI narzędzie ExpressionWhizz.

Działa całkowicie lokalnie — nie wymaga uruchomionego serwera API.

Konfiguracja: zmienne środowiskowe z prefiksem EXPR_WHIZZ_
lub plik .env (np. EXPR_WHIZZ_LOG_LEVEL=DEBUG).

Podkomendy:
    eval     — oblicz wyrażenie (wynik, głębokość, rendering)
    tokens   — pokaż tokeny wyrażenia
    tree     — pokaż AST wyrażenia jako JSON
    repl     — interaktywna pętla: linia → wynik lub komunikat błędu

Wyrażenie podaje się pozycyjnie, przez --text albo na stdin. Tekst zaczynający
się od "-(" argparse wziąłby za opcję: wtedy "--" przed wyrażeniem lub --text=...

Użycie:
    python whizz.py eval --text "3 + 5 * 2"
    python whizz.py eval --steps -t "2^3^2"
    echo "(6.5 * (4 + 3))" | python whizz.py eval
    python whizz.py tokens -t "3e10 / .5"
    python whizz.py tree -- "-(-0.125)"
    python whizz.py eval --text="-(2 + 3) * 4"
    python whizz.py repl
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from adapters.evaluator.tree_evaluator import format_value
from adapters.lexer.scanner_lexer import describe_tokens
from adapters.pipeline import ExpressionPipeline
from config import Settings
from contracts import EvalResult, ExpressionError, TokenType

_QUIT_WORDS = frozenset({"quit", "exit"})


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _print_kv_table(title: str, rows: list[tuple[str, Any]]) -> None:
    table = Table(title=title, box=box.ASCII, show_header=False, pad_edge=False)
    table.add_column("Key", no_wrap=True, style="bold cyan")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(str(key), str(value))
    _console().print(table)


def _print_result(result: EvalResult, show_steps: bool) -> None:
    rows: list[tuple[str, Any]] = [
        ("value", format_value(result.value)),
        ("depth", result.depth),
        ("rendered", result.rendered),
    ]
    _print_kv_table("Result", rows)
    if show_steps and result.steps:
        _console().print("Steps:")
        for i, step in enumerate(result.steps, start=1):
            _console().print(f"  {i}. {step}", markup=False)


def _read_text(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.expression is not None:
        return args.expression
    return sys.stdin.read().strip()


def _reject(exc: ExpressionError) -> None:
    # Komunikat błędu wypisywany dosłownie
    print(str(exc), file=sys.stderr)
    sys.exit(1)


def _pipeline(settings: Settings | None = None) -> ExpressionPipeline:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())
    return ExpressionPipeline.from_settings(settings)


# -- podkomendy ------------------------------------------------------------

def _eval(args: argparse.Namespace) -> None:
    pipeline = _pipeline()
    try:
        result = pipeline.run(_read_text(args))
    except ExpressionError as exc:
        _reject(exc)
        return
    _print_result(result, show_steps=args.steps)


def _tokens(args: argparse.Namespace) -> None:
    pipeline = _pipeline()
    try:
        tokens = pipeline.tokenize(_read_text(args))
    except ExpressionError as exc:
        _reject(exc)
        return

    table = Table(title=f"Tokens [{len(tokens)}]", box=box.ASCII, show_lines=False)
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Type", no_wrap=True, style="cyan")
    table.add_column("Value", justify="right")
    for i, tok in enumerate(tokens, start=1):
        value = format_value(tok.value) if tok.type is TokenType.VALUE else ""
        table.add_row(str(i), tok.type.label, value)
    _console().print(table)
    _console().print(describe_tokens(tokens), markup=False)


def _tree(args: argparse.Namespace) -> None:
    pipeline = _pipeline()
    try:
        ast = pipeline.parse(_read_text(args))
    except ExpressionError as exc:
        _reject(exc)
        return
    _console().print_json(data=pipeline.evaluator.dump(ast))


def _repl(args: argparse.Namespace) -> None:
    settings = Settings()
    pipeline = _pipeline(settings)
    while True:
        try:
            line = input(settings.repl_prompt)
        except EOFError:
            print()
            break

        line = line.strip()
        if not line:
            continue
        if line.lower() in _QUIT_WORDS:
            break

        try:
            result = pipeline.run(line)
        except ExpressionError as exc:
            print(str(exc))
            continue
        print(format_value(result.value))


# -- main ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="whizz",
        description="ExpressionWhizz — CLI (lokalny, bez serwera API)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # eval
    p = sub.add_parser("eval", help="Oblicz wyrażenie")
    p.add_argument("--text", "-t", help="Wyrażenie (lub stdin)")
    p.add_argument("expression", nargs="?", help="Wyrażenie (alternatywa dla --text)")
    p.add_argument("--steps", "-s", action="store_true",
                   help="Wyświetl kroki obliczeń")

    # tokens
    p = sub.add_parser("tokens", help="Pokaż tokeny wyrażenia")
    p.add_argument("--text", "-t", help="Wyrażenie (lub stdin)")
    p.add_argument("expression", nargs="?", help="Wyrażenie (alternatywa dla --text)")

    # tree
    p = sub.add_parser("tree", help="Pokaż AST wyrażenia jako JSON")
    p.add_argument("--text", "-t", help="Wyrażenie (lub stdin)")
    p.add_argument("expression", nargs="?", help="Wyrażenie (alternatywa dla --text)")

    # repl
    sub.add_parser("repl", help="Interaktywna pętla (quit/exit lub EOF kończy)")

    args = parser.parse_args(argv)

    cmds = {
        "eval":   _eval,
        "tokens": _tokens,
        "tree":   _tree,
        "repl":   _repl,
    }
    cmds[args.command](args)


if __name__ == "__main__":
    main()
