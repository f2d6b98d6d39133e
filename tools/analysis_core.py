# tools/analysis_core.py
from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Any, Dict, List

# -- permite correr la app sin instalar el paquete --
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from lox.runtime.callables import LoxClass, LoxFunction, NativeFunction
from lox.runtime.interpreter import stringify
from lox.sema.astviz import DotBuilder
from lox.sema.printer import AstPrinter
from lox.session import Session, analyze_source


# nombre legible para la expresión anotada por el resolver
def _expr_name(expr) -> str:
    name = expr.__class__.__name__
    if name == "This":
        return "this"
    if name == "Super":
        return "super"
    return expr.name.lexeme


def _expr_line(expr) -> int:
    name = expr.__class__.__name__
    if name == "This" or name == "Super":
        return expr.keyword.line
    return expr.name.line


# tabla de resolución ordenada por línea
def snapshot_locals(locals: Dict[Any, int]) -> List[Dict[str, Any]]:
    rows = []
    for expr, distance in locals.items():
        rows.append(
            {
                "name": _expr_name(expr),
                "line": _expr_line(expr),
                "kind": expr.__class__.__name__,
                "distance": distance,
            }
        )
    rows.sort(key=lambda r: (r["line"], r["name"]))
    return rows


def _kind_of(value) -> str:
    if isinstance(value, NativeFunction):
        return "native"
    if isinstance(value, LoxFunction):
        return "function"
    if isinstance(value, LoxClass):
        return "class"
    if value is None:
        return "nil"
    return value.__class__.__name__


# globales después de ejecutar
def snapshot_globals(session: Session, hide_natives: bool = True) -> List[Dict[str, Any]]:
    rows = []
    for name, value in session.interpreter.globals.values.items():
        kind = _kind_of(value)
        if hide_natives and kind == "native":
            continue
        row = {"name": name, "kind": kind, "value": stringify(value)}
        if isinstance(value, LoxClass):
            row["superclass"] = value.superclass.name if value.superclass is not None else None
            row["methods"] = ", ".join(sorted(value.methods.keys()))
        rows.append(row)
    return rows


def collect_tokens(tokens) -> List[Dict[str, Any]]:
    toks = []
    for t in tokens:
        toks.append(
            {
                "type": t.type.name,
                "text": t.lexeme,
                "literal": None if t.literal is None else stringify(t.literal),
                "line": t.line,
            }
        )
    return toks


def analyze_internal(
    code: str,
    include_ast: bool = True,
    include_tokens: bool = False,
    execute: bool = True,
    hide_natives: bool = True,
) -> Dict[str, Any]:
    analysis = analyze_source(code)
    static_errors = list(analysis.diagnostics.errors)

    out: Dict[str, Any] = {
        "staticErrors": static_errors,
        "runtimeErrors": [],
        "output": "",
        "status": None,
        "astDot": None,
        "astText": None,
        "locals": snapshot_locals(analysis.locals),
        "globals": [],
        "tokens": collect_tokens(analysis.tokens) if include_tokens else None,
    }

    if include_ast and len(static_errors) == 0:
        out["astDot"] = DotBuilder().build(analysis.statements)
        out["astText"] = AstPrinter().print_program(analysis.statements)

    if execute:
        buf = io.StringIO()
        session = Session(out=buf)
        result = session.run(code)
        out["status"] = result.status
        out["output"] = buf.getvalue()
        if result.status == "runtime_error":
            out["runtimeErrors"] = result.messages
        out["globals"] = snapshot_globals(session, hide_natives)

    return out
