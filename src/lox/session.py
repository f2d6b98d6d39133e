# Lox - sesión de ejecución
# -------------------------
# Une scanner, parser, resolver e intérprete. Una Session vive tanto como
# el REPL o el archivo que se ejecuta: el entorno global persiste entre
# corridas y cada corrida arranca con diagnósticos limpios.
import sys

from lox.diagnostics import Diagnostics
from lox.front.parser import Parser
from lox.front.scanner import Scanner
from lox.runtime.interpreter import Interpreter
from lox.sema.resolver import Resolver

OK = "ok"
STATIC_ERROR = "static_error"
RUNTIME_ERROR = "runtime_error"

# cada llamada Lox apila ~14 frames de Python
MAX_PYTHON_DEPTH = 10000

EXIT_CODES = {
    OK: 0,
    STATIC_ERROR: 65,
    RUNTIME_ERROR: 70,
}


class RunResult:
    def __init__(self, status, messages):
        self.status = status
        self.messages = messages

    @property
    def ok(self):
        return self.status == OK

    @property
    def exit_code(self):
        return EXIT_CODES[self.status]

    def __repr__(self):
        return "RunResult(" + self.status + ", " + repr(self.messages) + ")"


class Analysis:
    def __init__(self, tokens, statements, locals, diagnostics):
        self.tokens = tokens
        self.statements = statements
        self.locals = locals
        self.diagnostics = diagnostics


# fases estáticas: scan, parse y, si no hubo errores, resolve
def analyze_source(source, diagnostics=None):
    if diagnostics is None:
        diagnostics = Diagnostics()
    tokens = Scanner(source, diagnostics).scan_tokens()
    statements = Parser(tokens, diagnostics).parse()
    locals = {}
    if not diagnostics.had_error:
        locals = Resolver(diagnostics).resolve(statements)
    return Analysis(tokens, statements, locals, diagnostics)


class Session:
    def __init__(self, out=None):
        if sys.getrecursionlimit() < MAX_PYTHON_DEPTH:
            sys.setrecursionlimit(MAX_PYTHON_DEPTH)
        self.interpreter = Interpreter(out)

    def run(self, source):
        diagnostics = Diagnostics()
        analysis = analyze_source(source, diagnostics)
        if diagnostics.had_error:
            return RunResult(STATIC_ERROR, diagnostics.messages())

        self.interpreter.interpret(analysis.statements, analysis.locals, diagnostics)
        if diagnostics.had_runtime_error:
            return RunResult(RUNTIME_ERROR, diagnostics.messages())
        return RunResult(OK, diagnostics.messages())
