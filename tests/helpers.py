import io

from lox.session import Session, analyze_source


def analyze(src: str):
    return analyze_source(src)


# errores estáticos (léxicos, sintácticos y de resolución)
def errors_of(src: str):
    return analyze(src).diagnostics.errors


# ejecuta el programa y devuelve (salida impresa, RunResult)
def run_source(src: str, session=None):
    buf = io.StringIO()
    if session is None:
        session = Session(out=buf)
    else:
        session.interpreter.out = buf
    result = session.run(src)
    return buf.getvalue(), result


def output_lines(src: str):
    out, result = run_source(src)
    assert result.ok, result.messages
    return out.splitlines()
