import os
import shutil
import subprocess
import sys

from lox.sema.astviz import DotBuilder
from lox.sema.printer import AstPrinter
from lox.session import Session, analyze_source

USAGE = "Usage: lox [--ast] [--dot] [script]"

EXIT_USAGE = 64
EXIT_NO_INPUT = 66

FLAGS = ("--ast", "--dot")


def _report(messages):
    for m in messages:
        print(m, file=sys.stderr)


def _mk_out_dirs(src_path):
    base = os.path.splitext(os.path.basename(src_path))[0]
    out_root = os.path.join(os.getcwd(), "build", base)
    ast_dir = os.path.join(out_root, "ast")
    os.makedirs(ast_dir, exist_ok=True)
    return ast_dir


# AST → DOT (+ PNG si Graphviz está disponible)
def write_dot(src_path, statements):
    ast_dir = _mk_out_dirs(src_path)
    dot_text = DotBuilder().build(statements)
    ast_txt = os.path.join(ast_dir, "ast.dot.txt")
    with open(ast_txt, "w", encoding="utf-8") as f:
        f.write(dot_text)
    print("AST (DOT) saved to:", ast_txt, file=sys.stderr)

    dot_exe = os.environ.get("DOT_EXE") or shutil.which("dot")
    if not dot_exe:
        print("Warning: Graphviz 'dot' not found; only the .txt was written.", file=sys.stderr)
        return
    ast_png = os.path.join(ast_dir, "ast.png")
    try:
        subprocess.run([dot_exe, "-Tpng", "-o", ast_png], input=dot_text.encode("utf-8"), check=True)
        print("AST (PNG) saved to:", ast_png, file=sys.stderr)
    except (OSError, subprocess.CalledProcessError) as e:
        print("Warning: Graphviz failed (" + str(e) + "); only the .txt was written.", file=sys.stderr)


def run_file(path, show_ast=False, dot=False):
    try:
        with open(path, "r", encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        print("Error reading file: " + str(e), file=sys.stderr)
        return EXIT_NO_INPUT

    if show_ast or dot:
        analysis = analyze_source(source)
        if not analysis.diagnostics.had_error:
            if show_ast:
                print(AstPrinter().print_program(analysis.statements))
            if dot:
                write_dot(path, analysis.statements)

    result = Session().run(source)
    _report(result.messages)
    return result.exit_code


def run_prompt(stdin=None, show_ast=False):
    stdin = stdin if stdin is not None else sys.stdin
    session = Session()
    while True:
        print("> ", end="", flush=True)
        line = stdin.readline()
        if line == "":
            print()
            break
        if line.strip() == "":
            continue
        if show_ast:
            analysis = analyze_source(line)
            if not analysis.diagnostics.had_error:
                print(AstPrinter().print_program(analysis.statements))
        # cada línea arranca con diagnósticos limpios
        result = session.run(line)
        _report(result.messages)
    return 0


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    flags = [a for a in args if a.startswith("--")]
    paths = [a for a in args if not a.startswith("--")]

    for f in flags:
        if f not in FLAGS:
            print(USAGE)
            return EXIT_USAGE
    if len(paths) > 1:
        print(USAGE)
        return EXIT_USAGE

    show_ast = "--ast" in flags
    dot = "--dot" in flags
    if len(paths) == 1:
        return run_file(paths[0], show_ast, dot)
    return run_prompt(show_ast=show_ast)


if __name__ == "__main__":
    sys.exit(main())
