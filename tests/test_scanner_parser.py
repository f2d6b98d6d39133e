from lox.diagnostics import Diagnostics
from lox.front.parser import Parser
from lox.front.scanner import Scanner
from lox.front.tokens import TokenType
from lox.sema.ast import Block, ClassDecl, ExprStmt, Set, Super, VarDecl, While
from lox.sema.astviz import DotBuilder
from lox.sema.printer import AstPrinter

from helpers import analyze, errors_of


def scan(src):
    diags = Diagnostics()
    return Scanner(src, diags).scan_tokens(), diags


def test_scan_operators_and_keywords():
    tokens, diags = scan("var x = a >= 1 and !b; // comentario\nfun")
    types = [t.type for t in tokens]
    assert types == [
        TokenType.VAR, TokenType.IDENTIFIER, TokenType.EQUAL, TokenType.IDENTIFIER,
        TokenType.GREATER_EQUAL, TokenType.NUMBER, TokenType.AND, TokenType.BANG,
        TokenType.IDENTIFIER, TokenType.SEMICOLON, TokenType.FUN, TokenType.EOF,
    ]
    assert diags.errors == []
    assert tokens[-2].line == 2


def test_scan_literals():
    tokens, _ = scan('12 3.5 "hola\nmundo" 7.')
    assert tokens[0].literal == 12.0
    assert tokens[1].literal == 3.5
    assert tokens[2].literal == "hola\nmundo"
    # el punto final no es parte del número
    assert tokens[3].literal == 7.0
    assert tokens[4].type == TokenType.DOT


def test_scan_unexpected_character_err():
    tokens, diags = scan("var a = 1 @;")
    assert diags.errors == ["[line 1] Error: Unexpected character."]
    assert TokenType.SEMICOLON in [t.type for t in tokens]


def test_unterminated_string_err():
    errs = errors_of('print "abc')
    assert "[line 1] Error: Unterminated string." in errs
    assert any("Expect expression." in e for e in errs)


def test_parse_recovers_and_reports_several_errors():
    src = r"""
    var = 1;
    print ;
    var b = 2;
    """
    errs = errors_of(src)
    assert errs == [
        "[line 2] Error at '=': Expect variable name.",
        "[line 3] Error at ';': Expect expression.",
    ]


def test_parse_missing_semicolon_at_end():
    errs = errors_of("print 1")
    assert errs == ["[line 1] Error at end: Expect ';' after value."]


def test_invalid_assignment_target_err():
    errs = errors_of("1 = 2;")
    assert errs == ["[line 1] Error at '=': Invalid assignment target."]


def test_too_many_arguments_err():
    args = ", ".join(["1"] * 256)
    errs = errors_of("f(" + args + ");")
    assert any("Can't have more than 255 arguments." in e for e in errs)


def test_for_desugars_to_while():
    analysis = analyze("for (var i = 0; i < 3; i = i + 1) print i;")
    assert analysis.diagnostics.errors == []
    outer = analysis.statements[0]
    assert isinstance(outer, Block)
    assert isinstance(outer.statements[0], VarDecl)
    loop = outer.statements[1]
    assert isinstance(loop, While)
    assert isinstance(loop.body, Block)
    assert isinstance(loop.body.statements[1], ExprStmt)


def test_parse_class_with_superclass_and_property_set():
    src = r"""
    class B < A {
      init() { this.x = super.make(); }
    }
    """
    analysis = analyze(src)
    cls = analysis.statements[0]
    assert isinstance(cls, ClassDecl)
    assert cls.superclass.name.lexeme == "A"
    assert cls.methods[0].name.lexeme == "init"
    assign = cls.methods[0].body[0].expression
    assert isinstance(assign, Set)
    assert isinstance(assign.value.callee, Super)


def test_ast_printer_expression():
    analysis = analyze("-123 * (45.67);")
    expr = analysis.statements[0].expression
    assert AstPrinter().print(expr) == "(* (- 123) (group 45.67))"


def test_ast_printer_program():
    analysis = analyze('var a = "x"; if (a) print a; else print nil;')
    text = AstPrinter().print_program(analysis.statements)
    assert text == '(var a = "x")\n(if-else a (print a) (print nil))'


def test_dot_builder():
    analysis = analyze("fun f(a, b) { return a + b; }")
    dot = DotBuilder().build(analysis.statements)
    assert dot.startswith("digraph AST {")
    assert 'label="Program"' in dot
    assert 'label="Function\\nf(a, b)"' in dot
    assert 'label="Binary\\n+"' in dot
    assert dot.endswith("}")
