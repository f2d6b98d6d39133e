# imprime el AST en forma parentizada estilo lisp, p. ej. (* (- 123) (group 45.67))
from lox.runtime.interpreter import stringify


class AstPrinter:
    def print_program(self, statements):
        return "\n".join(self.print(s) for s in statements)

    def print(self, node):
        return getattr(self, "visit_" + node.__class__.__name__)(node)

    def _paren(self, name, *parts):
        out = "(" + name
        for p in parts:
            out = out + " " + (p if isinstance(p, str) else self.print(p))
        return out + ")"

    # --- expresiones ---
    def visit_Literal(self, expr):
        if isinstance(expr.value, str):
            return '"' + expr.value + '"'
        return stringify(expr.value)

    def visit_Variable(self, expr):
        return expr.name.lexeme

    def visit_Assign(self, expr):
        return self._paren("=", expr.name.lexeme, expr.value)

    def visit_Logical(self, expr):
        return self._paren(expr.operator.lexeme, expr.left, expr.right)

    def visit_Binary(self, expr):
        return self._paren(expr.operator.lexeme, expr.left, expr.right)

    def visit_Unary(self, expr):
        return self._paren(expr.operator.lexeme, expr.right)

    def visit_Grouping(self, expr):
        return self._paren("group", expr.expression)

    def visit_Call(self, expr):
        return self._paren("call", expr.callee, *expr.arguments)

    def visit_Get(self, expr):
        return self._paren(".", expr.object, expr.name.lexeme)

    def visit_Set(self, expr):
        return self._paren("=", self._paren(".", expr.object, expr.name.lexeme), expr.value)

    def visit_This(self, expr):
        return "this"

    def visit_Super(self, expr):
        return self._paren("super", expr.method.lexeme)

    # --- sentencias ---
    def visit_ExprStmt(self, stmt):
        return self._paren(";", stmt.expression)

    def visit_Print(self, stmt):
        return self._paren("print", stmt.expression)

    def visit_VarDecl(self, stmt):
        if stmt.initializer is None:
            return self._paren("var", stmt.name.lexeme)
        return self._paren("var", stmt.name.lexeme, "=", stmt.initializer)

    def visit_Block(self, stmt):
        return self._paren("block", *stmt.statements)

    def visit_If(self, stmt):
        if stmt.else_branch is None:
            return self._paren("if", stmt.condition, stmt.then_branch)
        return self._paren("if-else", stmt.condition, stmt.then_branch, stmt.else_branch)

    def visit_While(self, stmt):
        return self._paren("while", stmt.condition, stmt.body)

    def visit_FunctionDecl(self, stmt):
        params = "(" + " ".join(p.lexeme for p in stmt.params) + ")"
        return self._paren("fun", stmt.name.lexeme, params, *stmt.body)

    def visit_Return(self, stmt):
        if stmt.value is None:
            return "(return)"
        return self._paren("return", stmt.value)

    def visit_ClassDecl(self, stmt):
        parts = [stmt.name.lexeme]
        if stmt.superclass is not None:
            parts.append("< " + stmt.superclass.name.lexeme)
        return self._paren("class", *(parts + stmt.methods))
