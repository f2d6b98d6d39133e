# resolver estático: recorre el AST en el mismo orden que el intérprete,
# sin evaluar nada, y anota para cada referencia a variable cuántos
# scopes hay que subir para encontrarla
from lox.sema.scopes import ScopeStack, ScopeError


class Resolver:
    def __init__(self, diagnostics):
        self.diagnostics = diagnostics
        self.scopes = ScopeStack()
        self.locals = {}

    # resuelve un programa completo y devuelve la tabla nodo -> distancia
    def resolve(self, statements):
        self.scopes = ScopeStack()
        self.locals = {}
        self._resolve_all(statements)
        return self.locals

    def _resolve_all(self, statements):
        for stmt in statements:
            self.visit(stmt)

    # despacha a visit_* según el tipo de nodo
    def visit(self, node):
        m = getattr(self, "visit_" + node.__class__.__name__, None)
        if m is None:
            raise TypeError("Resolver: nodo no soportado " + node.__class__.__name__)
        return m(node)

    # --- helpers de scope ---
    def _declare(self, name):
        try:
            self.scopes.declare(name.lexeme)
        except ScopeError as e:
            self.diagnostics.token_error(name, str(e))

    def _define(self, name):
        self.scopes.define(name.lexeme)

    def _resolve_local(self, expr, name):
        distance = self.scopes.distance_to(name.lexeme)
        if distance is not None:
            self.locals[expr] = distance

    def _resolve_function(self, fn, kind):
        self.scopes.push(kind)
        for param in fn.params:
            self._declare(param)
            self._define(param)
        self._resolve_all(fn.body)
        self.scopes.pop()

    # --- sentencias ---
    def visit_Block(self, stmt):
        self.scopes.push("block")
        self._resolve_all(stmt.statements)
        self.scopes.pop()

    def visit_VarDecl(self, stmt):
        self._declare(stmt.name)
        if stmt.initializer is not None:
            self.visit(stmt.initializer)
        self._define(stmt.name)

    def visit_FunctionDecl(self, stmt):
        # el nombre se define antes del cuerpo para permitir recursión
        self._declare(stmt.name)
        self._define(stmt.name)
        self._resolve_function(stmt, "function")

    def visit_ClassDecl(self, stmt):
        self._declare(stmt.name)
        self._define(stmt.name)

        if stmt.superclass is not None:
            if stmt.superclass.name.lexeme == stmt.name.lexeme:
                self.diagnostics.token_error(stmt.superclass.name, "A class can't inherit from itself.")
            self.visit(stmt.superclass)
            self.scopes.push("block")
            self.scopes.peek().define("super")

        self.scopes.push("subclass" if stmt.superclass is not None else "class")
        self.scopes.peek().define("this")

        for method in stmt.methods:
            kind = "initializer" if method.name.lexeme == "init" else "method"
            self._resolve_function(method, kind)

        self.scopes.pop()
        if stmt.superclass is not None:
            self.scopes.pop()

    def visit_ExprStmt(self, stmt):
        self.visit(stmt.expression)

    def visit_Print(self, stmt):
        self.visit(stmt.expression)

    def visit_If(self, stmt):
        # sin flujo de control: se resuelven ambas ramas
        self.visit(stmt.condition)
        self.visit(stmt.then_branch)
        if stmt.else_branch is not None:
            self.visit(stmt.else_branch)

    def visit_While(self, stmt):
        self.visit(stmt.condition)
        self.visit(stmt.body)

    def visit_Return(self, stmt):
        kind = self.scopes.current_function_kind()
        if kind == "none":
            self.diagnostics.token_error(stmt.keyword, "Can't return from top-level code.")
        if stmt.value is not None:
            if kind == "initializer":
                self.diagnostics.token_error(stmt.keyword, "Can't return a value from an initializer.")
            self.visit(stmt.value)

    # --- expresiones ---
    def visit_Variable(self, expr):
        scope = self.scopes.peek()
        if scope is not None and scope.is_declared_only(expr.name.lexeme):
            self.diagnostics.token_error(expr.name, "Can't read local variable in its own initializer.")
        self._resolve_local(expr, expr.name)

    def visit_Assign(self, expr):
        self.visit(expr.value)
        self._resolve_local(expr, expr.name)

    def visit_Binary(self, expr):
        self.visit(expr.left)
        self.visit(expr.right)

    def visit_Logical(self, expr):
        self.visit(expr.left)
        self.visit(expr.right)

    def visit_Unary(self, expr):
        self.visit(expr.right)

    def visit_Grouping(self, expr):
        self.visit(expr.expression)

    def visit_Literal(self, expr):
        return None

    def visit_Call(self, expr):
        self.visit(expr.callee)
        for argument in expr.arguments:
            self.visit(argument)

    def visit_Get(self, expr):
        self.visit(expr.object)

    def visit_Set(self, expr):
        self.visit(expr.value)
        self.visit(expr.object)

    def visit_This(self, expr):
        if self.scopes.current_class_kind() == "none":
            self.diagnostics.token_error(expr.keyword, "Can't use 'this' outside of a class.")
            return
        self._resolve_local(expr, expr.keyword)

    def visit_Super(self, expr):
        kind = self.scopes.current_class_kind()
        if kind == "none":
            self.diagnostics.token_error(expr.keyword, "Can't use 'super' outside of a class.")
            return
        if kind != "subclass":
            self.diagnostics.token_error(expr.keyword, "Can't use 'super' in a class with no superclass.")
            return
        self._resolve_local(expr, expr.keyword)
