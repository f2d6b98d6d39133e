# Lox - intérprete
# ----------------
# Evaluador que recorre el AST directamente. Mantiene un entorno global
# persistente (con las nativas) y un puntero al entorno actual que se
# guarda y restaura al entrar y salir de bloques y llamadas.
import math
import sys

from lox.front.tokens import TokenType
from lox.runtime.callables import (
    LoxCallable,
    LoxClass,
    LoxFunction,
    LoxInstance,
    native_functions,
)
from lox.runtime.environment import Environment
from lox.runtime.errors import LoxRuntimeError

T = TokenType


# resultado de control de `return`: viaja hacia arriba por execute hasta
# la llamada de función, que es la única que lo absorbe
class ReturnSignal:
    __slots__ = ("value",)

    def __init__(self, value):
        self.value = value


def is_truthy(value):
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_equal(a, b):
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    if _is_number(a) and _is_number(b):
        return a == b
    # sin coerción: tipos distintos nunca son iguales (true != 1)
    if type(a) is not type(b):
        return False
    return a == b


def stringify(value):
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if _is_number(value):
        value = float(value)
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        text = repr(value)
        if text.endswith(".0"):
            text = text[: len(text) - 2]
        return text
    return str(value)


# división IEEE-754: dividir por cero da infinito o NaN, no error
def _divide(left, right):
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


class Interpreter:
    def __init__(self, out=None):
        self.out = out if out is not None else sys.stdout
        self.globals = Environment()
        self.environment = self.globals
        self.locals = {}
        for fn in native_functions():
            self.globals.define(fn.name, fn)

    # ejecuta un programa ya resuelto; devuelve False si hubo error de ejecución
    def interpret(self, statements, locals, diagnostics):
        self.locals.update(locals)
        try:
            for stmt in statements:
                self.execute(stmt)
        except LoxRuntimeError as e:
            diagnostics.runtime_error(e)
            return False
        return True

    # despacha a visit_* según el tipo de nodo
    def visit(self, node):
        m = getattr(self, "visit_" + node.__class__.__name__, None)
        if m is None:
            raise TypeError("Interpreter: nodo no soportado " + node.__class__.__name__)
        return m(node)

    def execute(self, stmt):
        return self.visit(stmt)

    def evaluate(self, expr):
        return self.visit(expr)

    # ejecuta statements con `env` activo y siempre restaura el anterior
    def execute_block(self, statements, env):
        previous = self.environment
        self.environment = env
        try:
            for stmt in statements:
                signal = self.execute(stmt)
                if signal is not None:
                    return signal
            return None
        finally:
            self.environment = previous

    # --- sentencias ---
    def visit_ExprStmt(self, stmt):
        self.evaluate(stmt.expression)
        return None

    def visit_Print(self, stmt):
        value = self.evaluate(stmt.expression)
        self.out.write(stringify(value) + "\n")
        return None

    def visit_VarDecl(self, stmt):
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)
        return None

    def visit_Block(self, stmt):
        return self.execute_block(stmt.statements, Environment(self.environment))

    def visit_If(self, stmt):
        if is_truthy(self.evaluate(stmt.condition)):
            return self.execute(stmt.then_branch)
        if stmt.else_branch is not None:
            return self.execute(stmt.else_branch)
        return None

    def visit_While(self, stmt):
        while is_truthy(self.evaluate(stmt.condition)):
            signal = self.execute(stmt.body)
            if signal is not None:
                return signal
        return None

    def visit_FunctionDecl(self, stmt):
        fn = LoxFunction(stmt, self.environment, False)
        self.environment.define(stmt.name.lexeme, fn)
        return None

    def visit_Return(self, stmt):
        value = None
        if stmt.value is not None:
            value = self.evaluate(stmt.value)
        return ReturnSignal(value)

    def visit_ClassDecl(self, stmt):
        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise LoxRuntimeError(stmt.superclass.name, "Superclass must be a class.")

        self.environment.define(stmt.name.lexeme, None)

        # los métodos de una subclase cierran sobre un scope con `super`
        method_env = self.environment
        if superclass is not None:
            method_env = Environment(self.environment)
            method_env.define("super", superclass)

        methods = {}
        for method in stmt.methods:
            methods[method.name.lexeme] = LoxFunction(method, method_env, method.name.lexeme == "init")

        klass = LoxClass(stmt.name.lexeme, superclass, methods)
        self.environment.assign(stmt.name, klass)
        return None

    # --- expresiones ---
    def visit_Literal(self, expr):
        return expr.value

    def visit_Grouping(self, expr):
        return self.evaluate(expr.expression)

    def visit_Variable(self, expr):
        return self._look_up_variable(expr.name, expr)

    def visit_Assign(self, expr):
        value = self.evaluate(expr.value)
        distance = self.locals.get(expr)
        if distance is not None:
            self.environment.assign_at(distance, expr.name, value)
        else:
            self.globals.assign(expr.name, value)
        return value

    def visit_Logical(self, expr):
        left = self.evaluate(expr.left)
        if expr.operator.type == T.OR:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left
        return self.evaluate(expr.right)

    def visit_Unary(self, expr):
        right = self.evaluate(expr.right)
        op = expr.operator.type
        if op == T.BANG:
            return not is_truthy(right)
        if op == T.MINUS:
            self._check_number_operand(expr.operator, right)
            return -right
        raise LoxRuntimeError(expr.operator, "Unknown unary operator.")

    def visit_Binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        op = expr.operator.type

        if op == T.EQUAL_EQUAL:
            return is_equal(left, right)
        if op == T.BANG_EQUAL:
            return not is_equal(left, right)

        if op == T.PLUS:
            if _is_number(left) and _is_number(right):
                return float(left) + float(right)
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError(expr.operator, "Operands must be two numbers or two strings.")

        self._check_number_operands(expr.operator, left, right)
        if op == T.MINUS:
            return float(left) - float(right)
        if op == T.STAR:
            return float(left) * float(right)
        if op == T.SLASH:
            return _divide(float(left), float(right))
        if op == T.GREATER:
            return left > right
        if op == T.GREATER_EQUAL:
            return left >= right
        if op == T.LESS:
            return left < right
        if op == T.LESS_EQUAL:
            return left <= right
        raise LoxRuntimeError(expr.operator, "Unknown binary operator.")

    def visit_Call(self, expr):
        callee = self.evaluate(expr.callee)
        arguments = []
        for argument in expr.arguments:
            arguments.append(self.evaluate(argument))

        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")
        if len(arguments) != callee.arity():
            raise LoxRuntimeError(
                expr.paren,
                "Expected " + str(callee.arity()) + " arguments but got " + str(len(arguments)) + ".",
            )
        try:
            return callee.call(self, arguments)
        except RecursionError:
            # se reporta en la llamada más interna que logra construir el error
            raise LoxRuntimeError(expr.paren, "Stack overflow.")

    def visit_Get(self, expr):
        obj = self.evaluate(expr.object)
        if isinstance(obj, LoxInstance):
            return obj.get(expr.name)
        raise LoxRuntimeError(expr.name, "Only instances have properties.")

    def visit_Set(self, expr):
        obj = self.evaluate(expr.object)
        if not isinstance(obj, LoxInstance):
            raise LoxRuntimeError(expr.name, "Only instances have fields.")
        value = self.evaluate(expr.value)
        obj.set(expr.name, value)
        return value

    def visit_This(self, expr):
        return self._look_up_variable(expr.keyword, expr)

    def visit_Super(self, expr):
        distance = self.locals.get(expr)
        if distance is None:
            raise LoxRuntimeError(expr.keyword, "Can't use 'super' outside of a class.")
        superclass = self.environment.get_at(distance, "super")
        # `this` vive un scope más adentro que `super`
        instance = self.environment.get_at(distance - 1, "this")
        method = superclass.find_method(expr.method.lexeme)
        if method is None:
            raise LoxRuntimeError(expr.method, "Undefined property '" + expr.method.lexeme + "'.")
        return method.bind(instance)

    # --- utilidades ---
    def _look_up_variable(self, name, expr):
        distance = self.locals.get(expr)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def _check_number_operand(self, operator, operand):
        if _is_number(operand):
            return
        raise LoxRuntimeError(operator, "Operand must be a number.")

    def _check_number_operands(self, operator, left, right):
        if _is_number(left) and _is_number(right):
            return
        raise LoxRuntimeError(operator, "Operands must be numbers.")
