# Lox - ámbitos del resolver
# --------------------------
# Pila de scopes locales usada por el resolver. Cada scope mapea
# nombre -> "terminó de inicializarse" y recuerda qué lo abrió
# (bloque, función, método, inicializador, clase). El ámbito global nunca
# se apila: lo que no se encuentra aquí se busca como global en runtime.

FUNCTION_KINDS = ("function", "method", "initializer")
CLASS_KINDS = ("class", "subclass")


class ScopeError(Exception):
    pass


class Scope:
    def __init__(self, owner_kind="block"):
        self.table = {}               # nombre -> bool (definido)
        self.owner_kind = owner_kind  # "block" | "function" | "method" | "initializer" | "class" | "subclass"

    def declare(self, name):
        # valida redeclaración en el mismo ámbito
        if name in self.table:
            # vuelve a "no inicializado" para seguir validando el inicializador
            self.table[name] = False
            raise ScopeError("Already a variable with this name in this scope.")
        self.table[name] = False

    def define(self, name):
        self.table[name] = True

    def is_declared_only(self, name):
        return name in self.table and not self.table[name]


class ScopeStack:
    """Pila de scopes con utilidades de declaración y resolución."""

    def __init__(self):
        self.stack = []

    def __len__(self):
        return len(self.stack)

    # --- manejo de scopes ---
    def push(self, owner_kind="block"):
        scope = Scope(owner_kind)
        self.stack.append(scope)
        return scope

    def pop(self):
        return self.stack.pop()

    def peek(self):
        if len(self.stack) == 0:
            return None
        return self.stack[-1]

    # --- declaraciones ---
    def declare(self, name):
        scope = self.peek()
        if scope is not None:
            scope.declare(name)

    def define(self, name):
        scope = self.peek()
        if scope is not None:
            scope.define(name)

    # --- resolución ---
    def distance_to(self, name):
        """Saltos desde el scope más interno hasta el que declara `name`, o None."""
        i = len(self.stack) - 1
        while i >= 0:
            if name in self.stack[i].table:
                return len(self.stack) - 1 - i
            i -= 1
        return None

    # --- contexto actual ---
    def current_function_kind(self):
        i = len(self.stack) - 1
        while i >= 0:
            if self.stack[i].owner_kind in FUNCTION_KINDS:
                return self.stack[i].owner_kind
            i -= 1
        return "none"

    def current_class_kind(self):
        i = len(self.stack) - 1
        while i >= 0:
            if self.stack[i].owner_kind in CLASS_KINDS:
                return self.stack[i].owner_kind
            i -= 1
        return "none"
