# Lox - entornos de ejecución
# ---------------------------
# Cadena de scopes en runtime. Cada Environment tiene sus valores y un
# enlace al que lo encierra (None en el global). Los closures mantienen
# vivo su Environment por referencia, así que las mutaciones se ven desde
# todos los que lo comparten.
from lox.runtime.errors import LoxRuntimeError


class Environment:
    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    # define o redefine en este scope; nunca falla
    def define(self, name, value):
        self.values[name] = value

    def get(self, name):
        env = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.enclosing
        raise LoxRuntimeError(name, "Undefined variable '" + name.lexeme + "'.")

    # asigna en el primer scope donde exista; nunca crea la variable
    def assign(self, name, value):
        env = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.enclosing
        raise LoxRuntimeError(name, "Undefined variable '" + name.lexeme + "'.")

    # --- acceso por distancia ya resuelta ---
    def ancestor(self, distance):
        env = self
        i = 0
        while i < distance:
            if env.enclosing is None:
                raise LookupError("distancia " + str(distance) + " fuera de la cadena de entornos")
            env = env.enclosing
            i += 1
        return env

    def get_at(self, distance, name):
        return self.ancestor(distance).values[name]

    def assign_at(self, distance, name, value):
        self.ancestor(distance).values[name.lexeme] = value
