# Lox - valores invocables y objetos
# ----------------------------------
# Tres formas de invocable: funciones nativas, funciones de usuario
# (closures) y clases. Las instancias guardan sus campos y apuntan a su
# clase, compartida entre todas las instancias.
import time

from lox.runtime.environment import Environment
from lox.runtime.errors import LoxRuntimeError


class LoxCallable:
    def arity(self):
        raise NotImplementedError

    def call(self, interpreter, arguments):
        raise NotImplementedError


# función nativa: impl(interpreter, arguments) -> valor
class NativeFunction(LoxCallable):
    def __init__(self, name, arity, impl):
        self.name = name
        self._arity = arity
        self.impl = impl

    def arity(self):
        return self._arity

    def call(self, interpreter, arguments):
        return self.impl(interpreter, arguments)

    def __str__(self):
        return "<native fn>"


def _clock(interpreter, arguments):
    return float(time.time())


def native_functions():
    return [NativeFunction("clock", 0, _clock)]


class LoxFunction(LoxCallable):
    def __init__(self, declaration, closure, is_initializer=False):
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    def arity(self):
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        # cada llamada tiene su propio entorno, hijo del closure (no del llamador)
        env = Environment(self.closure)
        i = 0
        while i < len(self.declaration.params):
            env.define(self.declaration.params[i].lexeme, arguments[i])
            i += 1

        signal = interpreter.execute_block(self.declaration.body, env)

        # un inicializador siempre devuelve la instancia
        if self.is_initializer:
            return self.closure.get_at(0, "this")
        if signal is not None:
            return signal.value
        return None

    # método ligado: closure nuevo con `this` -> instancia
    def bind(self, instance):
        env = Environment(self.closure)
        env.define("this", instance)
        return LoxFunction(self.declaration, env, self.is_initializer)

    def __str__(self):
        return "<fn " + self.declaration.name.lexeme + ">"


class LoxClass(LoxCallable):
    def __init__(self, name, superclass, methods):
        self.name = name
        self.superclass = superclass
        self.methods = methods  # nombre -> LoxFunction sin ligar

    # busca en la clase y luego por la cadena de herencia
    def find_method(self, name):
        cur = self
        while cur is not None:
            if name in cur.methods:
                return cur.methods[name]
            cur = cur.superclass
        return None

    def arity(self):
        initializer = self.find_method("init")
        if initializer is None:
            return 0
        return initializer.arity()

    def call(self, interpreter, arguments):
        instance = LoxInstance(self)
        initializer = self.find_method("init")
        if initializer is not None:
            initializer.bind(instance).call(interpreter, arguments)
        return instance

    def __str__(self):
        return self.name


class LoxInstance:
    def __init__(self, klass):
        self.klass = klass
        self.fields = {}

    # los campos ocultan a los métodos
    def get(self, name):
        if name.lexeme in self.fields:
            return self.fields[name.lexeme]

        method = self.klass.find_method(name.lexeme)
        if method is not None:
            return method.bind(self)

        raise LoxRuntimeError(name, "Undefined property '" + name.lexeme + "'.")

    def set(self, name, value):
        self.fields[name.lexeme] = value

    def __str__(self):
        return self.klass.name + " instance"
