# Lox - diagnósticos
# ------------------
# Colector explícito de errores para scanner, parser y resolver, y
# formato de los errores de ejecución.
from lox.front.tokens import TokenType


class Diagnostics:
    def __init__(self):
        self.errors = []           # errores estáticos (léxicos, sintácticos, de resolución)
        self.runtime_errors = []   # a lo sumo uno por ejecución

    @property
    def had_error(self):
        return len(self.errors) > 0

    @property
    def had_runtime_error(self):
        return len(self.runtime_errors) > 0

    # registra un error con línea y ubicación opcional
    def report(self, line, where, message):
        self.errors.append("[line " + str(line) + "] Error" + where + ": " + message)

    # error sin token (scanner)
    def error(self, line, message):
        self.report(line, "", message)

    # error asociado a un token (parser, resolver)
    def token_error(self, token, message):
        if token.type == TokenType.EOF:
            self.report(token.line, " at end", message)
        else:
            self.report(token.line, " at '" + token.lexeme + "'", message)

    def runtime_error(self, err):
        self.runtime_errors.append(str(err) + "\n[line " + str(err.token.line) + "]")

    def messages(self):
        return self.errors + self.runtime_errors
