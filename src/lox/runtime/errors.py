# errores de ejecución: llevan el token ofensor para reportar la línea
class LoxRuntimeError(Exception):
    def __init__(self, token, message):
        Exception.__init__(self, message)
        self.token = token
        self.message = message
