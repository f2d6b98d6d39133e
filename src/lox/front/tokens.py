# Lox - tokens
# ------------
# Categorías léxicas y el token que produce el scanner.
from enum import Enum, auto


class TokenType(Enum):
    # un solo caracter
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # uno o dos caracteres
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # literales
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # palabras reservadas
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS = {
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}


# token inmutable: tipo, texto, valor literal opcional y línea
class Token:
    __slots__ = ("type", "lexeme", "literal", "line")

    def __init__(self, type, lexeme, literal, line):
        object.__setattr__(self, "type", type)
        object.__setattr__(self, "lexeme", lexeme)
        object.__setattr__(self, "literal", literal)
        object.__setattr__(self, "line", int(line))

    def __setattr__(self, name, value):
        raise AttributeError("Token es inmutable")

    def __repr__(self):
        return "Token(" + self.type.name + ", " + repr(self.lexeme) + ", line " + str(self.line) + ")"
