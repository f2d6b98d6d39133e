# Lox - scanner
# -------------
# Convierte el texto fuente en una lista plana de tokens terminada en EOF.
# Los errores léxicos van al colector de diagnósticos y no producen token.
from lox.front.tokens import Token, TokenType, KEYWORDS

T = TokenType

SINGLE = {
    "(": T.LEFT_PAREN,
    ")": T.RIGHT_PAREN,
    "{": T.LEFT_BRACE,
    "}": T.RIGHT_BRACE,
    ",": T.COMMA,
    ".": T.DOT,
    "-": T.MINUS,
    "+": T.PLUS,
    ";": T.SEMICOLON,
    "*": T.STAR,
}

# operador -> (tipo con '=' a continuación, tipo solo)
WITH_EQUAL = {
    "!": (T.BANG_EQUAL, T.BANG),
    "=": (T.EQUAL_EQUAL, T.EQUAL),
    "<": (T.LESS_EQUAL, T.LESS),
    ">": (T.GREATER_EQUAL, T.GREATER),
}


def _is_digit(ch):
    return "0" <= ch <= "9"


def _is_alpha(ch):
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def _is_alnum(ch):
    return _is_alpha(ch) or _is_digit(ch)


class Scanner:
    def __init__(self, source, diagnostics):
        self.source = source
        self.diagnostics = diagnostics
        self.tokens = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self):
        while not self._at_end():
            # inicio del siguiente lexema
            self.start = self.current
            self._scan_token()
        self.tokens.append(Token(T.EOF, "", None, self.line))
        return self.tokens

    def _scan_token(self):
        c = self._advance()
        if c in SINGLE:
            self._add(SINGLE[c])
        elif c in WITH_EQUAL:
            both, alone = WITH_EQUAL[c]
            self._add(both if self._match("=") else alone)
        elif c == "/":
            if self._match("/"):
                # comentario hasta fin de línea
                while self._peek() != "\n" and not self._at_end():
                    self._advance()
            else:
                self._add(T.SLASH)
        elif c == " " or c == "\r" or c == "\t":
            pass
        elif c == "\n":
            self.line += 1
        elif c == '"':
            self._string()
        elif _is_digit(c):
            self._number()
        elif _is_alpha(c):
            self._identifier()
        else:
            self.diagnostics.error(self.line, "Unexpected character.")

    def _string(self):
        while self._peek() != '"' and not self._at_end():
            if self._peek() == "\n":
                self.line += 1
            self._advance()

        if self._at_end():
            self.diagnostics.error(self.line, "Unterminated string.")
            return

        # comilla de cierre
        self._advance()
        self._add(T.STRING, self.source[self.start + 1 : self.current - 1])

    def _number(self):
        while _is_digit(self._peek()):
            self._advance()

        # parte fraccionaria
        if self._peek() == "." and _is_digit(self._peek_next()):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()

        self._add(T.NUMBER, float(self.source[self.start : self.current]))

    def _identifier(self):
        while _is_alnum(self._peek()):
            self._advance()
        text = self.source[self.start : self.current]
        self._add(KEYWORDS.get(text, T.IDENTIFIER))

    # --- utilidades ---
    def _at_end(self):
        return self.current >= len(self.source)

    def _advance(self):
        ch = self.source[self.current]
        self.current += 1
        return ch

    def _match(self, expected):
        if self._at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def _peek(self):
        if self._at_end():
            return "\0"
        return self.source[self.current]

    def _peek_next(self):
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def _add(self, type, literal=None):
        text = self.source[self.start : self.current]
        self.tokens.append(Token(type, text, literal, self.line))
