# Lox - parser
# ------------
# Descenso recursivo sobre la lista de tokens. Los errores se reportan al
# colector de diagnósticos; tras un error el parser se resincroniza en el
# siguiente límite de sentencia para poder reportar varios por corrida.
from lox.front.tokens import TokenType
from lox.sema.ast import (
    Literal, Variable, Assign, Logical, Binary, Unary, Call, Grouping,
    Get, Set, This, Super,
    ExprStmt, Print, VarDecl, Block, If, While, FunctionDecl, Return, ClassDecl,
)

T = TokenType

MAX_ARGS = 255

# palabras que suelen iniciar una sentencia (puntos de resincronización)
STATEMENT_START = (
    T.CLASS, T.FUN, T.VAR, T.FOR, T.IF, T.WHILE, T.PRINT, T.RETURN,
)


class ParseError(Exception):
    pass


class Parser:
    def __init__(self, tokens, diagnostics):
        self.tokens = tokens
        self.diagnostics = diagnostics
        self.current = 0

    # program → declaration* EOF
    def parse(self):
        statements = []
        while not self._at_end():
            stmt = self._declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    # --- declaraciones ---
    def _declaration(self):
        try:
            if self._match(T.CLASS):
                return self._class_declaration()
            if self._match(T.FUN):
                return self._function("function")
            if self._match(T.VAR):
                return self._var_declaration()
            return self._statement()
        except ParseError:
            self._synchronize()
            return None

    def _class_declaration(self):
        name = self._consume(T.IDENTIFIER, "Expect class name.")

        superclass = None
        if self._match(T.LESS):
            self._consume(T.IDENTIFIER, "Expect superclass name.")
            superclass = Variable(self._previous())

        self._consume(T.LEFT_BRACE, "Expect '{' before class body.")
        methods = []
        while not self._check(T.RIGHT_BRACE) and not self._at_end():
            methods.append(self._function("method"))
        self._consume(T.RIGHT_BRACE, "Expect '}' after class body.")
        return ClassDecl(name, superclass, methods)

    def _function(self, kind):
        name = self._consume(T.IDENTIFIER, "Expect " + kind + " name.")
        self._consume(T.LEFT_PAREN, "Expect '(' after " + kind + " name.")
        params = []
        if not self._check(T.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGS:
                    self._error(self._peek(), "Can't have more than " + str(MAX_ARGS) + " parameters.")
                params.append(self._consume(T.IDENTIFIER, "Expect parameter name."))
                if not self._match(T.COMMA):
                    break
        self._consume(T.RIGHT_PAREN, "Expect ')' after parameters.")

        self._consume(T.LEFT_BRACE, "Expect '{' before " + kind + " body.")
        body = self._block()
        return FunctionDecl(name, params, body)

    def _var_declaration(self):
        name = self._consume(T.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self._match(T.EQUAL):
            initializer = self._expression()
        self._consume(T.SEMICOLON, "Expect ';' after variable declaration.")
        return VarDecl(name, initializer)

    # --- sentencias ---
    def _statement(self):
        if self._match(T.FOR):
            return self._for_statement()
        if self._match(T.IF):
            return self._if_statement()
        if self._match(T.PRINT):
            return self._print_statement()
        if self._match(T.RETURN):
            return self._return_statement()
        if self._match(T.WHILE):
            return self._while_statement()
        if self._match(T.LEFT_BRACE):
            return Block(self._block())
        return self._expression_statement()

    # for (init; cond; incr) body  ==>  { init; while (cond) { body; incr; } }
    def _for_statement(self):
        self._consume(T.LEFT_PAREN, "Expect '(' after 'for'.")

        if self._match(T.SEMICOLON):
            initializer = None
        elif self._match(T.VAR):
            initializer = self._var_declaration()
        else:
            initializer = self._expression_statement()

        condition = None
        if not self._check(T.SEMICOLON):
            condition = self._expression()
        self._consume(T.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self._check(T.RIGHT_PAREN):
            increment = self._expression()
        self._consume(T.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self._statement()

        if increment is not None:
            body = Block([body, ExprStmt(increment)])
        if condition is None:
            condition = Literal(True)
        body = While(condition, body)
        if initializer is not None:
            body = Block([initializer, body])
        return body

    def _if_statement(self):
        self._consume(T.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self._expression()
        self._consume(T.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self._statement()
        else_branch = None
        if self._match(T.ELSE):
            else_branch = self._statement()
        return If(condition, then_branch, else_branch)

    def _print_statement(self):
        value = self._expression()
        self._consume(T.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def _return_statement(self):
        keyword = self._previous()
        value = None
        if not self._check(T.SEMICOLON):
            value = self._expression()
        self._consume(T.SEMICOLON, "Expect ';' after return value.")
        return Return(keyword, value)

    def _while_statement(self):
        self._consume(T.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self._expression()
        self._consume(T.RIGHT_PAREN, "Expect ')' after condition.")
        body = self._statement()
        return While(condition, body)

    def _block(self):
        statements = []
        while not self._check(T.RIGHT_BRACE) and not self._at_end():
            stmt = self._declaration()
            if stmt is not None:
                statements.append(stmt)
        self._consume(T.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def _expression_statement(self):
        expr = self._expression()
        self._consume(T.SEMICOLON, "Expect ';' after expression.")
        return ExprStmt(expr)

    # --- expresiones ---
    def _expression(self):
        return self._assignment()

    def _assignment(self):
        expr = self._or()

        if self._match(T.EQUAL):
            equals = self._previous()
            value = self._assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            if isinstance(expr, Get):
                return Set(expr.object, expr.name, value)

            # se reporta pero no hace falta resincronizar
            self._error(equals, "Invalid assignment target.")

        return expr

    def _or(self):
        expr = self._and()
        while self._match(T.OR):
            operator = self._previous()
            right = self._and()
            expr = Logical(expr, operator, right)
        return expr

    def _and(self):
        expr = self._equality()
        while self._match(T.AND):
            operator = self._previous()
            right = self._equality()
            expr = Logical(expr, operator, right)
        return expr

    def _equality(self):
        return self._binary(self._comparison, T.BANG_EQUAL, T.EQUAL_EQUAL)

    def _comparison(self):
        return self._binary(self._term, T.GREATER, T.GREATER_EQUAL, T.LESS, T.LESS_EQUAL)

    def _term(self):
        return self._binary(self._factor, T.MINUS, T.PLUS)

    def _factor(self):
        return self._binary(self._unary, T.SLASH, T.STAR)

    # nivel binario asociativo a izquierda
    def _binary(self, operand, *types):
        expr = operand()
        while self._match(*types):
            operator = self._previous()
            right = operand()
            expr = Binary(expr, operator, right)
        return expr

    def _unary(self):
        if self._match(T.BANG, T.MINUS):
            operator = self._previous()
            right = self._unary()
            return Unary(operator, right)
        return self._call()

    def _call(self):
        expr = self._primary()
        while True:
            if self._match(T.LEFT_PAREN):
                expr = self._finish_call(expr)
            elif self._match(T.DOT):
                name = self._consume(T.IDENTIFIER, "Expect property name after '.'.")
                expr = Get(expr, name)
            else:
                break
        return expr

    def _finish_call(self, callee):
        arguments = []
        if not self._check(T.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGS:
                    self._error(self._peek(), "Can't have more than " + str(MAX_ARGS) + " arguments.")
                arguments.append(self._expression())
                if not self._match(T.COMMA):
                    break
        paren = self._consume(T.RIGHT_PAREN, "Expect ')' after arguments.")
        return Call(callee, paren, arguments)

    def _primary(self):
        if self._match(T.FALSE):
            return Literal(False)
        if self._match(T.TRUE):
            return Literal(True)
        if self._match(T.NIL):
            return Literal(None)
        if self._match(T.NUMBER, T.STRING):
            return Literal(self._previous().literal)
        if self._match(T.SUPER):
            keyword = self._previous()
            self._consume(T.DOT, "Expect '.' after 'super'.")
            method = self._consume(T.IDENTIFIER, "Expect superclass method name.")
            return Super(keyword, method)
        if self._match(T.THIS):
            return This(self._previous())
        if self._match(T.IDENTIFIER):
            return Variable(self._previous())
        if self._match(T.LEFT_PAREN):
            expr = self._expression()
            self._consume(T.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise self._error(self._peek(), "Expect expression.")

    # --- utilidades ---
    def _match(self, *types):
        for t in types:
            if self._check(t):
                self._advance()
                return True
        return False

    def _check(self, type):
        if self._at_end():
            return False
        return self._peek().type == type

    def _advance(self):
        if not self._at_end():
            self.current += 1
        return self._previous()

    def _at_end(self):
        return self._peek().type == T.EOF

    def _peek(self):
        return self.tokens[self.current]

    def _previous(self):
        return self.tokens[self.current - 1]

    def _consume(self, type, message):
        if self._check(type):
            return self._advance()
        raise self._error(self._peek(), message)

    # reporta y devuelve el error; quien llama decide si lo lanza
    def _error(self, token, message):
        self.diagnostics.token_error(token, message)
        return ParseError(message)

    # descarta tokens hasta el probable inicio de la siguiente sentencia
    def _synchronize(self):
        self._advance()
        while not self._at_end():
            if self._previous().type == T.SEMICOLON:
                return
            if self._peek().type in STATEMENT_START:
                return
            self._advance()
