# clase base para todos los nodos del ast; la identidad del nodo es la
# clave de la tabla de resolución, por eso no se redefine __eq__ ni __hash__
class Node:
    pass


# ---- expresiones ----
class Expr(Node):
    pass


# literal número, string, bool o nil
class Literal(Expr):
    def __init__(self, value):
        self.value = value


# lectura de variable por nombre
class Variable(Expr):
    def __init__(self, name):
        self.name = name


# asignación: name = value
class Assign(Expr):
    def __init__(self, name, value):
        self.name = name
        self.value = value


# and / or con cortocircuito
class Logical(Expr):
    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right


# operador binario, p. ej. a + b
class Binary(Expr):
    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right


# operador unario, p. ej. -x o !x
class Unary(Expr):
    def __init__(self, operator, right):
        self.operator = operator
        self.right = right


# llamada a función, método o clase; paren sirve para reportar la línea
class Call(Expr):
    def __init__(self, callee, paren, arguments=None):
        self.callee = callee
        self.paren = paren
        self.arguments = arguments if arguments is not None else []


# expresión entre paréntesis
class Grouping(Expr):
    def __init__(self, expression):
        self.expression = expression


# acceso a propiedad: obj.name
class Get(Expr):
    def __init__(self, object, name):
        self.object = object
        self.name = name


# escritura de propiedad: obj.name = value
class Set(Expr):
    def __init__(self, object, name, value):
        self.object = object
        self.name = name
        self.value = value


# referencia al receptor dentro de métodos
class This(Expr):
    def __init__(self, keyword):
        self.keyword = keyword


# super.method
class Super(Expr):
    def __init__(self, keyword, method):
        self.keyword = keyword
        self.method = method


# ---- sentencias ----
class Stmt(Node):
    pass


# sentencia de expresión, evaluar por efectos
class ExprStmt(Stmt):
    def __init__(self, expression):
        self.expression = expression


class Print(Stmt):
    def __init__(self, expression):
        self.expression = expression


# declaración de variable con inicializador opcional
class VarDecl(Stmt):
    def __init__(self, name, initializer):
        self.name = name
        self.initializer = initializer


# bloque de sentencias (nuevo ámbito)
class Block(Stmt):
    def __init__(self, statements=None):
        self.statements = statements if statements is not None else []


# sentencia condicional if/else
class If(Stmt):
    def __init__(self, condition, then_branch, else_branch):
        self.condition = condition
        self.then_branch = then_branch
        self.else_branch = else_branch


# bucle while(cond); el for se traduce a esto en el parser
class While(Stmt):
    def __init__(self, condition, body):
        self.condition = condition
        self.body = body


# declaración de función o método: nombre, tokens de parámetros y cuerpo
class FunctionDecl(Stmt):
    def __init__(self, name, params, body):
        self.name = name
        self.params = params
        self.body = body


# return expr?; marca salida de función
class Return(Stmt):
    def __init__(self, keyword, value):
        self.keyword = keyword
        self.value = value


# declaración de clase con superclase opcional (Variable) y métodos
class ClassDecl(Stmt):
    def __init__(self, name, superclass, methods):
        self.name = name
        self.superclass = superclass
        self.methods = methods or []
