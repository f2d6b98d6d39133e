# construye texto DOT (Graphviz) para un programa: lista de sentencias
from lox.runtime.interpreter import stringify


class DotBuilder:
    def __init__(self):
        self.lines = []
        self.counter = 0

    def nid(self):
        s = "n" + str(self.counter)
        self.counter = self.counter + 1
        return s

    def add(self, s):
        self.lines.append(s)

    def escape(self, s):
        res = ""
        for ch in s:
            if ch == '"':
                res = res + '\\"'
            elif ch == "\\":
                res = res + "\\\\"
            elif ch == "\n":
                res = res + "\\n"
            else:
                res = res + ch
        return res

    def build(self, statements):
        self.lines = []
        self.counter = 0
        self.add("digraph AST {")
        self.add("node [shape=box, fontsize=10];")
        root = self.nid()
        self.add(root + ' [label="Program"];')
        for stmt in statements:
            child_id = self._emit(stmt)
            self.add(root + " -> " + child_id + ' [label="stmt"];')
        self.add("}")
        return "\n".join(self.lines)

    def _label_of(self, node):
        name = node.__class__.__name__
        # etiquetas especiales primero
        if name == "Literal":
            if isinstance(node.value, str):
                return 'Literal\n"' + node.value + '"'
            return "Literal\n" + stringify(node.value)
        if name == "FunctionDecl":
            params = ", ".join(p.lexeme for p in node.params)
            return "Function\n" + node.name.lexeme + "(" + params + ")"
        if name == "ClassDecl":
            if node.superclass is not None:
                return "Class\n" + node.name.lexeme + " < " + node.superclass.name.lexeme
            return "Class\n" + node.name.lexeme
        if name == "Super":
            return "Super\n" + node.method.lexeme

        # genérico
        if hasattr(node, "operator"):
            return name + "\n" + node.operator.lexeme
        if hasattr(node, "name"):
            return name + "\n" + node.name.lexeme
        return name

    def _children_of(self, node):
        out = []
        n = node.__class__.__name__
        if n == "Block":
            for s in node.statements:
                out.append(("stmt", s))
        elif n == "VarDecl":
            if node.initializer is not None:
                out.append(("init", node.initializer))
        elif n == "Assign":
            out.append(("value", node.value))
        elif n == "If":
            out.append(("cond", node.condition))
            out.append(("then", node.then_branch))
            if node.else_branch is not None:
                out.append(("else", node.else_branch))
        elif n == "While":
            out.append(("cond", node.condition))
            out.append(("body", node.body))
        elif n == "Return":
            if node.value is not None:
                out.append(("value", node.value))
        elif n == "ExprStmt" or n == "Print" or n == "Grouping":
            out.append(("expr", node.expression))
        elif n == "Unary":
            out.append(("expr", node.right))
        elif n == "Binary" or n == "Logical":
            out.append(("L", node.left))
            out.append(("R", node.right))
        elif n == "Call":
            out.append(("callee", node.callee))
            for a in node.arguments:
                out.append(("arg", a))
        elif n == "Get":
            # el nombre de la propiedad ya aparece en la etiqueta
            out.append(("obj", node.object))
        elif n == "Set":
            out.append(("obj", node.object))
            out.append(("value", node.value))
        elif n == "FunctionDecl":
            for s in node.body:
                out.append(("body", s))
        elif n == "ClassDecl":
            for m in node.methods:
                out.append(("method", m))
        return out

    def _emit(self, node):
        my = self.nid()
        self.add(my + ' [label="' + self.escape(self._label_of(node)) + '"];')
        for edge_lbl, ch in self._children_of(node):
            child_id = self._emit(ch)
            self.add(my + " -> " + child_id + ' [label="' + self.escape(edge_lbl) + '"];')
        return my
