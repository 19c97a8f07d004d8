class ASTNode:
    # Source position (1-based). Parser sets these.
    line: int | None = None
    column: int | None = None


class Program(ASTNode):
    def __init__(self, statements):
        self.statements = statements


class Block(ASTNode):
    def __init__(self, statements):
        self.statements = statements


class Assignment(ASTNode):
    def __init__(self, name, value):
        self.name = name    # target identifier
        self.value = value  # expression


class PrintCall(ASTNode):
    def __init__(self, expr):
        self.expr = expr


class If(ASTNode):
    def __init__(self, condition, then_block, else_block=None):
        self.condition = condition
        self.then_block = then_block
        self.else_block = else_block


class While(ASTNode):
    def __init__(self, condition, body):
        self.condition = condition
        self.body = body


class For(ASTNode):
    def __init__(self, var_name, count_expr, body):
        # for <var_name> in range(<count_expr>)
        self.var_name = var_name
        self.count_expr = count_expr
        self.body = body


class FunctionDef(ASTNode):
    def __init__(self, name, params, body):
        self.name = name
        self.params = params  # list[str]
        self.body = body      # Block


class ExprStatement(ASTNode):
    def __init__(self, expr):
        self.expr = expr


class Call(ASTNode):
    def __init__(self, name, args):
        self.name = name
        self.args = args


class BinaryOp(ASTNode):
    # op is "+" in general expressions; comparisons appear only as conditions
    def __init__(self, left, op, right):
        self.left = left
        self.op = op
        self.right = right


class Literal(ASTNode):
    def __init__(self, value):
        self.value = value  # float | str | bool


class Identifier(ASTNode):
    def __init__(self, name):
        self.name = name
