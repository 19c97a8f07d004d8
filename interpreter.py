import logging
import sys

from ast_nodes import (
    Program, Block, Assignment, PrintCall, If, While, For, FunctionDef, ExprStatement,
    Call, BinaryOp, Literal, Identifier,
)
from builtin_ops import call_builtin
from environment import Function
from errors import (
    PaaniniError,
    PaaniniRuntimeError,
    OperatorTypeError,
    UnsupportedComparisonError,
    LoopLimitError,
    CallArityError,
)
from values import kind_name, to_text

logger = logging.getLogger(__name__)

MAX_LOOP_ITERATIONS = 10000
MAX_CALL_DEPTH = 100

COMPARISONS = ("==", "!=", "<", ">", "<=", ">=")


class Interpreter:
    def __init__(self, out=None, max_loop_iterations=MAX_LOOP_ITERATIONS, max_call_depth=MAX_CALL_DEPTH):
        self.out = out if out is not None else sys.stdout
        self.max_loop_iterations = max_loop_iterations
        self.max_call_depth = max_call_depth
        self.call_depth = 0

    def run(self, program, env):
        if not isinstance(program, Program):
            raise PaaniniRuntimeError("interpreter expects a Program node at the top")
        for stmt in program.statements:
            try:
                self.exec_stmt(stmt, env)
            except RecursionError:
                raise PaaniniRuntimeError("statement is nested too deeply", stmt.line, stmt.column) from None

    # -------- statements --------
    def exec_block(self, block, env):
        for stmt in block.statements:
            self.exec_stmt(stmt, env)

    def exec_stmt(self, node, env):
        if isinstance(node, Assignment):
            env.assign(node.name, self.eval_expr(node.value, env))
            return

        if isinstance(node, PrintCall):
            value = self.eval_expr(node.expr, env)
            self.builtin("print", [value], node)
            return

        if isinstance(node, If):
            if self.eval_condition(node.condition, env):
                self.exec_block(node.then_block, env)
            elif node.else_block is not None:
                self.exec_block(node.else_block, env)
            return

        if isinstance(node, While):
            self.exec_while(node, env, self.max_loop_iterations)
            return

        if isinstance(node, For):
            count = self.eval_expr(node.count_expr, env)
            # the loop variable lives in the enclosing scope, rebound every pass
            for item in self.builtin("range", [count], node):
                env.assign(node.var_name, item)
                self.exec_block(node.body, env)
            return

        if isinstance(node, FunctionDef):
            env.define_function(Function(node.name, node.params, node.body))
            return

        if isinstance(node, ExprStatement):
            self.eval_expr(node.expr, env)
            return

        if isinstance(node, Block):
            self.exec_block(node, env)
            return

        raise PaaniniRuntimeError(f"unknown statement: {type(node).__name__}", node.line, node.column)

    def exec_while(self, node, env, limit):
        iterations = 0
        while self.eval_condition(node.condition, env):
            if iterations == limit:
                raise LoopLimitError(f"while loop did not finish within {limit} iterations", node.line, node.column)
            iterations += 1
            self.exec_block(node.body, env)
        logger.debug("while loop at line %s finished after %d iterations", node.line, iterations)

    # -------- expressions --------
    def eval_expr(self, node, env):
        if isinstance(node, Literal):
            return node.value

        if isinstance(node, Identifier):
            return env.lookup(node.name, node.line, node.column)

        if isinstance(node, BinaryOp):
            if node.op != "+":
                raise UnsupportedComparisonError(
                    f"'{node.op}' can only be used in an if or while condition", node.line, node.column
                )
            return self.eval_sum(node, env)

        if isinstance(node, Call):
            return self.call(node, env)

        raise PaaniniRuntimeError(f"unknown expression: {type(node).__name__}", node.line, node.column)

    def eval_sum(self, node, env):
        # "a + b + c" is left-deep; walk the spine instead of recursing per operand
        spine = []
        while isinstance(node, BinaryOp) and node.op == "+":
            spine.append(node)
            node = node.left
        value = self.eval_expr(node, env)
        for op_node in reversed(spine):
            value = self.add(value, self.eval_expr(op_node.right, env), op_node)
        return value

    def add(self, left, right, node):
        lk, rk = kind_name(left), kind_name(right)
        if lk == "Number" and rk == "Number":
            return left + right
        if lk == "String" or rk == "String":
            return to_text(left) + to_text(right)
        raise OperatorTypeError(f"unsupported operand kinds for '+': {lk} and {rk}", node.line, node.column)

    def eval_condition(self, node, env) -> bool:
        if not isinstance(node, BinaryOp) or node.op not in COMPARISONS:
            raise UnsupportedComparisonError("condition must be a comparison", node.line, node.column)

        left = self.eval_expr(node.left, env)
        right = self.eval_expr(node.right, env)
        lk, rk = kind_name(left), kind_name(right)
        op = node.op

        if lk == "Number" and rk == "Number":
            if op == "==":
                return left == right
            if op == "!=":
                return left != right
            if op == "<":
                return left < right
            if op == ">":
                return left > right
            if op == "<=":
                return left <= right
            return left >= right

        if op in ("==", "!=") and lk == rk and lk in ("String", "Boolean", "Null"):
            return (left == right) == (op == "==")

        raise UnsupportedComparisonError(f"cannot compare {lk} {op} {rk}", node.line, node.column)

    def call(self, node, env):
        function = env.lookup_function(node.name, node.line, node.column)
        args = [self.eval_expr(arg, env) for arg in node.args]
        if len(args) != len(function.params):
            raise CallArityError(
                f"{function.name}() takes {len(function.params)} argument(s), got {len(args)}",
                node.line,
                node.column,
            )
        if self.call_depth >= self.max_call_depth:
            raise PaaniniRuntimeError(f"maximum call depth of {self.max_call_depth} exceeded", node.line, node.column)

        scope = env.child()
        for name, value in zip(function.params, args):
            scope.assign(name, value)

        logger.debug("call %s at depth %d", function.name, self.call_depth + 1)
        self.call_depth += 1
        try:
            self.exec_block(function.body, scope)
        except RecursionError:
            # deeply nested blocks can exhaust the Python stack before max_call_depth
            raise PaaniniRuntimeError(
                f"maximum call depth exceeded in {function.name}()", node.line, node.column
            ) from None
        finally:
            self.call_depth -= 1

        # routines have no return value
        return None

    def builtin(self, name, args, node):
        try:
            return call_builtin(name, args, self.out)
        except PaaniniError as e:
            if e.line is None:
                e.line, e.column = node.line, node.column
            raise
