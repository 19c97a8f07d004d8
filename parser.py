from ast_nodes import (
    Program, Block, Assignment, PrintCall, If, While, For, FunctionDef, ExprStatement,
    Call, BinaryOp, Literal, Identifier,
)
from errors import (
    PaaniniSyntaxError,
    AssignmentTargetError,
    PrintSyntaxError,
    ForSyntaxError,
    ConditionSyntaxError,
)

COMPARE_OPS = {
    "EQEQ": "==",
    "NOTEQ": "!=",
    "LT": "<",
    "LTE": "<=",
    "GT": ">",
    "GTE": ">=",
}

COMPOUND_STARTS = ("IF", "ELSE", "WHILE", "FOR", "FUNC")
KEYWORD_TYPES = ("PRINT", "IF", "ELSE", "WHILE", "FOR", "FUNC", "RANGE", "IN", "BOOL")
STATEMENT_END = ("NEWLINE", "EOF", "BLOCK_END", "ELSE")

FOR_SHAPE = "for-loop header must look like: paribhraman <name> in paridhi(<expr>):"


class Parser:
    def __init__(self, lexer):
        self.lexer = lexer
        self.current_token = self.lexer.get_next_token()
        self.next_token = self.lexer.get_next_token()

    # move to next token, but only if it matches what we expect
    def eat(self, token_type):
        if self.current_token.type == token_type:
            self.current_token = self.next_token
            self.next_token = self.lexer.get_next_token()
        else:
            tok = self.current_token
            raise PaaniniSyntaxError(f"expected {token_type}, got {tok.type}", tok.line, tok.column)

    def error_here(self, message, error_class=PaaniniSyntaxError):
        tok = self.current_token
        raise error_class(message, tok.line, tok.column)

    def at(self, node, tok):
        node.line = tok.line
        node.column = tok.column
        return node

    def skip_newlines(self):
        while self.current_token.type == "NEWLINE":
            self.eat("NEWLINE")

    # ---------- TOP LEVEL ----------
    def parse(self):
        statements = []
        self.skip_newlines()

        while self.current_token.type != "EOF":
            try:
                statements.append(self.statement())
            except RecursionError:
                self.error_here("expression is nested too deeply")
            self.skip_newlines()

        return Program(statements)

    # ---------- STATEMENTS ----------
    def statement(self):
        tok = self.current_token

        if tok.type in KEYWORD_TYPES and self.next_token.type == "ASSIGN":
            self.error_here("cannot assign to a keyword", AssignmentTargetError)

        if tok.type == "FUNC":
            return self.func_def()
        if tok.type == "IF":
            return self.if_statement()
        if tok.type == "ELSE":
            self.error_here("else used without a preceding if")
        if tok.type == "WHILE":
            return self.while_statement()
        if tok.type == "FOR":
            return self.for_statement()

        return self.simple_statement()

    def simple_statement(self):
        tok = self.current_token
        if tok.type in COMPOUND_STARTS:
            self.error_here("a block statement cannot follow ':' on the same line")

        if tok.type == "PRINT":
            node = self.print_statement()
        elif tok.type == "IDENT" and self.next_token.type == "ASSIGN":
            node = self.assignment()
        else:
            expr = self.expr()
            node = self.at(ExprStatement(expr), tok)

        self.end_statement()
        return node

    def end_statement(self):
        tok = self.current_token
        if tok.type == "ASSIGN":
            self.error_here("assignment target must be a single identifier", AssignmentTargetError)
        if tok.type in COMPARE_OPS:
            self.error_here("comparisons are only allowed in an if or while condition", ConditionSyntaxError)
        if tok.type == "NEWLINE":
            self.eat("NEWLINE")
            return
        if tok.type not in STATEMENT_END:
            self.error_here(f"unexpected {tok.type} after statement")

    def assignment(self):
        name_tok = self.current_token
        self.eat("IDENT")
        self.eat("ASSIGN")
        value = self.expr()
        return self.at(Assignment(name_tok.value, value), name_tok)

    def print_statement(self):
        tok = self.current_token
        self.eat("PRINT")
        shape = "print takes exactly one parenthesized expression"

        if self.current_token.type != "LPAREN":
            self.error_here(shape, PrintSyntaxError)
        self.eat("LPAREN")
        if self.current_token.type == "RPAREN":
            self.error_here(f"{shape}, got none", PrintSyntaxError)

        expr = self.expr()

        if self.current_token.type == "COMMA":
            self.error_here(f"{shape}, got several", PrintSyntaxError)
        if self.current_token.type in COMPARE_OPS:
            self.error_here("comparisons are only allowed in an if or while condition", ConditionSyntaxError)
        if self.current_token.type != "RPAREN":
            self.error_here(shape, PrintSyntaxError)
        self.eat("RPAREN")

        if self.current_token.type not in STATEMENT_END:
            self.error_here(shape, PrintSyntaxError)

        return self.at(PrintCall(expr), tok)

    def expect_colon(self, context):
        if self.current_token.type != "COLON":
            self.error_here(f"expected ':' after {context} header")
        self.eat("COLON")

    def block(self):
        # indented block, or a single simple statement on the header line
        tok = self.current_token
        if tok.type != "NEWLINE":
            return self.at(Block([self.simple_statement()]), tok)

        self.eat("NEWLINE")
        start = self.current_token
        self.eat("BLOCK_START")
        statements = []
        while self.current_token.type != "BLOCK_END":
            statements.append(self.statement())
            self.skip_newlines()
        self.eat("BLOCK_END")
        return self.at(Block(statements), start)

    def if_statement(self):
        tok = self.current_token
        self.eat("IF")
        condition = self.condition()
        self.expect_colon("if")
        then_block = self.block()

        else_block = None
        if self.current_token.type == "ELSE":
            self.eat("ELSE")
            self.expect_colon("else")
            else_block = self.block()

        return self.at(If(condition, then_block, else_block), tok)

    def while_statement(self):
        tok = self.current_token
        self.eat("WHILE")
        condition = self.condition()
        self.expect_colon("while")
        body = self.block()
        return self.at(While(condition, body), tok)

    def for_statement(self):
        tok = self.current_token
        self.eat("FOR")

        if self.current_token.type != "IDENT":
            self.error_here(FOR_SHAPE, ForSyntaxError)
        var_name = self.current_token.value
        self.eat("IDENT")

        for expected in ("IN", "RANGE", "LPAREN"):
            if self.current_token.type != expected:
                self.error_here(FOR_SHAPE, ForSyntaxError)
            self.eat(expected)

        if self.current_token.type == "RPAREN":
            self.error_here("range takes exactly one argument", ForSyntaxError)
        count_expr = self.expr()
        if self.current_token.type != "RPAREN":
            self.error_here("range takes exactly one argument", ForSyntaxError)
        self.eat("RPAREN")

        if self.current_token.type != "COLON":
            self.error_here(FOR_SHAPE, ForSyntaxError)
        self.eat("COLON")

        body = self.block()
        return self.at(For(var_name, count_expr, body), tok)

    def func_def(self):
        tok = self.current_token
        self.eat("FUNC")
        if self.current_token.type != "IDENT":
            self.error_here("expected routine name after karya")

        name = self.current_token.value
        self.eat("IDENT")
        self.eat("LPAREN")

        params = []
        if self.current_token.type != "RPAREN":
            params.append(self.param(params))
            while self.current_token.type == "COMMA":
                self.eat("COMMA")
                params.append(self.param(params))

        self.eat("RPAREN")
        self.expect_colon("karya")
        body = self.block()
        return self.at(FunctionDef(name, params, body), tok)

    def param(self, seen):
        if self.current_token.type != "IDENT":
            self.error_here("expected parameter name")
        name = self.current_token.value
        if name in seen:
            self.error_here(f"duplicate parameter '{name}'")
        self.eat("IDENT")
        return name

    # ---------- CONDITIONS ----------
    # condition -> "(" expr cmp expr ")" | expr cmp expr
    def condition(self):
        if self.current_token.type in ("COLON", "NEWLINE", "EOF"):
            self.error_here("missing condition", ConditionSyntaxError)

        if self.current_token.type == "LPAREN":
            self.eat("LPAREN")
            if self.current_token.type == "RPAREN":
                self.error_here("empty condition", ConditionSyntaxError)
            left = self.expr()
            if self.current_token.type in COMPARE_OPS:
                node = self.comparison(left)
                if self.current_token.type != "RPAREN":
                    self.error_here("expected ')' to close the condition", ConditionSyntaxError)
                self.eat("RPAREN")
                return node
            if self.current_token.type != "RPAREN":
                self.error_here("expected ')' to close the condition", ConditionSyntaxError)
            self.eat("RPAREN")
            # "(a + 1) < b": the parenthesised part was only the left operand
            left = self.expr_rest(left)
        else:
            left = self.expr()

        if self.current_token.type not in COMPARE_OPS:
            self.error_here(
                "condition must compare two expressions with ==, !=, <, >, <= or >=",
                ConditionSyntaxError,
            )
        return self.comparison(left)

    def comparison(self, left):
        op_tok = self.current_token
        self.eat(op_tok.type)
        right = self.expr()
        if self.current_token.type in COMPARE_OPS:
            self.error_here("comparisons cannot be chained", ConditionSyntaxError)
        return self.at(BinaryOp(left, COMPARE_OPS[op_tok.type], right), op_tok)

    # ---------- EXPRESSIONS ----------
    # expr -> term ("+" term)*
    def expr(self):
        return self.expr_rest(self.term())

    def expr_rest(self, node):
        while self.current_token.type == "PLUS":
            op_tok = self.current_token
            self.eat("PLUS")
            right = self.term()
            node = self.at(BinaryOp(node, "+", right), op_tok)
        return node

    # term -> NUMBER | STRING | BOOL | IDENT | call | (expr)
    def term(self):
        tok = self.current_token

        if tok.type in ("NUMBER", "STRING", "BOOL"):
            self.eat(tok.type)
            return self.at(Literal(tok.value), tok)

        if tok.type == "IDENT":
            if self.next_token.type == "LPAREN":
                return self.finish_call()
            self.eat("IDENT")
            return self.at(Identifier(tok.value), tok)

        if tok.type == "LPAREN":
            self.eat("LPAREN")
            node = self.expr()
            if self.current_token.type in COMPARE_OPS:
                self.error_here("a comparison cannot be wrapped in extra parentheses", ConditionSyntaxError)
            self.eat("RPAREN")
            return node

        if tok.type == "PRINT":
            self.error_here("print is a statement and cannot be used inside an expression", PrintSyntaxError)
        if tok.type == "RANGE":
            self.error_here("range can only be used in a for-loop header", ForSyntaxError)

        self.error_here(f"unexpected token in expression: {tok.type}")

    def finish_call(self):
        name_tok = self.current_token
        self.eat("IDENT")
        self.eat("LPAREN")

        args = []
        if self.current_token.type != "RPAREN":
            args.append(self.expr())
            while self.current_token.type == "COMMA":
                self.eat("COMMA")
                args.append(self.expr())

        self.eat("RPAREN")
        return self.at(Call(name_tok.value, args), name_tok)
