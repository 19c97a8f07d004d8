from errors import (
    PaaniniLexicalError,
    UnterminatedStringError,
    IndentationMismatchError,
    MalformedBlockError,
)

TAB_WIDTH = 2
COMMENT_PREFIXES = ("#", "!!")

# Every keyword has a Devanagari spelling and a romanized alias.
KEYWORDS = {
    "दर्श": "PRINT",
    "darsh": "PRINT",
    "यदि": "IF",
    "yadi": "IF",
    "अन्यथा": "ELSE",
    "anyatha": "ELSE",
    "यावत्": "WHILE",
    "yavat": "WHILE",
    "परिभ्रमण": "FOR",
    "paribhraman": "FOR",
    "कार्य": "FUNC",
    "karya": "FUNC",
    "परिधि": "RANGE",
    "paridhi": "RANGE",
    "in": "IN",
}

BOOLEANS = {
    "सत्य": True,
    "satya": True,
    "असत्य": False,
    "asatya": False,
}


class Token:
    def __init__(self, type, value=None, line=1, column=1):
        self.type = type
        self.value = value
        self.line = line
        self.column = column

    def __repr__(self):
        if self.value is not None:
            return f"{self.type}({self.value})"
        return f"{self.type}"


def is_devanagari(ch):
    return "ऀ" <= ch <= "ॿ"


def is_devanagari_digit(ch):
    return "०" <= ch <= "९"


def is_ident_start(ch):
    if ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z"):
        return True
    # danda marks are punctuation, not letters
    return is_devanagari(ch) and not is_devanagari_digit(ch) and ch not in "।॥"


def is_ident_char(ch):
    return is_ident_start(ch) or ("0" <= ch <= "9") or is_devanagari_digit(ch)


def expand_indent(line, tab_width=TAB_WIDTH):
    # only leading tabs are normalized; tabs inside the line are plain whitespace
    stripped = line.lstrip(" \t")
    lead = line[: len(line) - len(stripped)]
    return lead.replace("\t", " " * tab_width) + stripped


def measure_indent(line, tab_width=TAB_WIDTH):
    expanded = expand_indent(line, tab_width)
    return len(expanded) - len(expanded.lstrip(" "))


def is_blank(line):
    """True for lines that never affect the indentation stack (empty or comment-only)."""
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_PREFIXES)


class IndentStack:
    """Stack of open indentation widths, starting at zero."""

    def __init__(self):
        self.widths = [0]

    @property
    def top(self):
        return self.widths[-1]

    @property
    def depth(self):
        return len(self.widths) - 1

    def push(self, width):
        self.widths.append(width)

    def dedent_to(self, width, line=None):
        # returns the number of closed blocks
        popped = 0
        while width < self.top:
            self.widths.pop()
            popped += 1
        if width != self.top:
            raise IndentationMismatchError(
                f"unindent to {width} spaces does not match any outer indentation level",
                line,
                1,
            )
        return popped


class Lexer:
    def __init__(self, text, tab_width=TAB_WIDTH):
        self.text = text
        self.tab_width = tab_width

        self.indents = IndentStack()
        self.block_opener = None  # COLON token waiting for its indented block
        self.tokens = None
        self.index = 0

        # per-line scanning state
        self.source = ""
        self.pos = 0
        self.current_char = None
        self.line = 1
        self.column = 1

    # ---------- TOKEN STREAM ----------
    def tokenize(self):
        if self.tokens is not None:
            return self.tokens

        self.tokens = []
        lines = self.text.split("\n")
        for lineno, raw in enumerate(lines, start=1):
            if is_blank(raw):
                continue
            width = measure_indent(raw, self.tab_width)
            self.handle_indentation(width, lineno)
            line_tokens = self.scan_line(expand_indent(raw, self.tab_width).strip(" \t\r"), lineno, width + 1)
            self.tokens.extend(line_tokens)
            last = line_tokens[-2] if len(line_tokens) > 1 else None
            if last is not None and last.type == "COLON":
                self.block_opener = last

        end_line = len(lines)
        if self.block_opener is not None:
            tok = self.block_opener
            raise MalformedBlockError("expected an indented block after ':' but input ended", tok.line, tok.column)
        while self.indents.depth > 0:
            self.indents.widths.pop()
            self.tokens.append(Token("BLOCK_END", line=end_line, column=1))
        self.tokens.append(Token("EOF", line=end_line, column=1))
        return self.tokens

    def get_next_token(self):
        tokens = self.tokenize()
        if self.index >= len(tokens):
            return tokens[-1]
        tok = tokens[self.index]
        self.index += 1
        return tok

    def handle_indentation(self, width, lineno):
        if self.block_opener is not None:
            tok = self.block_opener
            self.block_opener = None
            if width <= self.indents.top:
                raise MalformedBlockError("expected an indented block after ':'", tok.line, tok.column)
            self.indents.push(width)
            self.tokens.append(Token("BLOCK_START", line=lineno, column=width + 1))
            return

        if width > self.indents.top:
            raise IndentationMismatchError("unexpected indent", lineno, 1)

        if width < self.indents.top:
            for _ in range(self.indents.dedent_to(width, lineno)):
                self.tokens.append(Token("BLOCK_END", line=lineno, column=width + 1))

    # ---------- LINE SCANNER ----------
    def scan_line(self, source, lineno, first_column=1):
        # tokens of one physical line, always terminated by NEWLINE
        self.source = source
        self.pos = 0
        self.current_char = source[0] if source else None
        self.line = lineno
        self.column = first_column

        result = []
        while True:
            tok = self.next_line_token()
            if tok is None:
                break
            result.append(tok)
        result.append(Token("NEWLINE", line=self.line, column=self.column))
        return result

    def advance(self):
        self.pos += 1
        self.column += 1
        if self.pos >= len(self.source):
            self.current_char = None
        else:
            self.current_char = self.source[self.pos]

    def peek(self):
        nxt = self.pos + 1
        if nxt >= len(self.source):
            return None
        return self.source[nxt]

    def skip_whitespace(self):
        while self.current_char and self.current_char in " \t\r":
            self.advance()

    def at_comment(self):
        return self.current_char == "#" or (self.current_char == "!" and self.peek() == "!")

    def read_identifier(self):
        start_line, start_col = self.line, self.column
        result = ""
        while self.current_char and is_ident_char(self.current_char):
            result += self.current_char
            self.advance()

        if result in KEYWORDS:
            return Token(KEYWORDS[result], result, line=start_line, column=start_col)
        if result in BOOLEANS:
            return Token("BOOL", BOOLEANS[result], line=start_line, column=start_col)
        return Token("IDENT", result, line=start_line, column=start_col)

    def read_number(self):
        start_line, start_col = self.line, self.column
        result = ""
        has_dot = False

        while self.current_char and ("0" <= self.current_char <= "9" or self.current_char == "."):
            if self.current_char == ".":
                # a dot must be followed by a digit to be a fraction
                if has_dot or not ("0" <= (self.peek() or "") <= "9"):
                    break
                has_dot = True
            result += self.current_char
            self.advance()

        return Token("NUMBER", float(result), line=start_line, column=start_col)

    def read_string(self):
        start_line, start_col = self.line, self.column
        self.advance()  # skip opening quote
        result = ""

        while self.current_char and self.current_char != '"':
            if self.current_char == "\\":
                self.advance()
                if self.current_char is None:
                    break
                esc = self.current_char
                if esc == "n":
                    result += "\n"
                elif esc == "t":
                    result += "\t"
                else:
                    # covers \" and \\; unknown escapes are kept literally
                    result += esc
                self.advance()
                continue

            result += self.current_char
            self.advance()

        if self.current_char != '"':
            raise UnterminatedStringError("string literal is not closed", start_line, start_col)

        self.advance()  # skip closing quote
        return Token("STRING", result, line=start_line, column=start_col)

    def simple_token(self, type, width=1):
        tok = Token(type, line=self.line, column=self.column)
        for _ in range(width):
            self.advance()
        return tok

    def next_line_token(self):
        while self.current_char:
            if self.current_char in " \t\r":
                self.skip_whitespace()
                continue

            # comments run to the end of the physical line
            if self.at_comment():
                return None

            if is_ident_start(self.current_char):
                return self.read_identifier()

            if "0" <= self.current_char <= "9":
                return self.read_number()

            if self.current_char == '"':
                return self.read_string()

            if self.current_char == "=":
                if self.peek() == "=":
                    return self.simple_token("EQEQ", 2)
                return self.simple_token("ASSIGN")

            if self.current_char == "!" and self.peek() == "=":
                return self.simple_token("NOTEQ", 2)

            if self.current_char == "<":
                if self.peek() == "=":
                    return self.simple_token("LTE", 2)
                return self.simple_token("LT")

            if self.current_char == ">":
                if self.peek() == "=":
                    return self.simple_token("GTE", 2)
                return self.simple_token("GT")

            if self.current_char == "+":
                return self.simple_token("PLUS")
            if self.current_char == "(":
                return self.simple_token("LPAREN")
            if self.current_char == ")":
                return self.simple_token("RPAREN")
            if self.current_char == ",":
                return self.simple_token("COMMA")
            if self.current_char == ":":
                return self.simple_token("COLON")

            raise PaaniniLexicalError(f"unknown character '{self.current_char}'", self.line, self.column)

        return None


def line_opens_block(line, tab_width=TAB_WIDTH):
    """True when the last token of a single physical line is ':'."""
    lexer = Lexer(line, tab_width)
    tokens = lexer.scan_line(expand_indent(line, tab_width).strip(" \t\r"), 1)
    return len(tokens) > 1 and tokens[-2].type == "COLON"
