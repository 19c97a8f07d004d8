"""Execution driver.

A ``Session`` owns one global ``Environment`` from construction until
``close()``. It runs a whole source unit at once (``run_source``), or accepts
input line by line (``feed``) and dispatches each top-level statement once its
block has closed.
"""

import io
import logging
import re
import sys

from environment import Environment
from errors import PaaniniError, PaaniniLexicalError, MalformedBlockError, IndentationMismatchError, SessionClosedError
from interpreter import Interpreter, MAX_LOOP_ITERATIONS, MAX_CALL_DEPTH
from lexer import Lexer, IndentStack, KEYWORDS, TAB_WIDTH, is_blank, measure_indent, line_opens_block
from parser import Parser

logger = logging.getLogger(__name__)

HELP_COMMANDS = ("help", "सहायता")

HELP_TEXT = """\
Paanini commands:
  help / सहायता            show this help
  clear / स्पष्ट           clear the screen
  exit / quit / बाहर       leave the REPL

Keywords (Devanagari / romanized):
  दर्श / darsh(expr)            print one value
  यदि / yadi (a < b):           if
  अन्यथा / anyatha:              else
  यावत् / yavat (a < b):         while (at most 10000 iterations)
  परिभ्रमण / paribhraman i in परिधि / paridhi(n):   for over 0..n-1
  कार्य / karya name(a, b):      define a routine
  सत्य / satya, असत्य / asatya     booleans
  !! or #                       comment

Example:
  x = 5
  yadi (x < 10):
      darsh("small")
  anyatha:
      darsh("big")
"""

_FIRST_WORD = re.compile(r"\s*([^\s:(]+)")


class RunResult:
    def __init__(self, output, errors):
        self.output = output  # str
        self.errors = errors  # list[str]

    def __repr__(self):
        return f"RunResult(output={self.output!r}, errors={self.errors!r})"


def parse_source(source, tab_width=TAB_WIDTH):
    return Parser(Lexer(source, tab_width)).parse()


def first_keyword(line):
    m = _FIRST_WORD.match(line)
    return KEYWORDS.get(m.group(1)) if m is not None else None


def starts_with_else(line):
    return first_keyword(line) == "ELSE"


class Session:
    def __init__(self, out=None, err=None, tab_width=TAB_WIDTH,
                 max_loop_iterations=MAX_LOOP_ITERATIONS, max_call_depth=MAX_CALL_DEPTH):
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else self.out
        self.tab_width = tab_width

        self.env = Environment()
        self.interpreter = Interpreter(self.out, max_loop_iterations=max_loop_iterations,
                                       max_call_depth=max_call_depth)

        # incremental input state
        self.buffer = []
        self.indents = IndentStack()
        self.block_open = False
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def close(self):
        if self.closed:
            return
        self.buffer = []
        self.env.clear()
        self.closed = True
        logger.debug("session closed")

    def ensure_open(self):
        if self.closed:
            raise SessionClosedError("session is closed")

    # ---------- one-shot ----------
    def run_source(self, source):
        """Run a whole unit. The first error stops the run and propagates."""
        self.ensure_open()
        program = parse_source(source, self.tab_width)
        self.interpreter.run(program, self.env)

    def run_snippet(self, source):
        """Run a unit and collect its output and diagnostics instead of raising."""
        self.ensure_open()
        captured = io.StringIO()
        saved_out = self.interpreter.out
        self.interpreter.out = captured
        errors = []
        try:
            self.run_source(source)
        except PaaniniError as e:
            errors.append(str(e))
        finally:
            self.interpreter.out = saved_out
        return RunResult(captured.getvalue(), errors)

    # ---------- incremental ----------
    def execute(self, source):
        # errors are reported, never fatal: bindings from earlier statements stay
        self.ensure_open()
        logger.debug("dispatching statement:\n%s", source.rstrip("\n"))
        try:
            self.run_source(source)
        except PaaniniError as e:
            logger.debug("statement failed", exc_info=True)
            self.err.write(str(e) + "\n")
            return False
        return True

    def feed(self, line):
        """Accept one line of input. Returns True while a statement is still incomplete."""
        self.ensure_open()

        if not self.buffer:
            if is_blank(line):
                return False
            if line.strip() in HELP_COMMANDS:
                self.out.write(HELP_TEXT)
                return False
            return self.push_line(line)

        # a blank line closes any open block
        if not line.strip():
            self.flush()
            return False
        if is_blank(line):
            self.buffer.append(line)
            return True

        if measure_indent(line, self.tab_width) == 0 and not self.block_open and not starts_with_else(line):
            self.flush()
            return self.feed(line)

        return self.push_line(line)

    def push_line(self, line):
        self.buffer.append(line)
        width = measure_indent(line, self.tab_width)
        try:
            if self.block_open:
                if width <= self.indents.top:
                    raise MalformedBlockError("expected an indented block after ':'")
                self.indents.push(width)
            elif width > self.indents.top:
                raise IndentationMismatchError("unexpected indent")
            elif width < self.indents.top:
                self.indents.dedent_to(width)
            self.block_open = line_opens_block(line, self.tab_width)
        except PaaniniLexicalError:
            # let the full lexer report it with positions
            self.flush()
            return False

        if self.block_open or self.indents.depth > 0:
            return True
        # a one-line if may still be followed by its else line
        if first_keyword(line) == "IF":
            return True
        self.flush()
        return False

    def flush(self):
        """Dispatch whatever is buffered. Returns False if it failed."""
        if not self.buffer:
            return True
        source = "\n".join(self.buffer) + "\n"
        self.buffer = []
        self.indents = IndentStack()
        self.block_open = False
        return self.execute(source)
