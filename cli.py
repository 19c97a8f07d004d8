import logging
import sys
import traceback

from ast_nodes import ASTNode
from errors import PaaniniError
from session import Session, parse_source

__version__ = "0.1.0"

EXIT_COMMANDS = ("exit", "quit", "बाहर")
CLEAR_COMMANDS = ("clear", "स्पष्ट")
CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"

EXAMPLE = """\
!! नमस्ते विश्व - Hello World
दर्श("नमस्ते विश्व")

!! चर और गणना - Variables and Math
x = 5
y = 10
योग = x + y
दर्श("योग: " + योग)

!! शर्त - Conditionals
यदि (x < y):
    दर्श("x छोटा है")
अन्यथा:
    दर्श("x बड़ा है")

!! लूप - Loops
यावत् (x <= y):
    दर्श(x)
    x = x + 1

परिभ्रमण i in परिधि(3):
    दर्श(i)

!! फंक्शन - Functions
कार्य greet(नाम):
    दर्श("नमस्ते " + नाम)

greet("भारत")
"""

USAGE = """\
Usage:
  python cli.py run <file.panini>
  python cli.py parse <file.panini>
  python cli.py repl
  python cli.py example
  (optional) --debug to show Python traceback
  (optional) --version"""


# Tree dump for `parse`: every node field except its source position
def ast_to_dict(node):
    if isinstance(node, ASTNode):
        d = {"type": type(node).__name__}
        for field, value in vars(node).items():
            if field not in ("line", "column"):
                d[field] = ast_to_dict(value)
        return d
    if isinstance(node, list):
        return [ast_to_dict(item) for item in node]
    return node


def pretty(obj, indent=0):
    pad = "  " * indent
    out = []
    items = obj.items() if isinstance(obj, dict) else (("-", item) for item in obj)
    for key, value in items:
        label = key if key == "-" else f"{key}:"
        if isinstance(value, (dict, list)) and value:
            out.append(f"{pad}{label}")
            out.append(pretty(value, indent + 1))
        else:
            out.append(f"{pad}{label} {'[]' if value == [] else value}")
    return "\n".join(out)


def read_source(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def cmd_parse(path, debug: bool = False):
    try:
        program = parse_source(read_source(path))
    except (PaaniniError, OSError) as e:
        if debug:
            traceback.print_exc()
        print(f"Parse error: {e}")
        sys.exit(1)

    print(pretty(ast_to_dict(program)))


def cmd_run(path, debug: bool = False):
    try:
        code = read_source(path)
        with Session() as session:
            session.run_source(code)
    except (PaaniniError, OSError) as e:
        if debug:
            traceback.print_exc()
        else:
            print(str(e))
        sys.exit(1)


def cmd_repl():
    session = Session(out=sys.stdout, err=sys.stdout)
    banner = f"Paanini REPL v{__version__}. Type help for commands, exit to quit."
    print(banner)

    with session:
        while True:
            prompt = "paanini> " if not session.buffer else "...> "
            try:
                line = input(prompt)
            except (EOFError, KeyboardInterrupt):
                print()
                break

            if not session.buffer and line.strip() in EXIT_COMMANDS:
                break
            if not session.buffer and line.strip() in CLEAR_COMMANDS:
                print(CLEAR_SCREEN, end="")
                print(banner)
                continue

            session.feed(line)

        session.flush()

    print("धन्यवाद! Namaste!")


def cmd_example():
    print(EXAMPLE)


def main():
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")
    if hasattr(sys.stdin, "reconfigure"):
        sys.stdin.reconfigure(encoding="utf-8")

    debug = False
    if "--debug" in sys.argv:
        debug = True
        sys.argv.remove("--debug")
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if "--version" in sys.argv:
        print(f"Paanini {__version__}")
        return

    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)

    cmd = sys.argv[1]

    if cmd in ("repl", "example"):
        if len(sys.argv) != 2:
            print(USAGE)
            sys.exit(1)
        if cmd == "repl":
            cmd_repl()
        else:
            cmd_example()
        return

    if len(sys.argv) != 3:
        print(USAGE)
        sys.exit(1)

    path = sys.argv[2]

    if cmd == "parse":
        cmd_parse(path, debug=debug)
    elif cmd == "run":
        cmd_run(path, debug=debug)
    else:
        print(f"Unknown command: {cmd}")
        sys.exit(1)


if __name__ == "__main__":
    main()
