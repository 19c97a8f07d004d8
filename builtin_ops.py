import math

from errors import OperatorTypeError, PaaniniRuntimeError, CallArityError
from values import RangeValue, kind_name, to_text


def builtin_print(out, value):
    out.write(to_text(value) + "\n")
    return None


def builtin_range(out, count):
    if isinstance(count, bool) or not isinstance(count, float):
        raise OperatorTypeError(f"range expects a Number, got {kind_name(count)}")
    if math.isnan(count) or math.isinf(count):
        raise PaaniniRuntimeError("range expects a finite Number")
    # truncates toward zero; n <= 0 gives an empty range
    return RangeValue(int(count))


BUILTINS = {
    "print": (builtin_print, 1),
    "range": (builtin_range, 1),
}


def call_builtin(name, args, out):
    func, arity = BUILTINS[name]
    if len(args) != arity:
        raise CallArityError(f"{name}() must have exactly {arity} argument, got {len(args)}")
    return func(out, *args)
