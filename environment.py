from errors import NameResolutionError


class Function:
    def __init__(self, name, params, body):
        self.name = name
        self.params = params  # list[str]
        self.body = body      # Block

    def __repr__(self):
        return f"<karya {self.name}({', '.join(self.params)})>"


class Environment:
    """One scope: variable bindings, routine bindings and an optional parent.

    Reads walk outward through parents. Writes always land in this scope, so an
    assignment inside a routine shadows an outer binding instead of changing it.
    """

    def __init__(self, parent=None):
        self.values = {}
        self.functions = {}
        self.parent = parent

    def child(self):
        return Environment(parent=self)

    def assign(self, name, value):
        self.values[name] = value

    def lookup(self, name, line=None, column=None):
        scope = self
        while scope is not None:
            if name in scope.values:
                return scope.values[name]
            scope = scope.parent
        raise NameResolutionError(f"undefined name '{name}'", line, column)

    def define_function(self, function):
        self.functions[function.name] = function

    def lookup_function(self, name, line=None, column=None):
        scope = self
        while scope is not None:
            if name in scope.functions:
                return scope.functions[name]
            scope = scope.parent
        raise NameResolutionError(f"unknown routine '{name}'", line, column)

    def __contains__(self, name):
        scope = self
        while scope is not None:
            if name in scope.values:
                return True
            scope = scope.parent
        return False

    def clear(self):
        self.values.clear()
        self.functions.clear()
