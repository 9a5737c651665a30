"""Top-level definitions shared by the parser and the reducer."""


class Environment:
    """Mapping of name: LambdaTerm for the current session. Names can be rebound but never removed."""

    def __init__(self):
        self._definitions = {}

    def define(self, name, term):
        """Binds name to term, replacing any previous binding."""
        self._definitions[name] = term

    def lookup(self, name):
        """Returns the term bound to name, or None if name isn't defined."""
        return self._definitions.get(name)

    def is_defined(self, name):
        return name in self._definitions

    def print_all(self):
        """Returns every definition as 'name = term', one per line, sorted by name."""
        if not self._definitions:
            return "No definitions yet."
        return "\n".join(f"{name} = {self._definitions[name]}" for name in self)

    def __contains__(self, name):
        return self.is_defined(name)

    def __iter__(self):
        return iter(sorted(self._definitions))

    def __len__(self):
        return len(self._definitions)

    def __repr__(self):
        return f"Environment({', '.join(self)})"
