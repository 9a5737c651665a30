"""Lexical analysis for the lcrepl language: surface syntax to λ-terms. Note that this module does not provide input
file parsing, but rather tokenization of single lines.

All grammar can be loosely defined as follows:

```
<definition>  ::= <name> "=" <expr>             ; binds <expr> to <name>, replacing any previous binding
<exec_stmt>   ::= <expr>                        ; reduced to normal form and printed

<expr>        ::= <primary> <primary>*          ; application, associating by left: a b c = ((a b) c)
<primary>     ::= <ident> | "(" <expr> ")"
                | <lambda> <ident> "." <expr>   ; abstraction bodies are greedy: λx.x y = λx.(x y)
<lambda>      ::= "λ" | "\"
<ident>       ::= [A-Za-z_][A-Za-z0-9]*
<name>        ::= [A-Za-z][A-Za-z0-9]*
```

Identifiers that are defined in the environment when a line is parsed become NamedReferences, unless an enclosing
abstraction binds them. Every other identifier is a Variable, and abstraction parameters are always plain names.

Comments (";;") are handled in session.py: there is no dedicated Grammar class for comments.
"""

from abc import abstractmethod, ABC
import re

from lcrepl.lang.error import GenericException
from lcrepl.pure.term import Abstraction, Application, NamedReference, Variable


LAMBDA, DOT, OPEN, CLOSE, IDENT = "bind", "period", "open_paren", "close_paren", "ident"

TOKEN = re.compile(r"(?P<bind>[λ\\])|(?P<period>\.)|(?P<open_paren>\()|(?P<close_paren>\))"
                   r"|(?P<ident>[A-Za-z_][A-Za-z0-9]*)")
WHITESPACE = re.compile(r"\s*")


def tokenize(expr, offset=0, original_expr=None):
    """Returns a list of (kind, text, position) tokens in expr. Positions are shifted by offset so that they point into
    original_expr, the whole line.
    """
    if original_expr is None:
        original_expr = expr

    tokens = []
    pos = WHITESPACE.match(expr).end()
    while pos < len(expr):
        match = TOKEN.match(expr, pos)
        if not match:
            start = pos + offset
            msg = "'{}' has unexpected character '{}'"
            raise GenericException(msg, (original_expr, expr[pos]), start=start, end=start + 1)
        tokens.append((match.lastgroup, match.group(), match.start() + offset))
        pos = WHITESPACE.match(expr, match.end()).end()
    return tokens


class Parser:
    """Recursive descent parser for a single <expr>. original_expr is the whole line, used for error messages."""

    def __init__(self, expr, environment, original_expr=None, offset=0):
        self.original_expr = original_expr if original_expr is not None else expr
        self.environment = environment
        self.tokens = tokenize(expr, offset, self.original_expr)
        self.end = offset + len(expr.rstrip())
        self.pos = 0
        self.bound = []  # parameters of the enclosing abstractions

    def parse(self):
        """Parses the whole expression, raising a GenericException if any input is left over."""
        if not self.tokens:
            raise GenericException("λ-term cannot be empty", self.original_expr, diagnosis=False)

        term = self.application()
        if self.peek() is not None:
            self.error("'{}' has unexpected token '{}'", self.tokens[self.pos])
        return term

    def peek(self):
        """Kind of the next token, or None at end of input."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos][0]
        return None

    def advance(self):
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def expect(self, kind, msg):
        if self.peek() != kind:
            self.error(msg, self.tokens[self.pos] if self.peek() else None)
        return self.advance()

    def error(self, msg, token=None):
        """Raises a GenericException pointing at token (or at the end of input if token is None)."""
        if token is None:
            start, text, end = self.end, "end of input", self.end + 1
        else:
            __, text, start = token
            end = start + len(text)
        raise GenericException(msg, (self.original_expr, text), start=start, end=end)

    def application(self):
        term = self.primary()
        while self.peek() in (IDENT, OPEN, LAMBDA):
            term = Application(term, self.primary())
        return term

    def primary(self):
        kind = self.peek()
        if kind is None:
            self.error("'{}' ended unexpectedly")

        token = self.advance()
        if kind == IDENT:
            name = token[1]
            if name not in self.bound and self.environment.is_defined(name):
                return NamedReference(name)
            return Variable(name)

        elif kind == OPEN:
            term = self.application()
            self.expect(CLOSE, "'{}' has mismatched parentheses")
            return term

        elif kind == LAMBDA:
            __, param, __ = self.expect(IDENT, "'{}' expected a variable after λ, got '{}'")
            self.expect(DOT, "'{}' expected '.' after λ-term parameter, got '{}'")
            self.bound.append(param)
            try:
                body = self.application()
            finally:
                self.bound.pop()
            return Abstraction(param, body)

        self.error("'{}' has stray builtin '{}'", token)


def parse(expr, environment):
    """Parses expr into a LambdaTerm, resolving defined names against environment."""
    return Parser(expr, environment).parse()


class Grammar(ABC):
    """Superclass representing any statement in the lcrepl language."""

    def __init__(self, expr, environment):
        """Assumes check_grammar has been run."""
        self.expr = Grammar.preprocess(expr)
        self._cls = type(self).__name__

    @staticmethod
    @abstractmethod
    def check_grammar(expr):
        """This method should check expr's top-level grammar and return whether or not it is valid."""

    @staticmethod
    def preprocess(expr):
        """Removes trailing whitespace."""
        return expr.rstrip()

    @classmethod
    def infer(cls, expr, environment):
        """Infers the type of expr and returns an object of the correct grammar subclass, parsed against
        environment. Anything that isn't a definition is an ExecStmt.
        """
        if DefinitionStmt.check_grammar(expr):
            return DefinitionStmt(expr, environment)
        return ExecStmt(expr, environment)

    def __repr__(self):
        return f"{self._cls}('{self.expr}')"

    def __str__(self):
        return self.expr


class DefinitionStmt(Grammar):
    """Binding statement: <NAME> = <λ-term>."""
    PATTERN = re.compile(r"^\s*([A-Za-z][A-Za-z0-9]*)\s*=\s*(.+)$")

    def __init__(self, expr, environment):
        super().__init__(expr, environment)

        match = DefinitionStmt.PATTERN.match(self.expr)
        self.name = match.group(1)
        self.term = Parser(match.group(2), environment, self.expr, offset=match.start(2)).parse()

    @staticmethod
    def check_grammar(expr):
        return DefinitionStmt.PATTERN.match(Grammar.preprocess(expr)) is not None


class ExecStmt(Grammar):
    """Any λ-term that isn't a definition. Executing it means reducing it to normal form."""

    def __init__(self, expr, environment):
        super().__init__(expr, environment)
        self.term = Parser(self.expr, environment).parse()

    @staticmethod
    def check_grammar(expr):
        return True

    def execute(self, reducer):
        return reducer.normalize(self.term)
