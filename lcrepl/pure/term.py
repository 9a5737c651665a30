"""Pure lambda calculus terms.

The `pure` directory contains the term-rewriting engine: terms, the definitions environment and normal-order
reduction. It knows nothing about surface syntax, which lives in `lang`.

Formally, a term is one of

```
<λ-term> ::= <name>                      ; "variable"
           | "λ" <name> "." <λ-term>     ; "abstraction"
           | "(" <λ-term> " " <λ-term> ")" ; "application"
           | <name>                      ; "named reference" (a name bound in the Environment)
```

Terms are immutable, so subterms may be shared freely between terms: rewriting always builds new nodes. The string
form of a term (`str(term)`) is its canonical form: applications are fully parenthesized and abstraction bodies extend
as far right as possible. Two terms print the same iff they are structurally equal, up to the variable/named reference
distinction.

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


LAMBDA = "λ"
ASCII_LAMBDA = "L"


def fresh_name(used, hint):
    """Returns hint if it isn't in used, otherwise hint suffixed with the smallest positive integer that isn't."""
    if hint not in used:
        return hint

    suffix = 1
    while f"{hint}{suffix}" in used:
        suffix += 1
    return f"{hint}{suffix}"


class LambdaTerm(ABC):
    """Superclass that represents any λ-term: variable, abstraction, application or named reference."""

    @abstractmethod
    def free_vars(self, environment):
        """Returns the set of names free in this term. Named references are expanded through environment, so names that
        would become free once a reference is inlined are counted too.
        """

    @abstractmethod
    def sub(self, var, new_term, environment):
        """Returns this term with every free occurrence of var replaced by new_term, renaming bound variables where
        they would capture a free variable of new_term.
        """

    @abstractmethod
    def alpha_equals(self, other, mapping=None):
        """Whether or not two LambdaTerms are alpha-equivalent. mapping maps names bound in self to the names bound at
        the same position in other.
        """

    @abstractmethod
    def render(self, lambda_char):
        """Renders this term using lambda_char for abstractions."""

    def pretty(self):
        """ASCII rendering, with 'L' instead of 'λ'. Display only: never compare terms with it."""
        return self.render(ASCII_LAMBDA)

    def __str__(self):
        return self.render(LAMBDA)


@dataclass(frozen=True)
class Variable(LambdaTerm):
    """Variable in lambda calculus: a bound or free occurrence of a name."""
    name: str

    def free_vars(self, environment):
        return {self.name}

    def sub(self, var, new_term, environment):
        if self.name == var:
            return new_term
        return self

    def alpha_equals(self, other, mapping=None):
        if not isinstance(other, Variable):
            return False
        if mapping and self.name in mapping:
            return mapping[self.name] == other.name
        # a free name must not match a name that is bound on the other side
        return self.name == other.name and other.name not in (mapping or {}).values()

    def render(self, lambda_char):
        return self.name


@dataclass(frozen=True)
class NamedReference(LambdaTerm):
    """Reference to a term defined in the Environment. Only expanded when the reducer reaches it."""
    name: str

    def free_vars(self, environment):
        definition = environment.lookup(self.name)
        if definition is not None:
            return definition.free_vars(environment)
        return {self.name}

    def sub(self, var, new_term, environment):
        definition = environment.lookup(self.name)
        if definition is not None:
            return definition.sub(var, new_term, environment)  # inline, so the definition body is capture-checked
        if self.name == var:
            return new_term
        return self

    def alpha_equals(self, other, mapping=None):
        return isinstance(other, NamedReference) and self.name == other.name

    def render(self, lambda_char):
        return self.name


@dataclass(frozen=True)
class Abstraction(LambdaTerm):
    """Abstraction: the basic datatype in lambda calculus."""
    param: str
    body: LambdaTerm

    def free_vars(self, environment):
        return self.body.free_vars(environment) - {self.param}

    def sub(self, var, new_term, environment):
        if self.param == var:
            return self  # var is shadowed

        new_term_vars = new_term.free_vars(environment)
        if self.param not in new_term_vars:
            return Abstraction(self.param, self.body.sub(var, new_term, environment))

        # alpha conversion: self.param would capture a free variable of new_term. If self.param occurs in the body, var
        # is avoided as well, otherwise the renamed occurrences would be replaced by the second substitution
        used = self.free_vars(environment) | new_term_vars
        if self.param in self.body.free_vars(environment):
            used.add(var)
        fresh = fresh_name(used, self.param)
        renamed = self.body.sub(self.param, Variable(fresh), environment)
        return Abstraction(fresh, renamed.sub(var, new_term, environment))

    def alpha_equals(self, other, mapping=None):
        if not isinstance(other, Abstraction):
            return False
        mapping = {**(mapping or {}), self.param: other.param}
        return self.body.alpha_equals(other.body, mapping)

    def render(self, lambda_char):
        return f"{lambda_char}{self.param}.{self.body.render(lambda_char)}"


@dataclass(frozen=True)
class Application(LambdaTerm):
    """Application of fun to arg."""
    fun: LambdaTerm
    arg: LambdaTerm

    def free_vars(self, environment):
        return self.fun.free_vars(environment) | self.arg.free_vars(environment)

    def sub(self, var, new_term, environment):
        return Application(self.fun.sub(var, new_term, environment), self.arg.sub(var, new_term, environment))

    def alpha_equals(self, other, mapping=None):
        if not isinstance(other, Application):
            return False
        return self.fun.alpha_equals(other.fun, mapping) and self.arg.alpha_equals(other.arg, mapping)

    @property
    def is_redex(self):
        """An Application is a redex if its function is an Abstraction."""
        return isinstance(self.fun, Abstraction)

    def render(self, lambda_char):
        return f"({self.fun.render(lambda_char)} {self.arg.render(lambda_char)})"
