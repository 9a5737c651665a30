"""Normal-order reduction of λ-terms against an Environment.

A single step does one case analysis on the outermost node:

```
x            -> x                        ; variables are normal
λx.M         -> λx.normalize(M)          ; reduction descends under binders
(λx.M) N     -> M[x := N]                ; β: the outermost-leftmost redex
(M N)        -> (normalize(M) normalize(N))
name         -> definition of name       ; δ: only if name is defined, otherwise it is a free variable
```

normalize repeats single steps until one makes no progress. A defined named reference is never normal, so a name
always prints as the term it stands for.

Source: http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from lcrepl.lang.error import GenericException, NormalizationError
from lcrepl.pure.term import Abstraction, Application, NamedReference, Variable


class NormalOrderReducer:
    """Implements normal-order reduction of a term to its normal form. The environment is only read, never modified.

    If max_steps is set, normalize raises NormalizationError once more than max_steps β/δ steps have been taken.
    on_step(kind, redex, contractum) is called for every step.
    """

    def __init__(self, environment, max_steps=None, on_step=None):
        self.environment = environment
        self.max_steps = max_steps
        self.on_step = on_step

        self.steps = 0
        self._term = None  # term passed to normalize, used for error messages

    def normalize(self, term):
        """Returns the normal form of term. May not return if term has no normal form and max_steps isn't set."""
        self._reset(term)
        return self._normalize(term)[0]

    def step(self, term):
        """Returns (new term, whether or not anything was reduced) after a single normal-order step."""
        self._reset(term)
        return self._step(term)

    def is_normal_form(self, term):
        """Whether or not a single step leaves term as it is."""
        return not self.step(term)[1]

    def _reset(self, term):
        self.steps = 0
        self._term = term

    def _register(self, kind, redex, contractum):
        """Counts a β/δ step, raising NormalizationError if the step bound is exceeded."""
        self.steps += 1
        if self.on_step is not None:
            self.on_step(kind, redex, contractum)
        if self.max_steps is not None and self.steps > self.max_steps:
            raise NormalizationError(self._term, self.max_steps)

    def _normalize(self, term):
        reduced_any = False
        while True:
            new_term, reduced = self._step(term)
            if not reduced:
                return term, reduced_any
            term = new_term
            reduced_any = True

    def _step(self, term):
        if isinstance(term, Variable):
            return term, False

        elif isinstance(term, Abstraction):
            body, reduced = self._normalize(term.body)
            if not reduced:
                return term, False
            return Abstraction(term.param, body), True

        elif isinstance(term, Application):
            if term.is_redex:
                abstraction = term.fun
                contractum = abstraction.body.sub(abstraction.param, term.arg, self.environment)
                self._register("β", term, contractum)
                return contractum, True

            fun, fun_reduced = self._normalize(term.fun)
            arg, arg_reduced = self._normalize(term.arg)
            if not (fun_reduced or arg_reduced):
                return term, False
            return Application(fun, arg), True

        elif isinstance(term, NamedReference):
            definition = self.environment.lookup(term.name)
            if definition is None:
                return Variable(term.name), False  # undefined names are free variables
            self._register("δ", term, definition)
            return definition, True

        raise GenericException("unknown λ-term '{}'", repr(term), internal=True)
