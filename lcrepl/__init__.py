"""Lambda calculus interpreter.

For reference:
- "Pure lambda calculus": terms, the definitions environment and normal-order reduction (lcrepl/pure)
- "lcrepl language": lambda calculus + definitions and comments, as typed at the prompt or in .lc files (lcrepl/lang)

Basic program flow:
    1. Parser: produces a λ-term from each line, see lcrepl/lang/lexical.py
        - Names defined at that point become named references, everything else is a variable
    2. Definitions: 'name = λ-term' binds the λ-term in the session's environment
    3. Reduction: any other λ-term is reduced to normal form (normal order, under binders) and printed
"""

__version__ = "0.1.0"
