"""Session control for the lcrepl language. Runs lines from a file or from the command line against a single
environment of definitions.
"""

import os

from lcrepl.lang.error import GenericException
from lcrepl.lang.lexical import DefinitionStmt, ExecStmt, Grammar
from lcrepl.pure.environment import Environment
from lcrepl.pure.reduction import NormalOrderReducer


class Session:
    """Governs a lcrepl session, with control over the scope of definitions."""
    SH_FILE = "<in>"  # command-line interpreter filename
    PRELUDE = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "common", "prelude.lc")
    COMMENT = ";;"

    def __init__(self, error_handler, path=SH_FILE, cmd_line=True, prelude=True, max_steps=None, ascii=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.ascii = ascii        # whether or not to print 'L' instead of 'λ'

        self.environment = Environment()
        self.reducer = NormalOrderReducer(self.environment, max_steps, on_step=error_handler.register_step)
        self.results = []  # outputs of lines run from files

        if self.cmd_line:
            self.error_handler.fatal = False
        elif path == Session.SH_FILE:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

        if prelude:
            self.load(Session.PRELUDE, collect=False)

        if path != Session.SH_FILE:
            self.load(path)

    @staticmethod
    def preprocess_line(line):
        """Strips comments and surrounding whitespace from line."""
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]  # get rid of comments
        return line.strip()

    def load(self, path, collect=True):
        """Runs every line of the file at path. If collect, outputs are appended to self.results."""
        try:
            with open(path, "r", encoding="utf-8") as file:
                lines = file.readlines()
        except OSError:
            raise GenericException("'{}' could not be opened", path, diagnosis=False)

        self.error_handler.register_file(path)
        for line_num, line in enumerate(lines):
            output = self.add(line, line_num + 1, path)
            if collect and output is not None:
                self.results.append(output)
        self.error_handler.remove_line(path)

    def add(self, line, line_num, path=None):
        """Runs a single line: definitions are bound in self.environment, expressions are reduced to normal form.
        Returns the text to show for line, or None if line is empty.
        """
        path = path if path is not None else self.path
        line = Session.preprocess_line(line)
        if not line:
            return None

        self.error_handler.register_line(path, line, line_num)  # in case error is raised
        stmt = Grammar.infer(line, self.environment)

        if isinstance(stmt, DefinitionStmt):
            if stmt.name in self.environment:
                start = line.index(stmt.name)
                self.error_handler.warn("'{}' redefines '{}'", (line, stmt.name), start=start,
                                        end=start + len(stmt.name))
            self.environment.define(stmt.name, stmt.term)
            output = f"Defined {stmt.name} = {self.render(stmt.term)}"

        elif isinstance(stmt, ExecStmt):
            output = self.render(stmt.execute(self.reducer))

        self.error_handler.remove_line(path)  # error was not raised
        return output

    def defs(self):
        """Returns a listing of every definition in this session."""
        return self.environment.print_all()

    def render(self, term):
        return term.pretty() if self.ascii else str(term)

    def pop(self):
        """Pops the earliest result."""
        return self.results.pop(0)
