"""Handles interactive/command-line mode for lcrepl. Uses cmd as backend."""

import cmd

from lcrepl.lang.error import GenericException


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell. Commands start with ':', every other line is run by the session."""
    intro = "Lambda calculus interpreter :: Python backend\nType ':help' for more information."
    prompt = "> "
    COMMAND = ":"

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def cmdloop(self, intro=None):
        """Same loop as cmd.Cmd.cmdloop, except that end of input calls do_EOF directly instead of being turned into
        the line 'EOF', so that 'EOF' stays an ordinary name.
        """
        self.preloop()
        if intro is not None:
            self.intro = intro
        if self.intro:
            self.stdout.write(f"{self.intro}\n")

        stop = None
        while not stop:
            line = self.readline()
            if line is None:
                stop = self.do_EOF("")
                continue
            line = self.precmd(line)
            stop = self.onecmd(line)
            stop = self.postcmd(stop, line)
        self.postloop()

    def readline(self):
        """Returns the next input line without its newline, or None at end of input."""
        if self.cmdqueue:
            return self.cmdqueue.pop(0)
        if self.use_rawinput:
            try:
                return input(self.prompt)
            except EOFError:
                return None

        self.stdout.write(self.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def onecmd(self, line):
        """Dispatches ':name' lines to do_name and everything else to default, so that definitions such as
        'help = λx.x' are never mistaken for commands.
        """
        line = line.strip()
        if not line:
            return self.emptyline()
        elif not line.startswith(Shell.COMMAND):
            return self.default(line)

        name, __, arg = line[len(Shell.COMMAND):].partition(" ")
        func = getattr(self, f"do_{name}", None) if name.isidentifier() and name != "EOF" else None
        if func is None:
            self.sess.error_handler.throw(GenericException("unknown command '{}'", line, diagnosis=False))
            return False
        return func(arg.strip())

    def default(self, line):
        """Executes arbitrary lcrepl line."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            output = self.sess.add(line, self.line_num)
            if output is not None:
                print(output)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lcrepl interpreter!\n\n"
              "Commands:\n"
              "  name = expression   Define a named expression\n"
              "  expression          Evaluate an expression\n"
              "  :quit or :exit      Exit the interpreter\n"
              "  :defs               Show all definitions\n"
              "  :help               Show this help message\n\n"
              "Try it out by typing 'id = λx.x' (or 'id = \\x.x'). This will bind the λ-term 'λx.x' to \n"
              "the name 'id'. Next, try typing 'id y'. This will apply 'id' to 'y', giving 'y' as \n"
              "the result.")

    def do_defs(self, arg):
        """Prints all definitions."""
        print(self.sess.defs())

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True

    do_quit = do_exit
