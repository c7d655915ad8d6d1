"""Interactive mode for the Quill interpreter. Uses cmd as backend."""

import cmd

from termcolor import colored

from .diagnostics import report
from .run import Session
from .values import to_string

EXIT_COMMANDS = ('.exit', '.quit', '.q')
TOGGLES = ('.lexer', '.parser', '.interpreter')


class Shell(cmd.Cmd):
    """Quill read-eval-print loop."""
    intro = "Quill interactive shell\nType '.help' for commands, '.exit' to leave."
    prompt = "> "
    filename = "<stdin>"

    def __init__(self, session: Session, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session

    def parseline(self, line):
        """Only end of input maps to a do_* method. Every other line,
        including one starting with ``help`` or ``EOF``, is handed to
        default()."""
        line = line.strip()
        if line == 'EOF':
            return 'EOF', '', line
        return None, None, line

    def default(self, line):
        """Runs one line of Quill code, or a dot command."""
        command = line.strip()
        if command in EXIT_COMMANDS:
            return True
        if command in TOGGLES:
            flag = command[1:]
            value = not getattr(self.session.flags, flag)
            setattr(self.session.flags, flag, value)
            print(f"{flag} dump {'on' if value else 'off'}", file=self.stdout)
            return False
        if command == '.help':
            return self.do_help('')

        try:
            result = self.session.run(self.filename, line)
        except RecursionError:
            print(colored("fatal: maximum recursion depth exceeded", "red", attrs=["bold"]), file=self.stdout)
            return False
        if result.is_err:
            report(result.error, line, file=self.stdout)
        else:
            print("-> " + to_string(result.value, True), file=self.stdout)
        return False

    def do_help(self, arg):
        """Lists the shell commands."""
        print("Commands:\n"
              "  .exit, .quit, .q   leave the shell\n"
              "  .lexer             toggle the token dump\n"
              "  .parser            toggle the AST dump\n"
              "  .interpreter       toggle the final value dump\n"
              "Anything else is run as Quill code. Bindings persist between lines.",
              file=self.stdout)
        return False

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return True
