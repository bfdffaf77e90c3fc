
class CmdLispError(Exception):
    """ Base class for all cmdlisp errors"""
    pass

class ParseError(CmdLispError):
    """ Raised when source text cannot be read into expressions"""

class ValueConversionError(CmdLispError):
    """ Raised when a literal has no corresponding Value variant"""

class DispatchError(CmdLispError):
    """ Raised when a form cannot be dispatched to a command"""

class UnknownCommandError(DispatchError):
    """ Raised when the head of a form names no registered command"""

    def __init__(self, name: str):
        super().__init__(f"Unknown command: {name}")
        self.name = name

class CommandError(CmdLispError):
    """ Raised by a command handler when it cannot complete"""

class CommandArityError(CommandError):
    """ Raised when the number of arguments passed to a command is incorrect"""

class CommandTypeError(CommandError):
    """ Raised when the types of arguments passed to a command are incorrect"""
