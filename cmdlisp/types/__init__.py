from cmdlisp.types.symbol import Symbol
from cmdlisp.types.tag import Tag, CORE, COMMANDS, SYSTEM
from cmdlisp.types.value import Value, Int, Str, Bool, List, Nil, NilType
from cmdlisp.types.command import Command, FunctionCommand
from cmdlisp.types.context import Context
