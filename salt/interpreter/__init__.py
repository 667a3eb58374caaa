from .interpreter import Interpreter
from .environment import Environment
from .function import Function
