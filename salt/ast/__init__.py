from .ast import *
from .parser import Parser, parse
