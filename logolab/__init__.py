"""
LogoLab: a Logo interpreter with turtle graphics.
"""
from .executive import Interpreter
from .graphics import TurtleGraphics, RecordingSurface
from .diagnostics import LogoError
