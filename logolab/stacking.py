"""
Where names live while a program runs.

Procedures share one flat table. Variables live in a global frame plus
a stack of local frames, innermost last. Frames are pushed for each
procedure call and each FOR loop, and popped however the body ends.
"""
from contextlib import contextmanager
from typing import NamedTuple, Optional
from .lexer import Token
from .diagnostics import UnboundVariable

class Procedure(NamedTuple):
	name: str
	params: tuple[str, ...]
	body: tuple[Token, ...]
	def __repr__(self): return "<TO %s %s>"%(self.name, " ".join(":"+p for p in self.params))

class Frame:
	""" One mapping of variable names to values. Names arrive upper-cased. """
	def __init__(self, bindings:Optional[dict]=None):
		self._bindings = dict(bindings or ())
	def holds(self, key:str) -> bool: return key in self._bindings
	def fetch(self, key:str): return self._bindings[key]
	def assign(self, key:str, value):
		self._bindings[key] = value
		return value
	def __repr__(self): return "<Frame %r>"%self._bindings

class InterpreterState:
	"""
	All the mutable state one interpreter carries between runs.
	A reset is a fresh instance, not a sweep through the fields.
	"""
	def __init__(self):
		self.procedures : dict[str, Procedure] = {}
		self.globals = Frame()
		self.locals : list[Frame] = []
		self.repcount : Optional[int] = None

	def define(self, procedure:Procedure):
		self.procedures[procedure.name] = procedure

	def procedure(self, name:str) -> Optional[Procedure]:
		return self.procedures.get(name.upper())

	def _find(self, key:str) -> Optional[Frame]:
		for frame in reversed(self.locals):
			if frame.holds(key): return frame
		if self.globals.holds(key): return self.globals

	def get_variable(self, name:str):
		key = name.upper()
		frame = self._find(key)
		if frame is None: raise UnboundVariable(key)
		return frame.fetch(key)

	def has_variable(self, name:str) -> bool:
		return self._find(name.upper()) is not None

	def set_variable(self, name:str, value):
		""" Update the nearest existing binding, or else make a global one. """
		key = name.upper()
		frame = self._find(key) or self.globals
		frame.assign(key, value)

	def set_local(self, name:str, value):
		""" Bind in the innermost frame; with no frames active, that means the globals. """
		frame = self.locals[-1] if self.locals else self.globals
		frame.assign(name.upper(), value)

	@contextmanager
	def scope(self, bindings:Optional[dict]=None):
		frame = Frame({k.upper():v for k,v in (bindings or {}).items()})
		self.locals.append(frame)
		try: yield frame
		finally:
			popped = self.locals.pop()
			assert popped is frame

	@contextmanager
	def repeat_counter(self):
		""" Lets a REPEAT loop publish its count, then restores the enclosing loop's count. """
		prior = self.repcount
		try: yield self
		finally: self.repcount = prior
