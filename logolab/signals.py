"""
STOP and OUTPUT are not errors, so they are not exceptions either.
A statement that hits one returns it instead of a token index, and every
block hands it straight back up until a procedure call (or the top of the
run) takes delivery.
"""

class Signal:
	__slots__ = ()

class Stop(Signal):
	__slots__ = ()
	def __repr__(self): return "<STOP>"

class Output(Signal):
	__slots__ = ("value",)
	def __init__(self, value): self.value = value
	def __repr__(self): return "<OUTPUT %r>"%(self.value,)

STOP = Stop()
