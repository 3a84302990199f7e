"""
One program runs at a time, on whatever thread the host likes.

The interpreter never sleeps on its own account. It calls `checkpoint`
after each statement and `pause` for WAIT; both give way at once when
the host asks the run to stop. With speed zero and no WAIT, a run is
plain synchronous batch execution.
"""
import sys
import threading
from threading import Event, Lock, Thread
from typing import Callable, Optional
from .diagnostics import InterpreterBusy

# Each Logo procedure call costs a dozen or so Python frames.
RECURSION_LIMIT = 50000
WORKER_STACK_SIZE = 256 * 1024 * 1024

def allow_deep_recursion(limit:int=RECURSION_LIMIT):
	""" Only ever raises the interpreter's recursion limit, never lowers it. """
	if sys.getrecursionlimit() < limit:
		sys.setrecursionlimit(limit)

class Pacer:
	"""
	The only place execution is ever suspended.
	`speed` is milliseconds of delay after each statement; 0 means none.
	The host may change it at any time; it is read at the next statement.
	"""
	def __init__(self, speed:int=0, sleep:Optional[Callable[[float], None]]=None):
		self.speed = speed
		self._cancel = Event()
		self._sleep = sleep

	@property
	def cancelled(self) -> bool: return self._cancel.is_set()

	def cancel(self):
		""" Ask the run to stop at its next checkpoint. Also cuts short any pause in progress. """
		self._cancel.set()

	def clear(self): self._cancel.clear()

	def checkpoint(self):
		""" Yield if due. """
		if self.speed > 0: self.pause(self.speed)

	def pause(self, ms:float):
		if ms <= 0 or self.cancelled: return
		if self._sleep is None: self._cancel.wait(ms / 1000)
		else: self._sleep(ms / 1000)

class RunGuard:
	""" Refuses a second run while one is active, rather than letting two runs share state. """
	def __init__(self):
		self._lock = Lock()

	@property
	def active(self) -> bool: return self._lock.locked()

	def __enter__(self):
		if not self._lock.acquire(blocking=False):
			raise InterpreterBusy()
		return self

	def __exit__(self, exc_type, exc_val, exc_tb):
		self._lock.release()

def run_in_background(interpreter, code:str, on_finish:Optional[Callable[[bool], None]]=None) -> Thread:
	"""
	Start a run on a worker thread so the host's own loop stays responsive.
	`on_finish` hears whether the run went well.
	"""
	def work():
		ok = interpreter.execute(code)
		if on_finish is not None: on_finish(ok)
	allow_deep_recursion()
	prior = threading.stack_size(WORKER_STACK_SIZE)
	try:
		thread = Thread(target=work, daemon=True, name="logo program")
		thread.start()
	finally:
		threading.stack_size(prior)
	return thread
