"""
Plain-console channels for the interpreter: PRINT and friends go to stdout,
errors to stderr, and READWORD asks at the keyboard.
"""
import sys
from ..primitive import INLINE

class Console:
	def __init__(self, out=None, err=None, read=input):
		self._out = out
		self._err = err
		self._read = read

	def echo(self, text:str, mode:str):
		out = self._out or sys.stdout
		out.write(text if mode == INLINE else text + "\n")
		out.flush()

	def error(self, message:str):
		print(message, file=self._err or sys.stderr)

	def read(self, prompt:str) -> str:
		try: return self._read(prompt + " ")
		except EOFError: return ""

	def hook_up(self, interpreter):
		""" Point all three of the interpreter's channels at this console. """
		interpreter.on_output = self.echo
		interpreter.on_error = self.error
		interpreter.on_input = self.read
		return interpreter
