"""
Everything that can go wrong, and how it gets told to a person.

Messages are written for someone who may be writing their first program.
"""
import sys, random
from typing import Iterable, Optional

class LogoError(Exception):
	""" A run-aborting problem. The message is what the user sees. """
	@property
	def message(self) -> str: return self.args[0] if self.args else type(self).__name__

class LogoParseError(LogoError):
	""" Missing brackets, a missing END, malformed block syntax, running out of words. """

class UnboundVariable(LogoError):
	def __init__(self, name:str):
		super().__init__("I don't know the variable :%s yet. Did you create it with MAKE first?"%name)
		self.name = name

class UnknownCommand(LogoError):
	def __init__(self, message:str, name:str, suggestion:Optional[str]=None):
		super().__init__(message)
		self.name = name
		self.suggestion = suggestion

class LogoTypeError(LogoError):
	""" The right number of inputs, but the wrong sort of thing. """

class IndexOutOfRange(LogoError):
	pass

class DivideByZero(LogoError):
	def __init__(self):
		super().__init__("Oops! You can't divide by zero.")

class InterpreterBusy(LogoError):
	def __init__(self):
		super().__init__("A program is already running. Stop it before starting another.")

OUT_OF_WORDS = "I ran out of things to read! Did you forget to finish your code?"

###############################################################################

def edit_distance(a:str, b:str) -> int:
	""" Plain Levenshtein distance, one row at a time. """
	if len(a) < len(b): a, b = b, a
	row = list(range(len(b)+1))
	for i, ca in enumerate(a, 1):
		prior, row[0] = row[0], i
		for j, cb in enumerate(b, 1):
			prior, row[j] = row[j], min(
				row[j] + 1,
				row[j-1] + 1,
				prior + (ca != cb),
			)
	return row[-1]

def suggest(unknown:str, candidates:Iterable[str]) -> Optional[str]:
	""" The closest candidate within two edits, or None. Ties go to whichever came first. """
	unknown = unknown.upper()
	best, best_score = None, 3
	for name in candidates:
		if abs(len(name) - len(unknown)) > 2: continue
		score = edit_distance(unknown, name)
		if score < best_score:
			best, best_score = name, score
	return best

def unknown_command(name:str, candidates:Iterable[str]) -> UnknownCommand:
	suggestion = suggest(name, candidates)
	if suggestion:
		return UnknownCommand('I don\'t know "%s". Did you mean %s?'%(name, suggestion), name, suggestion)
	text = 'I don\'t know the command "%s". Check your spelling!'%name
	return UnknownCommand(text, name)

def unknown_function(name:str, candidates:Iterable[str]) -> UnknownCommand:
	suggestion = suggest(name, candidates)
	if suggestion:
		return UnknownCommand('I don\'t know the function "%s". Did you mean %s?'%(name, suggestion), name, suggestion)
	return UnknownCommand('I don\'t know the function "%s". Check your spelling!'%name, name)

###############################################################################

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]
	exclamations = [
		'Drat', 'Fiddlesticks', 'Good Grief', 'Great Scott', 'Jeepers',
		'Heavens', 'Rats', 'Oh My Stars', 'Shell Shock', 'Tortoise Trouble',
	]
	resignations = [
		'The turtle has stopped.',
		'The turtle is waiting for you.',
		'The turtle needs a hand.',
	]
	return "%s%s! %s"%tuple(map(random.choice, (particle, exclamations, resignations)))

class Report:
	"""
	Gathers what the command line has to say.
	Errors from a run pile up here until someone complains about them.
	"""
	def __init__(self, *, verbose:int=0, stream=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._stream = stream
		self.issues : list[str] = []

	def ok(self): return not self.issues
	def sick(self): return bool(self.issues)

	def _out(self): return self._stream or sys.stderr

	def issue(self, message:str):
		self.issues.append(message)

	def info(self, *args):
		if self._verbose:
			print(*args, file=self._out())

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		out = self._out()
		if self.issues:
			print(_outburst(), file=out)
		for message in self.issues:
			print(" -", message, file=out)

	def reset(self):
		self.issues.clear()
