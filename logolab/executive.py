"""
The overall control for a Logo run.

Statements run one after another. Each statement either gives back the index
of the next statement or, for STOP and OUTPUT, a Signal. A signal travels up
through enclosing blocks untouched until a procedure call takes delivery.
Real problems are exceptions; they abort the run and leave the names and
drawings made so far in place.
"""
import math
from typing import Callable, Optional, Sequence, Union
from .lexer import Token, tokenize, WORD, QUOTED, VARREF
from .diagnostics import LogoError, LogoParseError, UnknownCommand, unknown_command
from .values import as_number, is_truthy
from .stacking import InterpreterState, Procedure
from .signals import Signal, Output, STOP
from .scheduler import Pacer, RunGuard, allow_deep_recursion
from .graphics import TurtleGraphics
from .primitive import COMMANDS, FUNCTIONS, FUNCTION_FORMS, NORMAL, builtin_names, is_builtin
from .evaluator import evaluate, evaluate_condition, arguments, block

TOKENS = Sequence[Token]
OUTCOME = Union[int, Signal]

class Interpreter:
	"""
	The front door. Hosts hand over source text and listen on three channels:
		on_output(text, mode) for PRINT, SHOW and TYPE;
		on_error(message) when a run aborts;
		on_input(prompt) -> str for READWORD and READLIST.
	"""
	def __init__(
		self,
		graphics:Optional[TurtleGraphics]=None,
		*,
		on_output:Optional[Callable[[str, str], None]]=None,
		on_error:Optional[Callable[[str], None]]=None,
		on_input:Optional[Callable[[str], str]]=None,
		pacer:Optional[Pacer]=None,
	):
		self.graphics = graphics if graphics is not None else TurtleGraphics()
		self.on_output = on_output
		self.on_error = on_error
		self.on_input = on_input
		self.pacer = pacer if pacer is not None else Pacer()
		self.state = InterpreterState()
		self.output : list[str] = []
		self._guard = RunGuard()

	@property
	def execution_speed(self) -> int: return self.pacer.speed
	@execution_speed.setter
	def execution_speed(self, ms:int): self.pacer.speed = max(0, int(ms))

	@property
	def running(self) -> bool: return self._guard.active

	@property
	def stop_requested(self) -> bool: return self.pacer.cancelled

	def stop(self):
		self.pacer.cancel()

	def reset(self):
		""" Forget every procedure and variable, and start the drawing over. """
		self.state = InterpreterState()
		self.output = []
		self.graphics.reset()

	def run(self, code:str):
		""" Run a program to completion, raising LogoError if it goes wrong. """
		with self._guard:
			self.pacer.clear()
			self.output = []
			tokens = tokenize(code)
			allow_deep_recursion()
			try: execute_tokens(self, tokens)
			except RecursionError:
				raise LogoError("Too many procedures calling each other! Does your procedure have a way to STOP?") from None
			except OverflowError:
				raise LogoError("That number got too big for me to work with!") from None
			except ValueError:
				raise LogoError("That arithmetic doesn't give a number I can use. Is something infinitely big?") from None

	def execute(self, code:str) -> bool:
		""" Run a program, telling the error channel about any problem. Answers whether all went well. """
		try: self.run(code)
		except LogoError as e:
			if self.on_error is not None: self.on_error(e.message)
			return False
		return True

	def emit(self, text:str, mode:str):
		if mode == NORMAL: self.output.append(text)
		if self.on_output is not None: self.on_output(text, mode)

	def ask(self, prompt:str) -> str:
		if self.on_input is None:
			raise LogoError("There is nobody here to answer: %s"%prompt)
		reply = self.on_input(prompt)
		return "" if reply is None else str(reply)

	def invoke(self, proc:Procedure, args:list) -> Optional[Signal]:
		""" Run a procedure body in a fresh scope. Whatever signal ended it is the caller's to use or ignore. """
		with self.state.scope(dict(zip(proc.params, args))):
			outcome = execute_tokens(self, proc.body)
		if isinstance(outcome, Signal): return outcome

	def known_names(self) -> list[str]:
		return builtin_names() + list(self.state.procedures)

###############################################################################

def execute_tokens(interp:Interpreter, tokens:TOKENS, index:int=0) -> OUTCOME:
	""" Run statements until the tokens run out, a signal escapes, or someone asks to stop. """
	while index < len(tokens) and not interp.stop_requested:
		outcome = execute_statement(interp, tokens, index)
		if isinstance(outcome, Signal): return outcome
		index = outcome
		interp.pacer.checkpoint()
	return index

def execute_statement(interp:Interpreter, tokens:TOKENS, index:int) -> OUTCOME:
	token = tokens[index]
	if token.kind != WORD: return index + 1
	name = token.value
	index += 1
	if name in FORMS: return FORMS[name](interp, tokens, index)
	if name in COMMANDS:
		prim = COMMANDS[name]
		args, index = arguments(interp, tokens, index, prim.arity)
		prim.fn(interp, *args)
		return index
	proc = interp.state.procedure(name)
	if proc is not None:
		args, index = arguments(interp, tokens, index, len(proc.params))
		interp.invoke(proc, args)
		return index
	if name in FUNCTIONS or name in FUNCTION_FORMS:
		raise UnknownCommand("You don't say what to do with %s. Try PRINT %s"%(name, name), name)
	raise unknown_command(name, interp.known_names())

def _after(outcome:OUTCOME, index:int) -> OUTCOME:
	return outcome if isinstance(outcome, Signal) else index

###############################################################################
# Special forms. Each takes the index just past its own name.

def _form_to(interp:Interpreter, tokens:TOKENS, index:int) -> int:
	if index >= len(tokens) or tokens[index].kind != WORD:
		raise LogoParseError("TO needs a name for your procedure: TO SQUARE ... END")
	name = tokens[index].value
	if is_builtin(name):
		raise LogoParseError("%s is already a built-in word. Pick another name for your procedure."%name)
	index += 1
	params = []
	while index < len(tokens) and tokens[index].kind == VARREF:
		params.append(tokens[index].value.upper())
		index += 1
	start, depth = index, 1
	while index < len(tokens):
		token = tokens[index]
		if token.kind == WORD and token.value == "TO": depth += 1
		elif token.kind == WORD and token.value == "END":
			depth -= 1
			if not depth: break
		index += 1
	else:
		raise LogoParseError("Your procedure %s is missing END. Every TO needs an END!"%name)
	interp.state.define(Procedure(name, tuple(params), tuple(tokens[start:index])))
	return index + 1

def _form_end(interp:Interpreter, tokens:TOKENS, index:int) -> int:
	raise LogoParseError("I found END without a TO before it.")

def _form_repeat(interp:Interpreter, tokens:TOKENS, index:int) -> OUTCOME:
	count, index = evaluate(interp, tokens, index)
	body, index = block(tokens, index, "REPEAT needs commands in brackets, like: REPEAT 4 [FD 100 RT 90]")
	times = math.floor(as_number(count, "REPEAT"))
	with interp.state.repeat_counter() as state:
		for n in range(1, times + 1):
			if interp.stop_requested: break
			state.repcount = n
			outcome = execute_tokens(interp, body)
			if isinstance(outcome, Signal): return outcome
	return index

def _form_if(interp:Interpreter, tokens:TOKENS, index:int) -> OUTCOME:
	condition, index = evaluate_condition(interp, tokens, index)
	body, index = block(tokens, index, "IF needs commands in brackets, like: IF :x > 5 [PRINT :x]")
	if is_truthy(condition): return _after(execute_tokens(interp, body), index)
	return index

def _form_ifelse(interp:Interpreter, tokens:TOKENS, index:int) -> OUTCOME:
	complaint = "IFELSE needs two bracket groups: IFELSE condition [do if true] [do if false]"
	condition, index = evaluate_condition(interp, tokens, index)
	if_true, index = block(tokens, index, complaint)
	if_false, index = block(tokens, index, complaint)
	return _after(execute_tokens(interp, if_true if is_truthy(condition) else if_false), index)

def _form_for(interp:Interpreter, tokens:TOKENS, index:int) -> OUTCOME:
	control, index = block(tokens, index, "FOR needs a control list like [i 1 10], for example: FOR [i 1 10] [PRINT :i]")
	if len(control) < 3 or control[0].kind not in (WORD, QUOTED):
		raise LogoParseError("FOR control list needs at least 3 things: [variable start end]")
	body, index = block(tokens, index, "FOR needs commands in brackets after the control list")
	name = control[0].value.upper()
	start, at = evaluate(interp, control, 1)
	end, at = evaluate(interp, control, at)
	step = 1
	if at < len(control): step, at = evaluate(interp, control, at)
	start, end, step = as_number(start, "FOR"), as_number(end, "FOR"), as_number(step, "FOR")
	if step == 0:
		raise LogoError("FOR loop step can't be zero. The loop would never end!")
	with interp.state.scope() as frame:
		n = 0
		while not interp.stop_requested:
			value = start + n * step
			if (value > end) if step > 0 else (value < end): break
			frame.assign(name, value)
			outcome = execute_tokens(interp, body)
			if isinstance(outcome, Signal): return outcome
			n += 1
	return index

def _form_while(interp:Interpreter, tokens:TOKENS, index:int) -> OUTCOME:
	condition, index = block(tokens, index, "WHILE needs a condition in brackets: WHILE [:x < 10] [commands]")
	body, index = block(tokens, index, "WHILE needs commands in brackets after the condition")
	while not interp.stop_requested:
		value, _ = evaluate_condition(interp, condition, 0)
		if not is_truthy(value): break
		outcome = execute_tokens(interp, body)
		if isinstance(outcome, Signal): return outcome
	return index

def _form_stop(interp:Interpreter, tokens:TOKENS, index:int) -> Signal:
	return STOP

def _form_output(interp:Interpreter, tokens:TOKENS, index:int) -> Signal:
	value, _ = evaluate(interp, tokens, index)
	return Output(value)

def _form_filled(interp:Interpreter, tokens:TOKENS, index:int) -> OUTCOME:
	body, index = block(tokens, index, "FILLED needs commands in brackets: FILLED [REPEAT 4 [FD 100 RT 90]]")
	graphics = interp.graphics
	graphics.begin_fill()
	try: outcome = execute_tokens(interp, body)
	except BaseException:
		graphics.cancel_fill()
		raise
	graphics.end_fill()
	return _after(outcome, index)

def _form_ask(interp:Interpreter, tokens:TOKENS, index:int) -> OUTCOME:
	who, index = evaluate(interp, tokens, index)
	body, index = block(tokens, index, "ASK needs commands in brackets: ASK 1 [FD 100]")
	graphics = interp.graphics
	prior = graphics.current_id
	graphics.tell(who)
	try: outcome = execute_tokens(interp, body)
	finally: graphics.tell(prior)
	return _after(outcome, index)

FORMS = {
	name[len("_form_"):].upper(): fn
	for name, fn in list(globals().items())
	if name.startswith("_form_")
}
FORMS["OP"] = _form_output
