"""
Recursive-descent expression evaluation over a token list and a cursor.

Every evaluation function takes the interpreter, the tokens, and an index,
and returns the value together with the index just past what it consumed.
Precedence, loosest first: + and -, then * and /, then unary minus, then
primary. Comparisons are not part of expressions; they belong to the
condition grammar used by IF, IFELSE and WHILE (and inside parentheses).

Bracketed lists are kept as tokens until the moment they are evaluated,
so variable references inside them see current values.
"""
from typing import Sequence
from .lexer import (
	Token, NUMBER, WORD, QUOTED, VARREF, LBRACKET, RBRACKET, LPAREN, RPAREN, OPERATOR, COMPARISON,
)
from .diagnostics import LogoParseError, UnknownCommand, DivideByZero, OUT_OF_WORDS, unknown_function
from .values import as_number, logo_equal, logo_order, parse_reply
from .primitive import FUNCTIONS, COMMANDS, COMMAND_FORMS, VARIADIC
from .signals import Output

TOKENS = Sequence[Token]

def find_close(tokens:TOKENS, index:int) -> int:
	""" Given the index just inside an opening bracket, find the index of its partner. """
	depth = 1
	for i in range(index, len(tokens)):
		kind = tokens[i].kind
		if kind == LBRACKET: depth += 1
		elif kind == RBRACKET:
			depth -= 1
			if not depth: return i
	raise LogoParseError("You opened [ but forgot to close it with ]")

def block(tokens:TOKENS, index:int, complaint:str) -> tuple[TOKENS, int]:
	""" The tokens inside the bracketed block at `index`, and the index past its closing bracket. """
	if index >= len(tokens) or tokens[index].kind != LBRACKET:
		raise LogoParseError(complaint)
	close = find_close(tokens, index + 1)
	return tokens[index + 1:close], close + 1

def parse_list(tokens:TOKENS) -> list:
	""" Re-assemble balanced tokens into nested lists of tokens. """
	stack = [[]]
	for token in tokens:
		if token.kind == LBRACKET:
			stack.append([])
		elif token.kind == RBRACKET and len(stack) > 1:
			inner = stack.pop()
			stack[-1].append(inner)
		else:
			stack[-1].append(token)
	while len(stack) > 1:
		inner = stack.pop()
		stack[-1].append(inner)
	return stack[0]

def list_value(interp, items:list) -> list:
	""" Turn a re-assembled list literal into a value, resolving variables now. """
	result = []
	for item in items:
		if isinstance(item, list): result.append(list_value(interp, item))
		elif item.kind == VARREF: result.append(interp.state.get_variable(item.value))
		else: result.append(item.value)
	return result

###############################################################################

def evaluate(interp, tokens:TOKENS, index:int):
	return _additive(interp, tokens, index)

def _arithmetic(op:str, a, b):
	a, b = as_number(a, op), as_number(b, op)
	if op == "+": return a + b
	if op == "-": return a - b
	if op == "*": return a * b
	if b == 0: raise DivideByZero()
	return a / b

def _binary_level(operators, operand):
	def level(interp, tokens:TOKENS, index:int):
		value, index = operand(interp, tokens, index)
		while index < len(tokens):
			token = tokens[index]
			if token.kind != OPERATOR or token.value not in operators: break
			right, index = operand(interp, tokens, index + 1)
			value = _arithmetic(token.value, value, right)
		return value, index
	return level

def _unary(interp, tokens:TOKENS, index:int):
	if index >= len(tokens): raise LogoParseError(OUT_OF_WORDS)
	token = tokens[index]
	if token.kind == OPERATOR and token.value == "-":
		value, index = _unary(interp, tokens, index + 1)
		return -as_number(value, "-"), index
	return _primary(interp, tokens, index)

_multiplicative = _binary_level("*/", _unary)
_additive = _binary_level("+-", _multiplicative)

def _primary(interp, tokens:TOKENS, index:int):
	if index >= len(tokens): raise LogoParseError(OUT_OF_WORDS)
	token = tokens[index]
	try: fn = PRIMARY[token.kind]
	except KeyError:
		raise LogoParseError('I don\'t understand "%s" here. Check your code!'%token.value) from None
	return fn(interp, tokens, index)

###############################################################################

def _eval_number(interp, tokens:TOKENS, index:int):
	return tokens[index].value, index + 1

def _eval_quoted(interp, tokens:TOKENS, index:int):
	return tokens[index].value, index + 1

def _eval_varref(interp, tokens:TOKENS, index:int):
	return interp.state.get_variable(tokens[index].value), index + 1

def _eval_lbracket(interp, tokens:TOKENS, index:int):
	close = find_close(tokens, index + 1)
	return list_value(interp, parse_list(tokens[index + 1:close])), close + 1

def _close_paren(tokens:TOKENS, index:int) -> int:
	if index >= len(tokens) or tokens[index].kind != RPAREN:
		raise LogoParseError("You opened ( but forgot to close it with )")
	return index + 1

def _eval_lparen(interp, tokens:TOKENS, index:int):
	head = tokens[index + 1] if index + 1 < len(tokens) else None
	if head is not None and head.kind == WORD and head.value in VARIADIC:
		items = []
		index += 2
		while index < len(tokens) and tokens[index].kind != RPAREN:
			value, index = evaluate(interp, tokens, index)
			items.append(value)
		return VARIADIC[head.value](*items), _close_paren(tokens, index)
	value, index = evaluate_condition(interp, tokens, index + 1)
	return value, _close_paren(tokens, index)

def _eval_word(interp, tokens:TOKENS, index:int):
	name = tokens[index].value
	index += 1
	if name in FUNCTIONS:
		prim = FUNCTIONS[name]
		args, index = arguments(interp, tokens, index, prim.arity)
		return prim.fn(interp, *args), index
	if name in READERS:
		prompt = READERS[name][0]
		if index < len(tokens) and tokens[index].kind == QUOTED:
			prompt = tokens[index].value
			index += 1
		return READERS[name][1](interp.ask(prompt)), index
	proc = interp.state.procedure(name)
	if proc is not None:
		args, index = arguments(interp, tokens, index, len(proc.params))
		result = interp.invoke(proc, args)
		return (result.value if isinstance(result, Output) else None), index
	if name in COMMANDS or name in COMMAND_FORMS:
		raise UnknownCommand("%s is a command. It doesn't give back a value to use here."%name, name)
	raise unknown_function(name, interp.known_names())

READERS = {
	"READWORD": ("Enter a word:", lambda reply: reply),
	"READLIST": ("Enter values (space-separated):", parse_reply),
}

PRIMARY = {
	NUMBER: _eval_number,
	QUOTED: _eval_quoted,
	VARREF: _eval_varref,
	LBRACKET: _eval_lbracket,
	LPAREN: _eval_lparen,
	WORD: _eval_word,
}

def arguments(interp, tokens:TOKENS, index:int, count:int) -> tuple[list, int]:
	""" Evaluate exactly `count` expressions in a row. """
	args = []
	for _ in range(count):
		value, index = evaluate(interp, tokens, index)
		args.append(value)
	return args, index

###############################################################################

COMPARE = {
	"=": logo_equal,
	"<>": lambda a, b: not logo_equal(a, b),
	"<": lambda a, b: logo_order(a, b) < 0,
	">": lambda a, b: logo_order(a, b) > 0,
	"<=": lambda a, b: logo_order(a, b) <= 0,
	">=": lambda a, b: logo_order(a, b) >= 0,
}

def evaluate_condition(interp, tokens:TOKENS, index:int):
	"""
	One expression, then optionally one comparison and one more expression.
	Comparisons do not chain.
	"""
	left, index = evaluate(interp, tokens, index)
	if index < len(tokens) and tokens[index].kind == COMPARISON:
		op = tokens[index].value
		right, index = evaluate(interp, tokens, index + 1)
		return COMPARE[op](left, right), index
	return left, index
