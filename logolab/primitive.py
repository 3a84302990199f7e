"""
The built-in vocabulary, as one table of name -> descriptor.

Every entry has a fixed number of inputs and a handler taking the interpreter
followed by the already-evaluated inputs. FUNCTIONS give back a value and may
appear inside expressions; COMMANDS stand at the head of a statement. Words that
need to see raw tokens (brackets, optional prompts) are special forms, handled
by the evaluator and executor directly; their names are listed here so that
"did you mean" knows about them.
"""
import math
import random
from typing import Callable, NamedTuple
from .diagnostics import LogoError, LogoTypeError, IndexOutOfRange, DivideByZero
from .values import as_number, is_number, is_truthy, logo_equal, format_value, format_show
from .graphics import resolve_color, WRAP, WINDOW, FENCE

NORMAL, INLINE = "normal", "inline"

class Primitive(NamedTuple):
	name: str
	arity: int
	fn: Callable

FUNCTIONS : dict[str, Primitive] = {}
COMMANDS : dict[str, Primitive] = {}

COMMAND_FORMS = ("TO", "END", "REPEAT", "IF", "IFELSE", "FOR", "WHILE", "STOP", "OUTPUT", "OP", "FILLED", "ASK")
FUNCTION_FORMS = ("READWORD", "READLIST")

def _install(table, names, arity):
	def register(fn):
		for name in names: table[name] = Primitive(names[0], arity, fn)
		return fn
	return register

def function(*names, arity=1): return _install(FUNCTIONS, names, arity)
def command(*names, arity=1): return _install(COMMANDS, names, arity)

def builtin_names() -> list[str]:
	return list(COMMANDS) + list(COMMAND_FORMS) + list(FUNCTIONS) + list(FUNCTION_FORMS)

def is_builtin(name:str) -> bool:
	return name in FUNCTIONS or name in COMMANDS or name in COMMAND_FORMS or name in FUNCTION_FORMS

###############################################################################
# Math

def _unary_math(name, fn):
	def handler(interp, x):
		x = as_number(x, name)
		try: return fn(x)
		except (ValueError, OverflowError):
			raise LogoError("%s can't work with %s."%(name, format_value(x))) from None
	function(name)(handler)

def _round(x):
	""" Halves round up, the way most people learned it. """
	return math.floor(x + 0.5)

def _random(n):
	return 0 if n <= 0 else math.floor(random.random() * n)

def _sign(x):
	return (x > 0) - (x < 0)

for _math, _fn in {
	"SQRT": math.sqrt,
	"SIN": lambda a: math.sin(math.radians(a)),
	"COS": lambda a: math.cos(math.radians(a)),
	"TAN": lambda a: math.tan(math.radians(a)),
	"ARCTAN": lambda a: math.degrees(math.atan(a)),
	"ABS": abs,
	"INT": math.trunc,
	"ROUND": _round,
	"RANDOM": _random,
	"EXP": math.exp,
	"LOG": math.log,
	"LN": math.log,
	"LOG10": math.log10,
	"SIGN": _sign,
}.items():
	_unary_math(_math, _fn)

@function("POWER", arity=2)
def _power(interp, a, b):
	a, b = as_number(a, "POWER"), as_number(b, "POWER")
	exact = isinstance(a, int) and isinstance(b, int) and 0 <= b <= 1024
	try: return a ** b if exact else math.pow(a, b)
	except (ValueError, OverflowError, ZeroDivisionError):
		raise LogoError("POWER can't work with %s and %s."%(format_value(a), format_value(b))) from None

def _divisor(b, who):
	b = as_number(b, who)
	if b == 0: raise DivideByZero()
	return b

@function("REMAINDER", arity=2)
def _remainder(interp, a, b):
	""" Takes the sign of the dividend. """
	a, b = as_number(a, "REMAINDER"), _divisor(b, "REMAINDER")
	if isinstance(a, int) and isinstance(b, int):
		r = abs(a) % abs(b)
		return -r if a < 0 else r
	return math.fmod(a, b)

@function("MODULO", arity=2)
def _modulo(interp, a, b):
	""" Takes the sign of the divisor. """
	return as_number(a, "MODULO") % _divisor(b, "MODULO")

@function("MIN", arity=2)
def _min(interp, a, b): return min(as_number(a, "MIN"), as_number(b, "MIN"))

@function("MAX", arity=2)
def _max(interp, a, b): return max(as_number(a, "MAX"), as_number(b, "MAX"))

###############################################################################
# Turtle queries: these read, never write.

@function("XCOR", arity=0)
def _xcor(interp): return interp.graphics.x

@function("YCOR", arity=0)
def _ycor(interp): return interp.graphics.y

@function("HEADING", arity=0)
def _heading(interp): return interp.graphics.heading

@function("POS", arity=0)
def _pos(interp): return [interp.graphics.x, interp.graphics.y]

@function("PENSIZE", arity=0)
def _pensize(interp): return interp.graphics.pen_size

@function("PENCOLOR", "PC", arity=0)
def _pencolor(interp): return interp.graphics.pen_color

@function("WHO", arity=0)
def _who(interp): return interp.graphics.current_id

@function("TURTLES", arity=0)
def _turtles(interp): return interp.graphics.turtle_ids()

###############################################################################
# Words

@function("WORD", arity=2)
def _word(interp, a, b): return format_value(a) + format_value(b)

@function("CHAR")
def _char(interp, code):
	code = as_number(code, "CHAR")
	try: return chr(int(code))
	except (ValueError, OverflowError):
		raise LogoError("CHAR can't make a character from %s."%format_value(code)) from None

@function("ASCII")
def _ascii(interp, word):
	text = format_value(word)
	if not text: raise LogoTypeError("ASCII needs a word with at least one character!")
	return ord(text[0])

@function("UPPERCASE")
def _uppercase(interp, word): return format_value(word).upper()

@function("LOWERCASE")
def _lowercase(interp, word): return format_value(word).lower()

###############################################################################
# Geometry

def _point(value, who):
	if not isinstance(value, list) or len(value) < 2:
		raise LogoTypeError("%s needs a point like [x y]"%who)
	return as_number(value[0], who), as_number(value[1], who)

@function("TOWARDS")
def _towards(interp, point):
	x, y = _point(point, "TOWARDS")
	angle = math.degrees(math.atan2(x - interp.graphics.x, y - interp.graphics.y))
	return angle + 360 if angle < 0 else angle

@function("DISTANCE")
def _distance(interp, point):
	x, y = _point(point, "DISTANCE")
	return math.hypot(x - interp.graphics.x, y - interp.graphics.y)

###############################################################################
# Lists, and words treated as lists of characters

def _sequence(value, who):
	if isinstance(value, (list, str)): return value
	raise LogoTypeError("%s needs a list like [1 2 3] or a word"%who)

@function("FIRST")
def _first(interp, thing):
	thing = _sequence(thing, "FIRST")
	if not thing:
		if isinstance(thing, list): raise LogoTypeError("The list is empty! FIRST needs at least one item.")
		raise LogoTypeError("The word is empty! FIRST needs at least one character.")
	return thing[0]

@function("LAST")
def _last(interp, thing):
	thing = _sequence(thing, "LAST")
	if not thing:
		if isinstance(thing, list): raise LogoTypeError("The list is empty! LAST needs at least one item.")
		raise LogoTypeError("The word is empty! LAST needs at least one character.")
	return thing[-1]

@function("BUTFIRST", "BF")
def _butfirst(interp, thing): return _sequence(thing, "BUTFIRST")[1:]

@function("BUTLAST", "BL")
def _butlast(interp, thing): return _sequence(thing, "BUTLAST")[:-1]

@function("COUNT")
def _count(interp, thing): return len(_sequence(thing, "COUNT"))

def _plural(n, noun):
	return "%d %s%s"%(n, noun, "" if n == 1 else "s")

@function("ITEM", arity=2)
def _item(interp, index, thing):
	thing = _sequence(thing, "ITEM")
	index = as_number(index, "ITEM")
	if isinstance(thing, list):
		noun, whole, Noun = "item", "list", "Item"
	else:
		noun, whole, Noun = "character", "word", "Character"
	if not thing:
		raise IndexOutOfRange("The %s is empty! There are no %ss to get."%(whole, noun))
	if index != int(index) or not 1 <= index <= len(thing):
		raise IndexOutOfRange("%s %s doesn't exist! The %s only has %s."%(
			Noun, format_value(index), whole, _plural(len(thing), noun)
		))
	return thing[int(index) - 1]

@function("LIST", arity=2)
def _list(interp, a, b): return [a, b]

def sentence(*items):
	""" Flatten one level: lists give up their items, anything else goes in as itself. """
	result = []
	for item in items:
		if isinstance(item, list): result.extend(item)
		else: result.append(item)
	return result

@function("SENTENCE", "SE", arity=2)
def _sentence(interp, a, b): return sentence(a, b)

@function("FPUT", arity=2)
def _fput(interp, item, lst):
	if not isinstance(lst, list):
		raise LogoTypeError('FPUT needs a list: FPUT "hello [1 2 3] puts "hello at the front')
	return [item] + lst

@function("LPUT", arity=2)
def _lput(interp, item, lst):
	if not isinstance(lst, list):
		raise LogoTypeError('LPUT needs a list: LPUT "hello [1 2 3] puts "hello at the end')
	return lst + [item]

VARIADIC = {
	"LIST": lambda *items: list(items),
	"WORD": lambda *items: "".join(map(format_value, items)),
	"SENTENCE": sentence,
	"SE": sentence,
}

###############################################################################
# Predicates

@function("EMPTY?")
def _empty_p(interp, thing):
	if isinstance(thing, (list, str)): return not thing
	return False

@function("LIST?")
def _list_p(interp, thing): return isinstance(thing, list)

@function("NUMBER?")
def _number_p(interp, thing): return is_number(thing)

@function("WORD?")
def _word_p(interp, thing): return isinstance(thing, str)

@function("MEMBER?", arity=2)
def _member_p(interp, item, thing):
	if isinstance(thing, list): return any(logo_equal(item, x) for x in thing)
	if isinstance(thing, str): return format_value(item) in thing
	return False

@function("REVERSE")
def _reverse(interp, thing):
	if isinstance(thing, (list, str)): return thing[::-1]
	raise LogoTypeError("REVERSE needs a list like [1 2 3] or a word")

###############################################################################
# Logic

@function("AND", arity=2)
def _and(interp, a, b): return is_truthy(a) and is_truthy(b)

@function("OR", arity=2)
def _or(interp, a, b): return is_truthy(a) or is_truthy(b)

@function("NOT")
def _not(interp, a): return not is_truthy(a)

@function("TRUE", arity=0)
def _true(interp): return True

@function("FALSE", arity=0)
def _false(interp): return False

###############################################################################
# Variables

@function("THING")
def _thing(interp, name): return interp.state.get_variable(format_value(name))

@function("REPCOUNT", arity=0)
def _repcount(interp): return interp.state.repcount or 1

def _name(value, who):
	name = format_value(value)
	if not name or isinstance(value, list):
		raise LogoTypeError('%s needs a name, like %s "size 100'%(who, who))
	return name

@command("MAKE", arity=2)
def _make(interp, name, value): interp.state.set_variable(_name(name, "MAKE"), value)

@command("LOCAL")
def _local(interp, name): interp.state.set_local(_name(name, "LOCAL"), None)

###############################################################################
# Motion

def _motion(name, method):
	@command(*name.split())
	def handler(interp, amount):
		getattr(interp.graphics, method)(as_number(amount, name.split()[0]))

for _names, _method in [
	("FORWARD FD", "forward"),
	("BACK BK", "back"),
	("LEFT LT", "left"),
	("RIGHT RT", "right"),
	("SETX", "set_x"),
	("SETY", "set_y"),
	("SETHEADING SETH", "set_heading"),
	("CIRCLE", "circle"),
]:
	_motion(_names, _method)

@command("SETPOS")
def _setpos(interp, point): interp.graphics.set_position(*_point(point, "SETPOS"))

@command("ARC", arity=2)
def _arc(interp, angle, radius): interp.graphics.arc(as_number(angle, "ARC"), as_number(radius, "ARC"))

@command("SETPENSIZE")
def _setpensize(interp, size): interp.graphics.set_pen_size(as_number(size, "SETPENSIZE"))

@command("SETPENCOLOR", "SETPC")
def _setpencolor(interp, color): interp.graphics.set_pen_color(resolve_color(color))

@command("SETBACKGROUND", "SETBG")
def _setbackground(interp, color): interp.graphics.set_background(resolve_color(color))

@command("TELL")
def _tell(interp, who): interp.graphics.tell(who)

@command("WAIT")
def _wait(interp, ms): interp.pacer.pause(as_number(ms, "WAIT"))

def _no_inputs(names, method, *args):
	@command(*names.split(), arity=0)
	def handler(interp):
		getattr(interp.graphics, method)(*args)

for _names, _method, _args in [
	("HOME", "home", ()),
	("PENUP PU", "pen_up", ()),
	("PENDOWN PD", "pen_down", ()),
	("PENERASE PE", "pen_erase", ()),
	("PENPAINT PPT", "pen_paint", ()),
	("CLEARSCREEN CS", "clear_screen", ()),
	("CLEAN", "clean", ()),
	("HIDETURTLE HT", "hide_turtle", ()),
	("SHOWTURTLE ST", "show_turtle", ()),
	("WRAP", "set_mode", (WRAP,)),
	("WINDOW", "set_mode", (WINDOW,)),
	("FENCE", "set_mode", (FENCE,)),
]:
	_no_inputs(_names, _method, *_args)

###############################################################################
# Printing

@command("PRINT")
def _print(interp, value): interp.emit(format_value(value), NORMAL)

@command("SHOW")
def _show(interp, value): interp.emit(format_show(value), NORMAL)

@command("TYPE")
def _type(interp, value): interp.emit(format_value(value), INLINE)
