"""
Logo values play themselves: numbers are int or float, words are str,
booleans are bool, lists are Python lists, and nothing is None.

This module holds the coercions and formats that give them Logo manners.
"""
from typing import Any, Union
from .diagnostics import LogoTypeError

VALUE = Union[int, float, str, bool, list, None]

def is_number(x:Any) -> bool:
	return isinstance(x, (int, float)) and not isinstance(x, bool)

def _read_number(text:str):
	try: return int(text)
	except ValueError: return float(text)

def as_number(x:VALUE, who:str):
	""" Numbers, and words that spell numbers, are numbers. Nothing else is. """
	if is_number(x): return x
	if isinstance(x, str):
		try: return _read_number(x.strip())
		except ValueError: pass
	raise LogoTypeError("%s needs a number, but got %s."%(who, describe(x)))

def is_truthy(x:VALUE) -> bool:
	if x is True or x == "TRUE": return True
	if x is False or x == "FALSE": return False
	return bool(x)

def logo_equal(a:VALUE, b:VALUE) -> bool:
	""" Numbers compare numerically, words by content, lists item by item. Mixed types never match. """
	if is_number(a) and is_number(b): return a == b
	if isinstance(a, bool) or isinstance(b, bool): return a is b
	if isinstance(a, list) and isinstance(b, list):
		return len(a) == len(b) and all(map(logo_equal, a, b))
	if type(a) is not type(b): return False
	return a == b

def logo_order(a:VALUE, b:VALUE) -> int:
	""" Negative, zero or positive, for the ordering comparisons. """
	if is_number(a) and is_number(b): pass
	elif isinstance(a, str) and isinstance(b, str): pass
	else: raise LogoTypeError("I can't tell which is bigger: %s or %s."%(describe(a), describe(b)))
	return (a > b) - (a < b)

def format_number(n) -> str:
	if isinstance(n, float):
		if n.is_integer() and abs(n) < 1e16: return str(int(n))
		return repr(n)
	return str(n)

def format_value(x:VALUE) -> str:
	""" PRINT and TYPE flatten lists into words separated by spaces. """
	if isinstance(x, list): return " ".join(map(format_value, x))
	return _format_atom(x)

def format_show(x:VALUE) -> str:
	""" SHOW keeps the brackets, so a list reads back as a list literal. """
	if isinstance(x, list): return "[" + " ".join(map(format_show, x)) + "]"
	return _format_atom(x)

def _format_atom(x:VALUE) -> str:
	if x is None: return ""
	if x is True: return "true"
	if x is False: return "false"
	if is_number(x): return format_number(x)
	return str(x)

def describe(x:VALUE) -> str:
	""" For error messages. """
	if isinstance(x, list): return "the list " + format_show(x)
	if x is None: return "nothing"
	if isinstance(x, str): return 'the word "%s'%x
	return format_value(x)

def parse_reply(text:str) -> list:
	""" READLIST splits a reply on whitespace; anything that reads as a number becomes one. """
	items = []
	for piece in text.split():
		try: items.append(_read_number(piece))
		except ValueError: items.append(piece)
	return items
