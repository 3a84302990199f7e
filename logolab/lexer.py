"""
Turn Logo source text into a flat list of tokens.

The scanner never fails: characters it cannot place are dropped.
The only context it tracks is the bracket depth and the previous token,
which together decide whether a minus sign is subtraction or the start
of a negative number. Inside a list literal, `[-150 -10]` is two numbers;
outside, `10 -5` is a subtraction.
"""
import re
import sys
from string import ascii_letters
from typing import NamedTuple, Union

NUMBER = "NUMBER"
WORD = "WORD"
QUOTED = "QUOTED"
VARREF = "VARREF"
LBRACKET = "LBRACKET"
RBRACKET = "RBRACKET"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
OPERATOR = "OPERATOR"
COMPARISON = "COMPARISON"

# A minus sign after one of these is subtraction (outside brackets).
VALUE_KINDS = frozenset([NUMBER, WORD, RPAREN, RBRACKET])

class Token(NamedTuple):
	kind: str
	value: Union[str, int, float]
	def __repr__(self): return "<%s %r>"%(self.kind, self.value)

_DIGITS = re.compile(r"[0-9.]*")
_VARNAME = re.compile(r"[A-Za-z0-9_.]*")
_BAREWORD = re.compile(r"[A-Za-z0-9_?]*")
_QUOTE_STOP = frozenset("[]();")
_DIGIT = frozenset("0123456789")
_WORD_START = frozenset(ascii_letters + "_?")
_PAIRS = frozenset(["<=", ">=", "<>"])

_PUNCTUATION = {
	"[": LBRACKET,
	"]": RBRACKET,
	"(": LPAREN,
	")": RPAREN,
}

def _number(text:str) -> Union[int, float]:
	"""
	Read the longest numeric prefix, the way a forgiving reader would.
	"1.2.3" reads as 1.2, and a lone "-" or "." reads as zero.
	"""
	m = re.match(r"-?(\d+\.?\d*|\.\d+)", text)
	if m is None: return 0
	digits = m.group()
	if "." in digits: return float(digits)
	return int(digits)

def tokenize(source:str) -> list[Token]:
	tokens = []
	depth = 0
	i, end = 0, len(source)

	def previous_is_value():
		return bool(tokens) and tokens[-1].kind in VALUE_KINDS

	while i < end:
		c = source[i]
		if c.isspace():
			i += 1
		elif c == ";":
			i = source.find("\n", i)
			if i < 0: i = end
		elif c in _PUNCTUATION:
			kind = _PUNCTUATION[c]
			if kind == LBRACKET: depth += 1
			elif kind == RBRACKET: depth -= 1
			tokens.append(Token(kind, c))
			i += 1
		elif c in "+*/":
			tokens.append(Token(OPERATOR, c))
			i += 1
		elif c == "-":
			followed_by_digit = i+1 < end and source[i+1] in _DIGIT
			if followed_by_digit and (depth > 0 or not previous_is_value()):
				digits = _DIGITS.match(source, i+1).group()
				tokens.append(Token(NUMBER, _number("-"+digits)))
				i += 1 + len(digits)
			else:
				tokens.append(Token(OPERATOR, "-"))
				i += 1
		elif c in "=<>":
			op = source[i:i+2]
			if op not in _PAIRS: op = c
			tokens.append(Token(COMPARISON, op))
			i += len(op)
		elif c == ":":
			name = _VARNAME.match(source, i+1).group()
			if name: tokens.append(Token(VARREF, name))
			i += 1 + len(name)
		elif c == '"':
			i += 1
			chars = []
			while i < end:
				if source[i] == "\\" and source[i+1:i+2] == " ":
					chars.append(" ")
					i += 2
				elif source[i].isspace() or source[i] in _QUOTE_STOP:
					break
				else:
					chars.append(source[i])
					i += 1
			tokens.append(Token(QUOTED, "".join(chars)))
		elif c in _DIGIT or (c == "." and i+1 < end and source[i+1] in _DIGIT):
			digits = _DIGITS.match(source, i).group()
			tokens.append(Token(NUMBER, _number(digits)))
			i += len(digits)
		elif c in _WORD_START:
			word = _BAREWORD.match(source, i).group()
			tokens.append(Token(WORD, sys.intern(word.upper())))
			i += len(word)
		else:
			i += 1
	return tokens
