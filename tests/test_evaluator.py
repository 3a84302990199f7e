import unittest
from logolab.lexer import tokenize
from logolab.evaluator import evaluate_condition, find_close, parse_list
from logolab.executive import Interpreter
from logolab.graphics import TurtleGraphics, RecordingSurface
from logolab import diagnostics, values

def interpreter(**kwargs):
	return Interpreter(TurtleGraphics(RecordingSurface()), **kwargs)

def value_of(interp, text):
	tokens = tokenize(text)
	value, index = evaluate_condition(interp, tokens, 0)
	assert index == len(tokens), "left over: %r"%(tokens[index:],)
	return value

class ArithmeticTests(unittest.TestCase):

	def setUp(self):
		self.interp = interpreter()

	def check(self, cases):
		for text, expect in cases:
			with self.subTest(text):
				self.assertEqual(expect, value_of(self.interp, text))

	def test_precedence(self):
		self.check([
			("3 + 4 * 2", 11),
			("(3 + 4) * 2", 14),
			("10 - 2 - 3", 5),
			("2 * -3", -6),
			("- 3 + 1", -2),
			("7 / 2", 3.5),
			("100 / 10 / 2", 5),
		])

	def test_unary_minus_of_a_variable(self):
		self.interp.state.set_variable("x", 4)
		self.assertEqual(-4, value_of(self.interp, "- :x"))
		self.assertEqual(0, value_of(self.interp, ":x - 4"))

	def test_words_that_spell_numbers_are_numbers(self):
		self.assertEqual(6, value_of(self.interp, '"5 + 1'))
		with self.assertRaises(diagnostics.LogoTypeError):
			value_of(self.interp, '"abc + 1')

	def test_division_by_zero(self):
		for text in ["6 / 0", "REMAINDER 5 0", "MODULO 5 0"]:
			with self.subTest(text):
				with self.assertRaises(diagnostics.DivideByZero) as cm:
					value_of(self.interp, text)
				self.assertIn("divide by zero", cm.exception.message)

	def test_math_functions(self):
		self.check([
			("SQRT 16", 4),
			("ABS -3", 3),
			("INT 3.7", 3),
			("INT (-3.7)", -3),
			("ROUND 2.5", 3),
			("ROUND 2.4", 2),
			("POWER 2 10", 1024),
			("MIN 3 9", 3),
			("MAX 3 9", 9),
			("SIGN (-8)", -1),
			("RANDOM 0", 0),
			("LOG10 1000", 3),
		])
		self.assertAlmostEqual(0.5, value_of(self.interp, "SIN 30"))
		self.assertAlmostEqual(0.5, value_of(self.interp, "COS 60"))
		self.assertAlmostEqual(45, value_of(self.interp, "ARCTAN 1"))
		self.assertAlmostEqual(2 ** 0.5, value_of(self.interp, "POWER 2 0.5"))

	def test_random_stays_in_range(self):
		for _ in range(50):
			self.assertIn(value_of(self.interp, "RANDOM 5"), range(5))

	def test_math_domain_problems_are_logo_errors(self):
		for text in ["SQRT (-1)", "LN 0", "POWER 0 (-1)"]:
			with self.subTest(text):
				with self.assertRaises(diagnostics.LogoError):
					value_of(self.interp, text)

	def test_remainder_follows_the_dividend_and_modulo_the_divisor(self):
		self.check([
			("REMAINDER -7 3", -1),
			("MODULO -7 3", 2),
			("REMAINDER 7 (-3)", 1),
			("MODULO 7 (-3)", -2),
			("REMAINDER 7 3", 1),
		])

class ListAndWordTests(unittest.TestCase):

	def setUp(self):
		self.interp = interpreter()

	def check(self, cases):
		for text, expect in cases:
			with self.subTest(text):
				self.assertEqual(expect, value_of(self.interp, text))

	def test_list_literals(self):
		self.check([
			("[1 2 3]", [1, 2, 3]),
			("[a [b c] d]", ["A", ["B", "C"], "D"]),
			("[]", []),
			('[-150 -10]', [-150, -10]),
		])

	def test_list_literals_see_current_values(self):
		self.interp.state.set_variable("x", 5)
		self.assertEqual([1, 5, [5]], value_of(self.interp, "[1 :x [:x]]"))
		self.interp.state.set_variable("x", 6)
		self.assertEqual([1, 6, [6]], value_of(self.interp, "[1 :x [:x]]"))

	def test_list_operations(self):
		self.check([
			("FIRST [a b c]", "A"),
			("LAST [a b c]", "C"),
			("BF [1 2 3]", [2, 3]),
			("BL [1 2 3]", [1, 2]),
			("COUNT [1 [2 3] 4]", 3),
			("ITEM 2 [10 20 30]", 20),
			("LIST 1 2", [1, 2]),
			("SE [1 2] 3", [1, 2, 3]),
			("FPUT 0 [1 2]", [0, 1, 2]),
			("LPUT 3 [1 2]", [1, 2, 3]),
			("REVERSE [1 2 3]", [3, 2, 1]),
		])

	def test_word_operations(self):
		self.check([
			('FIRST "hello', "h"),
			('BF "hello', "ello"),
			('COUNT "hello', 5),
			('ITEM 2 "hello', "e"),
			('WORD "ab "cd', "abcd"),
			('UPPERCASE "abc', "ABC"),
			('LOWERCASE "ABC', "abc"),
			("CHAR 65", "A"),
			('ASCII "A', 65),
			('REVERSE "abc', "cba"),
		])

	def test_variadic_forms_read_to_the_close_paren(self):
		self.check([
			("(LIST 1 2 3)", [1, 2, 3]),
			("(LIST)", []),
			('(WORD "a "b "c)', "abc"),
			("(SE [1 2] 3 [4])", [1, 2, 3, 4]),
			("(SENTENCE 1)", [1]),
		])

	def test_empty_things_complain(self):
		for text in ["FIRST []", "LAST []", 'FIRST "', 'ASCII "']:
			with self.subTest(text):
				with self.assertRaises(diagnostics.LogoTypeError):
					value_of(self.interp, text)

	def test_item_out_of_range_reports_the_length(self):
		with self.assertRaises(diagnostics.IndexOutOfRange) as cm:
			value_of(self.interp, "ITEM 4 [1 2 3]")
		self.assertIn("3 items", cm.exception.message)
		with self.assertRaises(diagnostics.IndexOutOfRange):
			value_of(self.interp, "ITEM 0 [1 2 3]")

	def test_fput_needs_a_list(self):
		with self.assertRaises(diagnostics.LogoTypeError):
			value_of(self.interp, "FPUT 1 2")

	def test_predicates(self):
		self.check([
			("EMPTY? []", True),
			('EMPTY? "abc', False),
			("LIST? [1]", True),
			("NUMBER? 3", True),
			('NUMBER? "3', False),
			('WORD? "abc', True),
			("MEMBER? 2 [1 2 3]", True),
			("MEMBER? 5 [1 2 3]", False),
		])

class ConditionTests(unittest.TestCase):

	def setUp(self):
		self.interp = interpreter()

	def check(self, cases):
		for text, expect in cases:
			with self.subTest(text):
				self.assertIs(expect, value_of(self.interp, text))

	def test_comparisons(self):
		self.check([
			("3 < 5", True),
			("3 > 5", False),
			("5 <= 5", True),
			("5 >= 6", False),
			("2 + 2 = 4", True),
			("4 <> 4", False),
			('"abc = "abc', True),
			('5 = "5', False),
			("[1 2] = [1 2]", True),
		])

	def test_logic(self):
		self.check([
			("AND TRUE TRUE", True),
			("AND TRUE FALSE", False),
			("OR FALSE TRUE", True),
			("NOT (1 = 2)", True),
			('AND "TRUE 1', True),
			('OR "FALSE 0', False),
		])

	def test_comparing_unlike_things_for_order_complains(self):
		with self.assertRaises(diagnostics.LogoTypeError):
			value_of(self.interp, "[1] < 2")

class NameTests(unittest.TestCase):

	def test_unbound_variable(self):
		with self.assertRaises(diagnostics.UnboundVariable) as cm:
			value_of(interpreter(), ":nowhere")
		self.assertIn(":NOWHERE", cm.exception.message)
		self.assertIn("MAKE", cm.exception.message)

	def test_thing_and_repcount(self):
		interp = interpreter()
		interp.state.set_variable("size", 10)
		self.assertEqual(10, value_of(interp, 'THING "size'))
		self.assertEqual(1, value_of(interp, "REPCOUNT"))

	def test_unknown_function_suggests_a_spelling(self):
		with self.assertRaises(diagnostics.UnknownCommand) as cm:
			value_of(interpreter(), "SQRTT 4")
		self.assertEqual("SQRT", cm.exception.suggestion)
		self.assertIn("Did you mean SQRT?", cm.exception.message)

	def test_command_in_an_expression(self):
		with self.assertRaises(diagnostics.UnknownCommand) as cm:
			value_of(interpreter(), "FD 10")
		self.assertIn("FD is a command", cm.exception.message)

	def test_turtle_queries(self):
		interp = interpreter()
		self.assertEqual([0, 0], value_of(interp, "POS"))
		self.assertEqual(0, value_of(interp, "HEADING"))
		self.assertEqual("#000000", value_of(interp, "PENCOLOR"))
		self.assertEqual([0], value_of(interp, "TURTLES"))
		self.assertAlmostEqual(45, value_of(interp, "TOWARDS [100 100]"))
		self.assertAlmostEqual(5, value_of(interp, "DISTANCE [3 4]"))

	def test_readers_use_the_input_channel(self):
		prompts = []
		def answer(prompt):
			prompts.append(prompt)
			return "1 two 3.5"
		interp = interpreter(on_input=answer)
		self.assertEqual([1, "two", 3.5], value_of(interp, "READLIST"))
		self.assertEqual("1 two 3.5", value_of(interp, 'READWORD "Name?'))
		self.assertEqual(["Enter values (space-separated):", "Name?"], prompts)

class SyntaxTests(unittest.TestCase):

	def test_running_out_of_words(self):
		with self.assertRaises(diagnostics.LogoParseError) as cm:
			value_of(interpreter(), "3 +")
		self.assertEqual(diagnostics.OUT_OF_WORDS, cm.exception.message)

	def test_unclosed_brackets_and_parens(self):
		with self.assertRaises(diagnostics.LogoParseError) as cm:
			value_of(interpreter(), "(1 + 2")
		self.assertIn(")", cm.exception.message)
		with self.assertRaises(diagnostics.LogoParseError) as cm:
			value_of(interpreter(), "[1 2")
		self.assertIn("]", cm.exception.message)

	def test_find_close_and_parse_list(self):
		tokens = tokenize("[a [b] c] d")
		self.assertEqual(6, find_close(tokens, 1))
		nested = parse_list(tokens[1:6])
		self.assertEqual(3, len(nested))
		self.assertIsInstance(nested[1], list)

class FormatTests(unittest.TestCase):

	def test_print_flattens_and_show_keeps_brackets(self):
		self.assertEqual("1 2 3", values.format_value([1, [2, 3]]))
		self.assertEqual("[1 [2 3]]", values.format_show([1, [2, 3]]))
		self.assertEqual("[]", values.format_show([]))

	def test_atoms(self):
		self.assertEqual("3", values.format_value(3.0))
		self.assertEqual("2.5", values.format_value(2.5))
		self.assertEqual("true", values.format_value(True))
		self.assertEqual("", values.format_value(None))
		self.assertEqual("hello", values.format_show("hello"))

	def test_truthiness(self):
		self.assertTrue(values.is_truthy("TRUE"))
		self.assertFalse(values.is_truthy("FALSE"))
		self.assertFalse(values.is_truthy(0))
		self.assertTrue(values.is_truthy("anything"))

if __name__ == '__main__':
	unittest.main()
