import unittest

from minnow import syntax, diagnostics
from minnow.compiler import compile, name_check

def _errors(text):
	return name_check(compile(text)).errors

class ResolutionTests(unittest.TestCase):

	def test_clean_program(self):
		self.assertEqual([], _errors("const x = 5; const y = x;"))

	def test_duplicate_parameter(self):
		errors = _errors("const foo = (a, a) => { return a; };")
		self.assertEqual(1, len(errors))
		self.assertEqual(diagnostics.DUPLICATE_PARAMETER, errors[0].kind)
		self.assertIn("Duplicate parameter", errors[0].message)
		self.assertIn("'a'", errors[0].message)

	def test_duplicate_declaration_keeps_the_first(self):
		tree = compile("const a = 1; const a = 2; const b = a;")
		check = name_check(tree)
		self.assertEqual([diagnostics.DUPLICATE_DECLARATION], [e.kind for e in check.errors])
		self.assertIs(tree.body[1], check.errors[0].node)
		ref = tree.body[2].init
		self.assertIs(tree.body[0], check.bindings[ref])

	def test_undeclared(self):
		errors = _errors("const y = x + 1;")
		self.assertEqual([diagnostics.UNDECLARED_REFERENCE], [e.kind for e in errors])
		self.assertIn("Reference to undeclared variable 'x'", errors[0].message)
		self.assertIsInstance(errors[0].node, syntax.Identifier)

	def test_const_does_not_see_itself(self):
		errors = _errors("const loop = (n) => { return loop(n); };")
		self.assertEqual([diagnostics.UNDECLARED_REFERENCE], [e.kind for e in errors])

	def test_shadowing_is_fine(self):
		tree = compile("const x = 1; const f = (x) => { const y = x; return y; };")
		check = name_check(tree)
		self.assertEqual([], check.errors)
		fn = tree.body[1].init
		inner_ref = fn.body.body[0].init
		self.assertIs(fn.params[0], check.bindings[inner_ref])

	def test_inner_redeclaration_of_parameter(self):
		errors = _errors("const f = (x) => { const x = 2; return x; };")
		self.assertEqual([diagnostics.DUPLICATE_DECLARATION], [e.kind for e in errors])

	def test_block_is_not_a_scope_of_its_own(self):
		errors = _errors("const f = () => { const x = 1; return x; }; const y = x;")
		self.assertEqual(1, len(errors))
		self.assertIn("'x'", errors[0].message)

	def test_parameters_stay_inside(self):
		errors = _errors("const f = (secret) => { return secret; }; const leak = secret;")
		self.assertEqual([diagnostics.UNDECLARED_REFERENCE], [e.kind for e in errors])

	def test_every_reference_is_visited(self):
		text = "const t = a ? [b, c[d]] : e(f, g * h);"
		errors = _errors(text)
		self.assertEqual(list("abcdefgh"), [e.message.split("'")[1] for e in errors])

	def test_tree_is_left_alone(self):
		tree = compile("const x = 5; const y = x;")
		name_check(tree)
		self.assertIsNone(tree.body[1].init.type_id)
		self.assertIsNone(tree.body[1].type_id)

if __name__ == '__main__':
	unittest.main()
