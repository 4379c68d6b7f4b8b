import unittest

from minnow.unification import (
	TypeStore, Render, Link, Concrete, Arrow, UNBOUND,
	Incompatible, RecursiveTypeError, UnificationFailed,
	NUMBER, STRING, BOOLEAN, VOID, _name_variable,
)

class StoreTests(unittest.TestCase):

	def setUp(self):
		self.store = TypeStore()

	def test_slots(self):
		s = self.store
		v = s.fresh()
		n = s.concrete(NUMBER)
		a = s.arrow(v, n)
		self.assertEqual(UNBOUND, s.raw(v))
		self.assertEqual(Concrete(NUMBER), s.raw(n))
		self.assertEqual(Arrow(v, n), s.raw(a))
		self.assertEqual(3, len(s))

	def test_arity_is_enforced(self):
		with self.assertRaises(AssertionError):
			self.store.concrete(NUMBER, (self.store.fresh(),))

	def test_unify_variable_with_concrete(self):
		s = self.store
		v, n = s.fresh(), s.concrete(NUMBER)
		s.unify(v, n)
		self.assertEqual(n, s.resolve(v))
		self.assertEqual(Concrete(NUMBER), s.slot(v))

	def test_path_compression(self):
		s = self.store
		a, b, c = s.fresh(), s.fresh(), s.fresh()
		n = s.concrete(NUMBER)
		s.unify(a, b)
		s.unify(b, c)
		s.unify(c, n)
		self.assertEqual(Link(b), s.raw(a))
		self.assertEqual(n, s.resolve(a))
		self.assertEqual(Link(n), s.raw(a))
		self.assertEqual(Link(n), s.raw(b))

	def test_incompatible(self):
		s = self.store
		with self.assertRaises(Incompatible):
			s.unify(s.concrete(NUMBER), s.concrete(STRING))
		with self.assertRaises(Incompatible):
			s.unify(s.arrow(s.fresh(), s.fresh()), s.concrete(BOOLEAN))
		with self.assertRaises(UnificationFailed):
			s.unify(s.array(s.concrete(NUMBER)), s.array(s.concrete(STRING)))

	def test_occurs_check(self):
		s = self.store
		v = s.fresh()
		a = s.arrow(v, s.fresh())
		with self.assertRaises(RecursiveTypeError) as cm:
			s.unify(v, a)
		self.assertEqual((v, a), (cm.exception.prior, cm.exception.term))
		with self.assertRaises(RecursiveTypeError):
			s.unify(s.array(v), v)

	def test_structures_unify_pairwise(self):
		s = self.store
		x, y = s.fresh(), s.fresh()
		s.unify(s.arrow(x, s.array(y)), s.arrow(s.concrete(STRING), s.array(s.concrete(NUMBER))))
		self.assertEqual("String", s.render(x))
		self.assertEqual("Number", s.render(y))

	def test_curried(self):
		s = self.store
		r = s.fresh()
		self.assertEqual("Void -> ?a", s.render(s.curried([], r)))
		f = s.curried([s.concrete(NUMBER), s.concrete(STRING)], r)
		self.assertEqual("Number -> String -> ?a", s.render(f))

	def test_free_variables_in_order(self):
		s = self.store
		x, y = s.fresh(), s.fresh()
		t = s.arrow(y, s.arrow(x, s.array(y)))
		self.assertEqual([y, x], s.free_variables(t))

	def test_instantiate(self):
		s = self.store
		x, y = s.fresh(), s.fresh()
		t = s.arrow(x, s.arrow(y, x))
		copy = s.instantiate(t, set())
		self.assertNotEqual(t, copy)
		fresh_vars = s.free_variables(copy)
		self.assertEqual(2, len(fresh_vars))
		self.assertTrue(set(fresh_vars).isdisjoint({x, y}))
		kept = s.instantiate(t, {x})
		self.assertIn(x, s.free_variables(kept))
		self.assertNotIn(y, s.free_variables(kept))

	def test_instantiate_shares_ground_types(self):
		s = self.store
		t = s.arrow(s.concrete(NUMBER), s.array(s.concrete(STRING)))
		self.assertEqual(t, s.instantiate(t, set()))

def _naive_root(store: TypeStore, type_id: int) -> int:
	slot = store.raw(type_id)
	while type(slot) is Link:
		type_id = slot.target
		slot = store.raw(type_id)
	return type_id

def _outcome(store: TypeStore, a: int, b: int):
	try:
		store.unify(a, b)
	except UnificationFailed as e:
		return type(e)
	return store.render(a), store.render(b)

class SymmetryTests(unittest.TestCase):
	""" unify(a, b) and unify(b, a) agree, each on its own fresh store. """

	PAIRS = {
		"number, string": lambda s: (s.concrete(NUMBER), s.concrete(STRING)),
		"boolean, arrow": lambda s: (s.concrete(BOOLEAN), s.arrow(s.fresh(), s.fresh())),
		"array, void": lambda s: (s.array(s.concrete(NUMBER)), s.concrete(VOID)),
		"arrays of different things": lambda s: (s.array(s.concrete(NUMBER)), s.array(s.concrete(STRING))),
		"variable, number": lambda s: (s.fresh(), s.concrete(NUMBER)),
		"two variables": lambda s: (s.fresh(), s.fresh()),
		"variable in its own arrow": lambda s: (lambda v: (v, s.arrow(v, s.concrete(NUMBER))))(s.fresh()),
		"variable in its own array": lambda s: (lambda v: (v, s.array(s.array(v))))(s.fresh()),
		"arrows": lambda s: (
			s.arrow(s.fresh(), s.array(s.fresh())),
			s.arrow(s.concrete(STRING), s.array(s.concrete(BOOLEAN))),
		),
		"arrows sharing a variable": lambda s: (lambda v: (
			s.arrow(v, v),
			s.arrow(s.concrete(NUMBER), s.fresh()),
		))(s.fresh()),
		"arrows that disagree late": lambda s: (lambda v: (
			s.arrow(v, s.arrow(v, v)),
			s.arrow(s.concrete(NUMBER), s.arrow(s.fresh(), s.concrete(STRING))),
		))(s.fresh()),
	}

	def test_both_orders_agree(self):
		for label, build in self.PAIRS.items():
			with self.subTest(label):
				left, right = TypeStore(), TypeStore()
				a, b = build(left)
				c, d = build(right)
				self.assertEqual((a, b), (c, d))
				forward = _outcome(left, a, b)
				backward = _outcome(right, d, c)
				self.assertEqual(forward, backward)
				if isinstance(forward, tuple):
					self.assertEqual(forward[0], forward[1])

	def test_expected_outcomes(self):
		self.assertIs(Incompatible, _outcome(*self._built("number, string")))
		self.assertIs(RecursiveTypeError, _outcome(*self._built("variable in its own array")))
		self.assertIs(Incompatible, _outcome(*self._built("arrows that disagree late")))
		self.assertEqual(("Number -> Number",) * 2, _outcome(*self._built("arrows sharing a variable")))

	def _built(self, label):
		store = TypeStore()
		return (store, *self.PAIRS[label](store))

class PathCompressionTests(unittest.TestCase):

	ORDERS = {
		"forward": [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 6), (6, 7)],
		"backward": [(6, 7), (5, 6), (4, 5), (3, 4), (2, 3), (1, 2), (0, 1)],
		"toward the front": [(1, 0), (2, 1), (3, 2), (4, 3), (5, 4), (6, 5), (7, 6)],
		"pairs then pairs of pairs": [(0, 1), (2, 3), (4, 5), (6, 7), (1, 3), (5, 7), (3, 7)],
		"scattered": [(5, 2), (0, 7), (3, 5), (7, 1), (2, 6), (4, 0), (6, 4)],
	}

	def test_resolve_agrees_with_a_plain_walk(self):
		for label, order in self.ORDERS.items():
			for ground in (False, True):
				with self.subTest(label, ground=ground):
					s = TypeStore()
					vs = [s.fresh() for _ in range(8)]
					for i, j in order:
						s.unify(vs[i], vs[j])
					if ground:
						s.unify(vs[3], s.concrete(NUMBER))
					expect = {t: _naive_root(s, t) for t in range(len(s))}
					self.assertEqual(1, len({expect[v] for v in vs}))
					for t in range(len(s)):
						self.assertEqual(expect[t], s.resolve(t))
					root = expect[vs[0]]
					for v in vs:
						self.assertIn(s.raw(v), (Link(root), s.raw(root)))
					for t in range(len(s)):
						self.assertEqual(expect[t], s.resolve(t))

class RenderTests(unittest.TestCase):

	def test_render(self):
		s = TypeStore()
		n = s.concrete(NUMBER)
		self.assertEqual("Number", s.render(n))
		self.assertEqual("Array<String>", s.render(s.array(s.concrete(STRING))))
		self.assertEqual("Void", s.render(s.concrete(VOID)))
		self.assertEqual("Number -> ?a", s.render(s.arrow(n, s.fresh())))

	def test_arrow_parameters_get_parentheses(self):
		s = TypeStore()
		n = s.concrete(NUMBER)
		self.assertEqual("(Number -> Number) -> Number", s.render(s.arrow(s.arrow(n, n), n)))
		self.assertEqual("Number -> Number -> Number", s.render(s.arrow(n, s.arrow(n, n))))

	def test_names_follow_first_appearance(self):
		s = TypeStore()
		x, y = s.fresh(), s.fresh()
		self.assertEqual("?a -> ?b -> ?a", s.render(s.arrow(y, s.arrow(x, y))))
		delta = Render(s)
		self.assertEqual("?a", delta(x))
		self.assertEqual("?b", delta(y))
		self.assertEqual("?a", delta(x))

	def test_variable_names(self):
		self.assertEqual(["a", "b", "z", "aa", "ab"], [_name_variable(n) for n in (1, 2, 26, 27, 28)])

if __name__ == '__main__':
	unittest.main()
