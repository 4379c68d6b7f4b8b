"""
The type store: a grow-only table of slots, indexed by type-id.

A slot is either unbound, a link to some other slot, a concrete type
(possibly with argument ids, as in Array<T>) or a single-argument arrow.
Following links to a root is called resolving, and it compresses the path.
Unification only ever turns an unbound root into a link, so concrete and
arrow slots never change once written.
"""
from collections import deque
from typing import NamedTuple, Sequence, Union

NUMBER = "Number"
STRING = "String"
BOOLEAN = "Boolean"
ARRAY = "Array"
VOID = "Void"

ARITY = {NUMBER: 0, STRING: 0, BOOLEAN: 0, ARRAY: 1, VOID: 0}

class Unbound(NamedTuple):
	pass

class Link(NamedTuple):
	target: int

class Concrete(NamedTuple):
	name: str
	args: tuple[int, ...] = ()

class Arrow(NamedTuple):
	param: int
	result: int

Slot = Union[Unbound, Link, Concrete, Arrow]
UNBOUND = Unbound()

class UnificationFailed(Exception):
	def __init__(self, prior: int, term: int):
		super().__init__(prior, term)
		self.prior, self.term = prior, term

class Incompatible(UnificationFailed):
	""" Two different heads, or a concrete type against an arrow. """

class RecursiveTypeError(UnificationFailed):
	""" The variable occurs inside the term it would be bound to. """

class TypeStore:
	_slots: list[Slot]

	def __init__(self):
		self._slots = []

	def __len__(self):
		return len(self._slots)

	def _append(self, slot: Slot) -> int:
		self._slots.append(slot)
		return len(self._slots) - 1

	def fresh(self) -> int:
		return self._append(UNBOUND)

	def concrete(self, name: str, args: Sequence[int] = ()) -> int:
		assert ARITY[name] == len(args), (name, args)
		return self._append(Concrete(name, tuple(args)))

	def array(self, element: int) -> int:
		return self.concrete(ARRAY, (element,))

	def arrow(self, param: int, result: int) -> int:
		return self._append(Arrow(param, result))

	def curried(self, params: Sequence[int], result: int) -> int:
		""" p0 -> p1 -> ... -> result; with no parameters at all, Void -> result. """
		if not params:
			return self.arrow(self.concrete(VOID), result)
		for p in reversed(params):
			result = self.arrow(p, result)
		return result

	def raw(self, type_id: int) -> Slot:
		""" The slot exactly as it is, links and all. """
		return self._slots[type_id]

	def resolve(self, type_id: int) -> int:
		path = []
		while True:
			slot = self._slots[type_id]
			if type(slot) is not Link: break
			path.append(type_id)
			type_id = slot.target
		for p in path[:-1]:
			self._slots[p] = Link(type_id)
		return type_id

	def slot(self, type_id: int) -> Slot:
		""" The slot at the root of the given id. """
		return self._slots[self.resolve(type_id)]

	def mentions(self, term: int, var: int) -> bool:
		"""
		Occurs-check: Does the (root, unbound) var appear anywhere within term?
		Walks the current resolved structure with an explicit stack.
		"""
		stack, seen = [term], set()
		while stack:
			t = self.resolve(stack.pop())
			if t == var: return True
			if t in seen: continue
			seen.add(t)
			slot = self._slots[t]
			if type(slot) is Concrete: stack.extend(slot.args)
			elif type(slot) is Arrow: stack.extend((slot.param, slot.result))
		return False

	def unify(self, a: int, b: int):
		"""
		Make a and b stand for the same type, or raise UnificationFailed.
		A failure part-way through leaves whatever links were already made.
		"""
		def U(a, b):
			a, b = self.resolve(a), self.resolve(b)
			if a == b:
				return
			sa, sb = self._slots[a], self._slots[b]
			if type(sa) is Unbound:
				# if A occurs in B, then reject. It would be ill-founded.
				if self.mentions(b, a): raise RecursiveTypeError(a, b)
				self._slots[a] = Link(b)
			elif type(sb) is Unbound:
				if self.mentions(a, b): raise RecursiveTypeError(b, a)
				self._slots[b] = Link(a)
			elif type(sa) is Concrete and type(sb) is Concrete:
				if sa.name != sb.name or len(sa.args) != len(sb.args):
					raise Incompatible(a, b)
				queue.extend(zip(sa.args, sb.args))
			elif type(sa) is Arrow and type(sb) is Arrow:
				queue.append((sa.param, sb.param))
				queue.append((sa.result, sb.result))
			else:
				raise Incompatible(a, b)

		queue = deque([(a, b)])
		while queue:
			U(*queue.popleft())

	def free_variables(self, type_id: int) -> list[int]:
		""" Unbound roots reachable from type_id, in order of first appearance. """
		found = {}
		def walk(t):
			t = self.resolve(t)
			slot = self._slots[t]
			if type(slot) is Unbound: found.setdefault(t, None)
			elif type(slot) is Concrete:
				for x in slot.args: walk(x)
			elif type(slot) is Arrow:
				walk(slot.param)
				walk(slot.result)
		walk(type_id)
		return list(found)

	def instantiate(self, type_id: int, non_generic: set[int]) -> int:
		"""
		This is where let-polymorphism comes from.
		Copy the structure, putting a fresh variable in place of every
		unbound root that is not among the non_generic ones. Parts with
		nothing to rename are shared rather than copied.
		"""
		gamma = {}
		def copy(t):
			t = self.resolve(t)
			slot = self._slots[t]
			if type(slot) is Unbound:
				if t in non_generic: return t
				if t not in gamma: gamma[t] = self.fresh()
				return gamma[t]
			elif type(slot) is Concrete:
				if not slot.args: return t
				args = tuple(copy(x) for x in slot.args)
				return t if args == slot.args else self.concrete(slot.name, args)
			else:
				param, result = copy(slot.param), copy(slot.result)
				return t if (param, result) == (slot.param, slot.result) else self.arrow(param, result)
		return copy(type_id)

	def render(self, type_id: int) -> str:
		return Render(self)(type_id)

def _name_variable(n):
	name = ""
	while n:
		n, remainder = divmod(n-1, 26)
		name = chr(97+remainder) + name
	return name

class Render:
	"""
	Return a string representation of a type.
	Variables get names ?a, ?b, ... in order of first appearance, and the
	same Render object keeps using the same names, so one message that
	mentions two types can share a single Render.
	"""
	def __init__(self, store: TypeStore):
		self.store = store
		self.delta = {}

	def __call__(self, type_id: int) -> str:
		t = self.store.resolve(type_id)
		slot = self.store.raw(t)
		if type(slot) is Unbound:
			if t not in self.delta:
				self.delta[t] = "?%s"%_name_variable(len(self.delta)+1)
			return self.delta[t]
		if type(slot) is Concrete:
			if slot.args:
				return "%s<%s>" % (slot.name, ", ".join(map(self, slot.args)))
			return slot.name
		param = self(slot.param)
		if type(self.store.slot(slot.param)) is Arrow:
			param = "(%s)" % param
		return "%s -> %s" % (param, self(slot.result))
