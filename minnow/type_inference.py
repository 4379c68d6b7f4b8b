"""
Hindley-Milner type inference over the syntax tree.

Visiting an expression yields the type-id of that expression, which also
gets written into the node. Unification failures are exceptions within the
store; here they are caught, reported with some context, and forgotten,
so that one bad expression does not stop the rest of the program being checked.
"""
from typing import Callable, NamedTuple, Optional
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report, Issue
from .ontology import Expression
from .stacking import Frame
from .unification import (
	TypeStore, Render, Concrete, Arrow, Unbound,
	Incompatible, RecursiveTypeError,
	NUMBER, STRING, BOOLEAN, VOID,
)

SCALAR_TYPES = {
	"number": NUMBER, "Float": NUMBER,
	"string": STRING,
	"boolean": BOOLEAN, "Bool": BOOLEAN,
	"void": VOID, "Void": VOID, "Unit": VOID,
}

Gripe = Callable[[object, str, str], None]

class TypeCheck(NamedTuple):
	errors: list[Issue]
	tree: syntax.Program
	store: TypeStore

class TypeAssigner(Visitor):
	"""
	Turns written annotations into type-ids.
	One of these serves one declaration, so that the same
	made-up type name means the same variable throughout it.
	"""
	def __init__(self, store: TypeStore):
		self._store = store
		self._named = {}

	def visit_Scalar(self, it: syntax.Scalar) -> int:
		return self._store.concrete(SCALAR_TYPES[it.name])

	def visit_NamedType(self, it: syntax.NamedType) -> int:
		if it.name not in self._named:
			self._named[it.name] = self._store.fresh()
		return self._named[it.name]

	def visit_ArrayOf(self, it: syntax.ArrayOf) -> int:
		return self._store.array(self.visit(it.element))

	def visit_FunctionOf(self, it: syntax.FunctionOf) -> int:
		params = [self.visit(texp) for _, texp in it.params]
		return self._store.curried(params, self.visit(it.result))

class DeductionEngine(Visitor):
	"""
	One of these per compilation. It owns the store, the frame stack and the report.
	"""
	store: TypeStore
	_frame: Optional[Frame]

	def __init__(self, report: Report, store: Optional[TypeStore] = None):
		self._report = report
		self.store = TypeStore() if store is None else store
		self._frame = None
		self._scalars = {}

	def _scalar(self, name: str) -> int:
		# Concrete slots never change, so each scalar needs only one.
		if name not in self._scalars:
			self._scalars[name] = self.store.concrete(name)
		return self._scalars[name]

	def _unify(self, a: int, b: int, blame, gripe: Gripe) -> bool:
		try:
			self.store.unify(a, b)
			return True
		except RecursiveTypeError as e:
			delta = Render(self.store)
			self._report.recursive_type(blame, delta(e.prior), delta(e.term))
		except Incompatible:
			delta = Render(self.store)
			gripe(blame, delta(a), delta(b))
		return False

	def _mismatch(self, context: str = "") -> Gripe:
		def gripe(blame, a, b):
			self._report.type_mismatch(blame, a, b, context)
		return gripe

	def _render(self, type_id: int) -> str:
		return self.store.render(type_id)

	# Statements

	def visit_Program(self, program: syntax.Program):
		self._frame = Frame()
		for stmt in program.body:
			if isinstance(stmt, syntax.ReturnStatement):
				self._report.misplaced_return(stmt, inside_function=False)
			self._statement(stmt)

	def _statement(self, stmt) -> int:
		if isinstance(stmt, (syntax.ConstDeclaration, syntax.ReturnStatement)):
			return self.visit(stmt)
		return self.expr(stmt)

	def visit_ConstDeclaration(self, cd: syntax.ConstDeclaration) -> int:
		typ = self.expr(cd.init)
		if cd.type_annotation is not None:
			declared = TypeAssigner(self.store).visit(cd.type_annotation)
			self._unify(declared, typ, cd, self._mismatch("in declaration of '%s'" % cd.name))
		if not self._frame.holds(cd.name):
			self._frame.assign(cd.name, typ)
		return cd.annotate(typ)

	def visit_ReturnStatement(self, rs: syntax.ReturnStatement) -> int:
		if rs.argument is None:
			return self._scalar(VOID)
		return self.expr(rs.argument)

	# Expressions

	def expr(self, node) -> int:
		if isinstance(node, Expression) and hasattr(self, "visit_" + type(node).__name__):
			return self.visit(node)
		self._report.unknown_node_kind(node)
		return self.store.fresh()

	def visit_NumericLiteral(self, expr: syntax.NumericLiteral) -> int:
		return expr.annotate(self._scalar(NUMBER))

	def visit_StringLiteral(self, expr: syntax.StringLiteral) -> int:
		return expr.annotate(self._scalar(STRING))

	def visit_BooleanLiteral(self, expr: syntax.BooleanLiteral) -> int:
		return expr.annotate(self._scalar(BOOLEAN))

	def visit_Identifier(self, expr: syntax.Identifier) -> int:
		found = self._frame.fetch(expr.name)
		if found is None:
			# The resolver complains about this. Here, just carry on.
			found = self._frame.suppose(expr.name, self.store.fresh()), True
		typ, generic = found
		if generic:
			keep = set()
			for t in self._frame.non_generic():
				keep.update(self.store.free_variables(t))
			typ = self.store.instantiate(typ, keep)
		return expr.annotate(typ)

	def visit_ArrayLiteral(self, expr: syntax.ArrayLiteral) -> int:
		if not expr.elements:
			return expr.annotate(self.store.array(self.store.fresh()))
		inside = [self.expr(e) for e in expr.elements]
		first = inside[0]
		for elt, typ in zip(expr.elements[1:], inside[1:]):
			self._unify(first, typ, elt, self._report.array_element_mismatch)
		return expr.annotate(self.store.array(first))

	def visit_MemberExpression(self, expr: syntax.MemberExpression) -> int:
		obj = self.expr(expr.object)
		idx = self.expr(expr.index)
		self._unify(idx, self._scalar(NUMBER), expr.index, lambda blame, a, b: self._report.array_index_not_number(blame, a))
		element = self.store.fresh()
		self._unify(obj, self.store.array(element), expr.object, self._mismatch("in array access"))
		return expr.annotate(element)

	def visit_BinaryExpression(self, expr: syntax.BinaryExpression) -> int:
		left = self.expr(expr.left)
		right = self.expr(expr.right)
		if expr.op == "+":
			if not self._unify(left, right, expr, self._mismatch()):
				return expr.annotate(self.store.fresh())
			slot = self.store.slot(left)
			if type(slot) is not Unbound and slot not in (Concrete(NUMBER), Concrete(STRING)):
				self._report.add_operand_not_number_or_string(expr, self._render(left))
			return expr.annotate(left)
		if expr.op == "*":
			number = self._scalar(NUMBER)
			gripe = lambda blame, a, b: self._report.mul_operand_not_number(blame, a)
			self._unify(left, number, expr.left, gripe)
			self._unify(right, number, expr.right, gripe)
			return expr.annotate(number)
		self._report.unsupported_binary_operator(expr, expr.op)
		return expr.annotate(self.store.fresh())

	def visit_ConditionalExpression(self, expr: syntax.ConditionalExpression) -> int:
		test = self.expr(expr.test)
		consequent = self.expr(expr.consequent)
		alternate = self.expr(expr.alternate)
		self._unify(test, self._scalar(BOOLEAN), expr.test, lambda blame, a, b: self._report.condition_not_boolean(blame, a))
		self._unify(consequent, alternate, expr, self._report.branch_mismatch)
		return expr.annotate(consequent)

	def visit_CallExpression(self, expr: syntax.CallExpression) -> int:
		"""
		Walk down the callee's type one argument at a time.
		Where that type is not yet known, what's left of the call tells what it must be.
		"""
		current = self.expr(expr.callee)
		if expr.arguments:
			blames = list(expr.arguments)
			args = [self.expr(a) for a in expr.arguments]
		else:
			blames = [expr]
			args = [self._scalar(VOID)]
		for i, (blame, arg) in enumerate(zip(blames, args)):
			slot = self.store.slot(current)
			if type(slot) is Arrow:
				self._unify(slot.param, arg, blame, self._mismatch("in argument"))
				current = slot.result
			elif type(slot) is Unbound:
				result = self.store.fresh()
				self._unify(current, self.store.curried(args[i:], result), expr, self._mismatch("in call"))
				return expr.annotate(result)
			elif i == 0:
				self._report.called_value_not_function(expr, self._render(current))
				return expr.annotate(self.store.fresh())
			else:
				self._report.too_many_arguments(expr, len(expr.arguments))
				return expr.annotate(self.store.fresh())
		return expr.annotate(current)

	def visit_ArrowFunction(self, fn: syntax.ArrowFunction) -> int:
		body = fn.body.body
		for stmt in body[:-1]:
			if syntax.is_return(stmt):
				self._report.misplaced_return(stmt)
		assign = TypeAssigner(self.store)
		self._frame = Frame(self._frame)
		try:
			params = []
			for p in fn.params:
				typ = self.store.fresh()
				if p.type_annotation is not None:
					self._unify(assign.visit(p.type_annotation), typ, p, self._mismatch("in parameter '%s'" % p.name))
				if not self._frame.holds(p.name):
					self._frame.assign(p.name, typ, generic=False)
				params.append(typ)
			result = self._scalar(VOID)
			for stmt in body:
				typ = self._statement(stmt)
				if stmt is body[-1] and syntax.is_return(stmt):
					result = typ
		finally:
			self._frame = self._frame.parent
		if fn.return_type is not None:
			self._unify(assign.visit(fn.return_type), result, fn, self._mismatch("in return type"))
		return fn.annotate(self.store.curried(params, result))

def infer_types(program: syntax.Program, report: Report) -> TypeStore:
	engine = DeductionEngine(report)
	engine.visit(program)
	return engine.store
