"""
All the definition resolution stuff goes here.
By the time this pass is finished, every identifier is connected to the
declaration (const or parameter) it refers to, or else the report knows why not.
The tree itself is left alone: the connections live in a side table.
"""
from typing import NamedTuple, TypeAlias, Union
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report, Issue
from .space import Space, Layer, AlreadyExists

Declaration: TypeAlias = Union[syntax.ConstDeclaration, syntax.Param]
TermSpace: TypeAlias = Space[Declaration]

class NameCheck(NamedTuple):
	errors: list[Issue]
	bindings: dict[syntax.Identifier, Declaration]

class TopDown(Visitor):
	"""
	Convenience base-class to handle the dreary bits of a
	perfectly ordinary top-down walk through a syntax tree.
	"""

	def tour(self, items, *args):
		for i in items:
			self.visit(i, *args)

	def visit_Program(self, program: syntax.Program, env):
		self.tour(program.body, env)

	def visit_BlockStatement(self, block: syntax.BlockStatement, env):
		# Not a scope of its own.
		self.tour(block.body, env)

	def visit_ReturnStatement(self, rs: syntax.ReturnStatement, env):
		if rs.argument is not None:
			self.visit(rs.argument, env)

	def visit_NumericLiteral(self, l: syntax.NumericLiteral, env): pass
	def visit_StringLiteral(self, l: syntax.StringLiteral, env): pass
	def visit_BooleanLiteral(self, l: syntax.BooleanLiteral, env): pass

	def visit_BinaryExpression(self, it: syntax.BinaryExpression, env):
		self.visit(it.left, env)
		self.visit(it.right, env)

	def visit_ConditionalExpression(self, expr: syntax.ConditionalExpression, env):
		self.visit(expr.test, env)
		self.visit(expr.consequent, env)
		self.visit(expr.alternate, env)

	def visit_CallExpression(self, expr: syntax.CallExpression, env):
		self.visit(expr.callee, env)
		self.tour(expr.arguments, env)

	def visit_ArrayLiteral(self, expr: syntax.ArrayLiteral, env):
		self.tour(expr.elements, env)

	def visit_MemberExpression(self, expr: syntax.MemberExpression, env):
		self.visit(expr.object, env)
		self.visit(expr.index, env)

class Resolver(TopDown):
	"""
	One walk, one scope per arrow function plus the program scope at the bottom.
	A const comes into scope only after its initializer, so a const
	cannot refer to itself.
	"""
	report: Report
	bindings: dict[syntax.Identifier, Declaration]

	def __init__(self, report: Report):
		self.report = report
		self.bindings = {}

	def resolve(self, program: syntax.Program) -> dict[syntax.Identifier, Declaration]:
		self.visit(program, Layer())
		return self.bindings

	def visit_ConstDeclaration(self, cd: syntax.ConstDeclaration, env: TermSpace):
		self.visit(cd.init, env)
		try:
			env.mount(cd.name, cd)
		except AlreadyExists:
			self.report.duplicate_declaration(cd.name, cd)

	def visit_ArrowFunction(self, fn: syntax.ArrowFunction, outer: TermSpace):
		inner = outer.child()
		for p in fn.params:
			try:
				inner.mount(p.name, p)
			except AlreadyExists:
				self.report.duplicate_parameter(p.name, p)
		self.visit(fn.body, inner)

	def visit_Identifier(self, ident: syntax.Identifier, env: TermSpace):
		dfn = env.symbol(ident.name)
		if dfn is None:
			self.report.undeclared_reference(ident.name, ident)
		else:
			self.bindings[ident] = dfn

def resolve_names(program: syntax.Program, report: Report) -> dict[syntax.Identifier, Declaration]:
	return Resolver(report).resolve(program)
