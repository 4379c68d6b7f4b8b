"""
Pretty-printer: syntax tree back to canonical source text.
Parentheses appear only where the tree shape would otherwise be lost,
so formatting the parse of formatted text gives the same text again.
"""
from boozetools.support.foundation import Visitor
from . import syntax
from .lexer import is_well_quoted

TERNARY, ADDITIVE, MULTIPLICATIVE, POSTFIX, PRIMARY = range(1, 6)
BINARY = {"+": ADDITIVE, "*": MULTIPLICATIVE}

def numeric_text(value: float) -> str:
	if float(value).is_integer():
		return str(int(value))
	text = repr(float(value))
	if "e" in text:
		text = ("%.20f" % value).rstrip("0")
	return text

def _precedence(expr) -> int:
	if isinstance(expr, syntax.ConditionalExpression): return TERNARY
	if isinstance(expr, syntax.BinaryExpression): return BINARY.get(expr.op, ADDITIVE)
	if isinstance(expr, (syntax.CallExpression, syntax.MemberExpression)): return POSTFIX
	return PRIMARY

class Formatter(Visitor):
	def __init__(self, indent: str = "  "):
		self._indent = indent

	def _sub(self, expr, level: int, depth: int) -> str:
		text = self.visit(expr, depth)
		return "(%s)" % text if _precedence(expr) < level else text

	def visit_Program(self, program: syntax.Program, depth: int = 0) -> str:
		return "\n".join(self._statement(s, depth) for s in program.body)

	def _statement(self, stmt, depth: int) -> str:
		margin = self._indent * depth
		if isinstance(stmt, (syntax.ConstDeclaration, syntax.ReturnStatement)):
			return margin + self.visit(stmt, depth)
		return margin + self.visit(stmt, depth) + ";"

	def visit_ConstDeclaration(self, cd: syntax.ConstDeclaration, depth: int) -> str:
		annotation = "" if cd.type_annotation is None else ": " + self.visit(cd.type_annotation)
		return "const %s%s = %s;" % (cd.name, annotation, self.visit(cd.init, depth))

	def visit_ReturnStatement(self, rs: syntax.ReturnStatement, depth: int) -> str:
		if rs.argument is None:
			return "return;"
		return "return %s;" % self.visit(rs.argument, depth)

	def visit_BlockStatement(self, block: syntax.BlockStatement, depth: int) -> str:
		if not block.body:
			return "{}"
		inner = "\n".join(self._statement(s, depth + 1) for s in block.body)
		return "{\n%s\n%s}" % (inner, self._indent * depth)

	def visit_ArrowFunction(self, fn: syntax.ArrowFunction, depth: int) -> str:
		params = ", ".join(self.visit(p) for p in fn.params)
		returns = "" if fn.return_type is None else ": " + self.visit(fn.return_type)
		return "(%s)%s => %s" % (params, returns, self.visit(fn.body, depth))

	def visit_Param(self, p: syntax.Param) -> str:
		if p.type_annotation is None:
			return p.name
		return "%s: %s" % (p.name, self.visit(p.type_annotation))

	def visit_Identifier(self, expr: syntax.Identifier, depth: int) -> str:
		return expr.name

	def visit_NumericLiteral(self, expr: syntax.NumericLiteral, depth: int) -> str:
		return numeric_text(expr.value)

	def visit_StringLiteral(self, expr: syntax.StringLiteral, depth: int) -> str:
		double = '"%s"' % expr.value
		return double if is_well_quoted(double) else "'%s'" % expr.value

	def visit_BooleanLiteral(self, expr: syntax.BooleanLiteral, depth: int) -> str:
		return "true" if expr.value else "false"

	def visit_BinaryExpression(self, expr: syntax.BinaryExpression, depth: int) -> str:
		level = BINARY.get(expr.op, ADDITIVE)
		left = self._sub(expr.left, level, depth)
		right = self._sub(expr.right, level + 1, depth)
		return "%s %s %s" % (left, expr.op, right)

	def visit_ConditionalExpression(self, expr: syntax.ConditionalExpression, depth: int) -> str:
		return "%s ? %s : %s" % (
			self._sub(expr.test, ADDITIVE, depth),
			self.visit(expr.consequent, depth),
			self._sub(expr.alternate, TERNARY, depth),
		)

	def visit_CallExpression(self, expr: syntax.CallExpression, depth: int) -> str:
		args = ", ".join(self.visit(a, depth) for a in expr.arguments)
		return "%s(%s)" % (self._sub(expr.callee, POSTFIX, depth), args)

	def visit_MemberExpression(self, expr: syntax.MemberExpression, depth: int) -> str:
		return "%s[%s]" % (self._sub(expr.object, POSTFIX, depth), self.visit(expr.index, depth))

	def visit_ArrayLiteral(self, expr: syntax.ArrayLiteral, depth: int) -> str:
		return "[%s]" % ", ".join(self.visit(e, depth) for e in expr.elements)

	# Type annotations

	def visit_Scalar(self, it: syntax.Scalar) -> str:
		return it.name

	def visit_NamedType(self, it: syntax.NamedType) -> str:
		return it.name

	def visit_ArrayOf(self, it: syntax.ArrayOf) -> str:
		return "Array<%s>" % self.visit(it.element)

	def visit_FunctionOf(self, it: syntax.FunctionOf) -> str:
		params = ", ".join("%s: %s" % (name, self.visit(texp)) for name, texp in it.params)
		return "(%s) => %s" % (params, self.visit(it.result))

def format(tree: syntax.Program, indent: str = "  ") -> str:
	return Formatter(indent).visit(tree)
