"""
The set of parse-nodes in simple form.
The parser calls these constructors as it descends through the token stream.
Class-level type annotations make peace with pycharm wherever later passes add fields.
"""
from typing import Optional, Sequence
from .ontology import Phrase, Statement, Expression, TypeExpression, Typed

SCALAR_NAMES = frozenset(["number", "string", "boolean", "void", "Unit", "Float", "Bool", "Void"])

#######################################################################
# Type annotations, as written

class Scalar(TypeExpression):
	def __init__(self, name: str, position: Optional[int] = None):
		assert name in SCALAR_NAMES, name
		self.name, self.position = name, position
	def __repr__(self): return "<Scalar %s>" % self.name
	def width(self): return len(self.name)

class NamedType(TypeExpression):
	""" Some other word in type position. It stands for a type variable. """
	def __init__(self, name: str, position: Optional[int] = None):
		self.name, self.position = name, position
	def __repr__(self): return "<NamedType %s>" % self.name
	def width(self): return len(self.name)

class ArrayOf(TypeExpression):
	def __init__(self, element: TypeExpression, position: Optional[int] = None):
		self.element = element
		self.position = element.position if position is None else position
	def __repr__(self): return "<ArrayOf %r>" % self.element

class FunctionOf(TypeExpression):
	def __init__(self, params: Sequence[tuple[str, TypeExpression]], result: TypeExpression, position: Optional[int] = None):
		self.params = tuple(params)
		self.result = result
		self.position = position
	def __repr__(self): return "<FunctionOf %r => %r>" % (self.params, self.result)

#######################################################################
# Statements

class Program(Phrase):
	def __init__(self, body: Sequence[Statement]):
		self.body = list(body)
		self.position = 0
	def __repr__(self): return "<Program of %d>" % len(self.body)

class ConstDeclaration(Statement, Typed):
	def __init__(self, name: str, type_annotation: Optional[TypeExpression], init: Expression, position: Optional[int] = None):
		self.name = name
		self.type_annotation = type_annotation
		self.init = init
		self.position = position
	def __repr__(self): return "{const %s}" % self.name
	def width(self): return len("const")

class ReturnStatement(Statement):
	def __init__(self, argument: Optional[Expression], position: Optional[int] = None):
		self.argument, self.position = argument, position
	def __repr__(self): return "{return %r}" % (self.argument,)
	def width(self): return len("return")

class BlockStatement(Statement):
	def __init__(self, body: Sequence[Statement], position: Optional[int] = None):
		self.body, self.position = list(body), position

#######################################################################
# Expressions

class Param(Phrase):
	def __init__(self, name: str, type_annotation: Optional[TypeExpression] = None, position: Optional[int] = None):
		self.name = name
		self.type_annotation = type_annotation
		self.position = position
	def __repr__(self): return "<:%s:%s>" % (self.name, self.type_annotation)
	def width(self): return len(self.name)

class ArrowFunction(Expression):
	def __init__(self, params: Sequence[Param], return_type: Optional[TypeExpression], body: BlockStatement, position: Optional[int] = None):
		assert isinstance(body, BlockStatement), type(body)
		self.params = list(params)
		self.return_type = return_type
		self.body = body
		self.position = position
	def __repr__(self):
		return "{(%s) => ...}" % ", ".join(p.name for p in self.params)

class Identifier(Expression):
	def __init__(self, name: str, position: Optional[int] = None):
		self.name, self.position = name, position
	def __repr__(self): return "<ref:%s>" % self.name
	def width(self): return len(self.name)

class BinaryExpression(Expression):
	def __init__(self, op: str, left: Expression, right: Expression, position: Optional[int] = None):
		self.op, self.left, self.right = op, left, right
		self.position = position
	def __repr__(self): return "(%r %s %r)" % (self.left, self.op, self.right)

class ConditionalExpression(Expression):
	def __init__(self, test: Expression, consequent: Expression, alternate: Expression, position: Optional[int] = None):
		self.test, self.consequent, self.alternate = test, consequent, alternate
		self.position = test.position if position is None else position
	def __repr__(self): return "(%r ? %r : %r)" % (self.test, self.consequent, self.alternate)

class CallExpression(Expression):
	def __init__(self, callee: Expression, arguments: Sequence[Expression], position: Optional[int] = None):
		self.callee, self.arguments = callee, list(arguments)
		self.position = callee.position if position is None else position
	def __repr__(self): return "%r(%s)" % (self.callee, ", ".join(map(repr, self.arguments)))

class ArrayLiteral(Expression):
	def __init__(self, elements: Sequence[Expression], position: Optional[int] = None):
		self.elements, self.position = list(elements), position
	def __repr__(self): return "[%s]" % ", ".join(map(repr, self.elements))

class MemberExpression(Expression):
	def __init__(self, object: Expression, index: Expression, position: Optional[int] = None):
		self.object, self.index = object, index
		self.position = object.position if position is None else position
	def __repr__(self): return "%r[%r]" % (self.object, self.index)

class Literal(Expression):
	def __init__(self, value, position: Optional[int] = None):
		self.value, self.position = value, position
	def __str__(self): return "<Literal %r>" % (self.value,)
	__repr__ = __str__

class NumericLiteral(Literal):
	value: float

class StringLiteral(Literal):
	value: str

class BooleanLiteral(Literal):
	value: bool

def is_return(stmt: Statement) -> bool:
	return isinstance(stmt, ReturnStatement)
