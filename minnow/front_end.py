"""
Recursive-descent parser over the token list, with a single mutable cursor.

Precedence, tight to loose:
	primary, then postfix [index] and (call), then *, then +, then ?: (right-associative).

The one real ambiguity is an open parenthesis, which may begin either a
parenthesized expression or the parameter list of an arrow function.
A quick scan decides it without building anything, then puts the cursor back.
"""
from typing import Optional
from boozetools.parsing.interface import ParseError
from . import syntax
from .diagnostics import Report, Issue
from .lexer import Token, EOF, TYPE_KEYWORDS, tokenize, strip_quotes

class MinnowParseError(ParseError):
	def __init__(self, issues: list[Issue]):
		super().__init__(issues)
		self.issues = issues
	def __str__(self):
		return "; ".join(i.message for i in self.issues)

class _Stumble(Exception):
	""" Abandon the current statement. The report already knows why. """

class Parser:
	def __init__(self, tokens: list[Token], report: Report):
		assert tokens and tokens[-1].kind == EOF
		self._tokens = tokens
		self._current = 0
		self._report = report

	# Cursor motion

	def peek(self) -> Token:
		return self._tokens[self._current]

	def next(self) -> Token:
		token = self._tokens[self._current]
		if token.kind != EOF:
			self._current += 1
		return token

	def check(self, *kinds: str) -> bool:
		return self.peek().kind in kinds

	def expect(self, kind: str, expected: Optional[str] = None) -> Token:
		if self.check(kind):
			return self.next()
		self._report.expected_token_kind(expected or kind, self.peek())
		raise _Stumble

	def _skip(self, kind: str) -> bool:
		if self.check(kind):
			self.next()
			return True
		return False

	def _recover(self, start: int, top_level: bool):
		while not self.check("SEMICOLON", "RIGHT_CURLY", EOF):
			self.next()
		if self.check("SEMICOLON") or (top_level and self.check("RIGHT_CURLY")):
			self.next()
		elif self._current == start:
			self.next()

	# Statements

	def parse_program(self) -> syntax.Program:
		body = []
		while not self.check(EOF):
			if self._skip("SEMICOLON"):
				continue
			stmt = self._statement(top_level=True)
			if stmt is not None:
				body.append(stmt)
		return syntax.Program(body)

	def _statement(self, top_level: bool) -> Optional[syntax.Statement]:
		start = self._current
		try:
			if self.check("CONST"):
				return self.const_declaration()
			if self.check("RETURN"):
				return self.return_statement()
			if top_level:
				expr = self.expression()
				self._skip("SEMICOLON")
				return expr
			self._report.expected_token_kind("CONST or RETURN", self.peek())
			raise _Stumble
		except _Stumble:
			self._recover(start, top_level)
			return None

	def const_declaration(self) -> syntax.ConstDeclaration:
		head = self.expect("CONST")
		name = self.expect("IDENTIFIER", "identifier after const")
		annotation = self.type_annotation() if self.check("COLON") else None
		self.expect("EQUAL", "= after identifier in const declaration")
		init = self.expression()
		self._skip("SEMICOLON")
		return syntax.ConstDeclaration(name.text, annotation, init, head.position)

	def return_statement(self) -> syntax.ReturnStatement:
		head = self.expect("RETURN")
		if self.check("SEMICOLON", "RIGHT_CURLY", EOF):
			self._skip("SEMICOLON")
			return syntax.ReturnStatement(None, head.position)
		argument = self.expression()
		self._skip("SEMICOLON")
		return syntax.ReturnStatement(argument, head.position)

	def block(self) -> syntax.BlockStatement:
		head = self.expect("LEFT_CURLY")
		body = []
		while not self.check("RIGHT_CURLY", EOF):
			if self._skip("SEMICOLON"):
				continue
			stmt = self._statement(top_level=False)
			if stmt is not None:
				body.append(stmt)
		self.expect("RIGHT_CURLY")
		return syntax.BlockStatement(body, head.position)

	# Expressions

	def expression(self) -> syntax.Expression:
		return self.ternary()

	def ternary(self) -> syntax.Expression:
		test = self.additive()
		if self._skip("TERNARY"):
			consequent = self.ternary()
			self.expect("COLON", ": in ternary expression")
			alternate = self.ternary()
			return syntax.ConditionalExpression(test, consequent, alternate)
		return test

	def additive(self) -> syntax.Expression:
		left = self.multiplicative()
		while self.check("PLUS"):
			op = self.next()
			left = syntax.BinaryExpression("+", left, self.multiplicative(), op.position)
		return left

	def multiplicative(self) -> syntax.Expression:
		left = self.postfix()
		while self.check("STAR"):
			op = self.next()
			left = syntax.BinaryExpression("*", left, self.postfix(), op.position)
		return left

	def postfix(self) -> syntax.Expression:
		expr = self.primary()
		while True:
			if self._skip("LEFT_BRACKET"):
				index = self.expression()
				self.expect("RIGHT_BRACKET", "closing bracket for array access")
				expr = syntax.MemberExpression(expr, index)
			elif self._skip("LEFT_PAREN"):
				expr = syntax.CallExpression(expr, self._arguments())
			else:
				return expr

	def _comma_list(self, closer: str) -> list[syntax.Expression]:
		""" Zero or more comma-separated expressions, up to but not including the closer. No trailing comma. """
		items = []
		if not self.check(closer):
			items.append(self.expression())
			while self._skip("COMMA"):
				items.append(self.expression())
		return items

	def _arguments(self) -> list[syntax.Expression]:
		args = self._comma_list("RIGHT_PAREN")
		self.expect("RIGHT_PAREN", "closing parenthesis for function call")
		return args

	def primary(self) -> syntax.Expression:
		token = self.peek()
		kind = token.kind
		if kind == "LEFT_PAREN":
			if self._looks_like_arrow():
				return self.arrow_function()
			self.next()
			expr = self.expression()
			self.expect("RIGHT_PAREN", "closing parenthesis")
			return expr
		if kind == "LEFT_BRACKET":
			return self.array_literal()
		if kind == "IDENTIFIER":
			self.next()
			return syntax.Identifier(token.text, token.position)
		if kind == "NUMBER":
			self.next()
			return syntax.NumericLiteral(float(token.text), token.position)
		if kind == "STRING":
			self.next()
			return syntax.StringLiteral(strip_quotes(token.text), token.position)
		if kind == "BOOLEAN":
			self.next()
			return syntax.BooleanLiteral(token.text == "true", token.position)
		self._report.unexpected_token_in_expression(token)
		raise _Stumble

	def array_literal(self) -> syntax.ArrayLiteral:
		head = self.expect("LEFT_BRACKET")
		elements = self._comma_list("RIGHT_BRACKET")
		self.expect("RIGHT_BRACKET", "closing bracket for array literal")
		return syntax.ArrayLiteral(elements, head.position)

	def arrow_function(self) -> syntax.ArrowFunction:
		head = self.expect("LEFT_PAREN")
		params = []
		if not self.check("RIGHT_PAREN"):
			while True:
				name = self.expect("IDENTIFIER", "parameter name")
				annotation = self.type_annotation() if self.check("COLON") else None
				params.append(syntax.Param(name.text, annotation, name.position))
				if not self._skip("COMMA"):
					break
		self.expect("RIGHT_PAREN")
		return_type = self.type_annotation() if self.check("COLON") else None
		self.expect("ARROW")
		body = self.block()
		return syntax.ArrowFunction(params, return_type, body, head.position)

	# The tentative scan. It moves the cursor but always puts it back,
	# and it neither builds nodes nor complains about anything.

	def _looks_like_arrow(self) -> bool:
		mark = self._current
		try:
			return self._scan_arrow_head()
		finally:
			self._current = mark

	def _scan_arrow_head(self) -> bool:
		if not self._skip("LEFT_PAREN"):
			return False
		if not self.check("RIGHT_PAREN"):
			while True:
				if not self._skip("IDENTIFIER"):
					return False
				if self._skip("COLON") and not self._scan_type():
					return False
				if not self._skip("COMMA"):
					break
		if not self._skip("RIGHT_PAREN"):
			return False
		if self._skip("COLON") and not self._scan_type():
			return False
		return self.check("ARROW")

	def _scan_type(self) -> bool:
		kind = self.peek().kind
		if kind in TYPE_KEYWORDS or kind == "IDENTIFIER":
			self.next()
		elif kind == "TYPE_ARRAY":
			self.next()
			if not (self._skip("LESS_THAN") and self._scan_type() and self._skip("GREATER_THAN")):
				return False
		elif kind == "LEFT_PAREN":
			self.next()
			if not self.check("RIGHT_PAREN"):
				while True:
					if not (self._skip("IDENTIFIER") and self._skip("COLON") and self._scan_type()):
						return False
					if not self._skip("COMMA"):
						break
			if not (self._skip("RIGHT_PAREN") and self._skip("ARROW") and self._scan_type()):
				return False
		else:
			return False
		while self._skip("LEFT_BRACKET"):
			if not self._skip("RIGHT_BRACKET"):
				return False
		return True

	# Type annotations, for real this time.

	def type_annotation(self) -> syntax.TypeExpression:
		self.expect("COLON")
		return self.type_expr()

	def type_expr(self) -> syntax.TypeExpression:
		token = self.peek()
		kind = token.kind
		if kind in TYPE_KEYWORDS:
			self.next()
			typ = syntax.Scalar(TYPE_KEYWORDS[kind], token.position)
		elif kind == "TYPE_ARRAY":
			self.next()
			self.expect("LESS_THAN", "< after Array")
			element = self.type_expr()
			self.expect("GREATER_THAN", "> to close Array type")
			typ = syntax.ArrayOf(element, token.position)
		elif kind == "IDENTIFIER":
			if token.text == "any":
				self._report.unsupported_any_type(token)
				raise _Stumble
			self.next()
			typ = syntax.NamedType(token.text, token.position)
		elif kind == "LEFT_PAREN":
			self.next()
			params = []
			if not self.check("RIGHT_PAREN"):
				while True:
					name = self.expect("IDENTIFIER", "parameter name")
					self.expect("COLON", ": after parameter name in type annotation")
					params.append((name.text, self.type_expr()))
					if not self._skip("COMMA"):
						break
			self.expect("RIGHT_PAREN", "closing parenthesis in parameter type list")
			self.expect("ARROW", "=> in function type")
			typ = syntax.FunctionOf(params, self.type_expr(), token.position)
		else:
			self._report.expected_token_kind("a type", token)
			raise _Stumble
		while self._skip("LEFT_BRACKET"):
			self.expect("RIGHT_BRACKET", "closing bracket for array type")
			typ = syntax.ArrayOf(typ, typ.position)
		return typ

def parse_tokens(tokens: list[Token], report: Report) -> syntax.Program:
	return Parser(tokens, report).parse_program()

def parse_text(text: str, report: Report) -> syntax.Program:
	"""
	Lexical trouble is fatal and propagates as UnexpectedCharacter.
	Syntax trouble goes in the report, and the offending statements are left out.
	"""
	return parse_tokens(tokenize(text), report)
