import sys, random
from typing import Any, NamedTuple, Optional
from boozetools.support.failureprone import SourceText, illustration

class TooManyIssues(Exception):
	pass

# Lexical and syntactic
UNEXPECTED_CHARACTER = "UnexpectedCharacter"
EXPECTED_TOKEN_KIND = "ExpectedTokenKind"
UNEXPECTED_TOKEN_IN_EXPRESSION = "UnexpectedTokenInExpression"
UNSUPPORTED_ANY_TYPE = "UnsupportedAnyType"

# Scoping
DUPLICATE_DECLARATION = "DuplicateDeclaration"
DUPLICATE_PARAMETER = "DuplicateParameter"
UNDECLARED_REFERENCE = "UndeclaredReference"

# Typing
TYPE_MISMATCH = "TypeMismatch"
CONDITION_NOT_BOOLEAN = "ConditionNotBoolean"
BRANCH_MISMATCH = "BranchMismatch"
ARRAY_ELEMENT_MISMATCH = "ArrayElementMismatch"
ARRAY_INDEX_NOT_NUMBER = "ArrayIndexNotNumber"
ADD_OPERAND_NOT_NUMBER_OR_STRING = "AddOperandNotNumberOrString"
MUL_OPERAND_NOT_NUMBER = "MulOperandNotNumber"
MISPLACED_RETURN = "MisplacedReturn"
RECURSIVE_TYPE = "RecursiveType"
TOO_MANY_ARGUMENTS = "TooManyArguments"
CALLED_VALUE_NOT_FUNCTION = "CalledValueNotFunction"
UNSUPPORTED_BINARY_OPERATOR = "UnsupportedBinaryOperator"
UNKNOWN_NODE_KIND = "UnknownNodeKind"

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]
	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott",
		'Jeepers', 'Heavens', "Mercy", 'Nuts', 'Rats',
	]
	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
		'I need to ask for help.',
	]
	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

def _where(node) -> str:
	position = getattr(node, "position", None)
	return "unknown position" if position is None else "position %d" % position

class Issue(NamedTuple):
	"""
	One complaint: what kind of trouble, what to tell the human, and whom to blame.
	The node is a tree node for the name and type passes, or a token for the parser.
	"""
	kind: str
	message: str
	node: Any

	def illustrate(self, source: SourceText) -> str:
		position = getattr(self.node, "position", None)
		if position is None:
			return ""
		row, col = source.find_row_col(position)
		single_line = source.line_of_text(row)
		width = self.node.width() if hasattr(self.node, "width") else 1
		return illustration(single_line, col, width, prefix='% 6d |' % row)

	def as_text(self, source: Optional[SourceText]) -> str:
		lines = ["%s: %s" % (self.kind, self.message)]
		if source is not None:
			picture = self.illustrate(source)
			if picture: lines.append(picture)
		return '\n'.join(lines)

class Report:
	""" Collects issues from every pass, one method per kind of trouble. """
	_issues: list[Issue]

	def __init__(self, *, verbose: int = 0, max_issues: Optional[int] = None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	@property
	def issues(self) -> list[Issue]: return list(self._issues)

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, kind: str, message: str, node: Any) -> Issue:
		it = Issue(kind, "%s at %s" % (message, _where(node)), node)
		self._issues.append(it)
		if self._max_issues is not None and len(self._issues) >= self._max_issues:
			raise TooManyIssues(self)
		return it

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self, text: Optional[str] = None, path: Optional[str] = None):
		""" Emit all the issues to the console. """
		source = None if text is None else SourceText(text, filename=path)
		_bemoan(self._issues, source)

	def assert_no_issues(self, message: str = "Unexpected issues"):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the front-end calls:

	def unexpected_character(self, ex):
		# The exception knows its own position, so it can stand in for a node.
		self.issue(UNEXPECTED_CHARACTER, "Unexpected character %r" % ex.char, ex)

	def expected_token_kind(self, expected: str, token):
		self.issue(EXPECTED_TOKEN_KIND, "Expected %s but got %s" % (expected, token.kind), token)

	def unexpected_token_in_expression(self, token):
		self.issue(UNEXPECTED_TOKEN_IN_EXPRESSION, "Unexpected token %s in expression" % token.kind, token)

	def unsupported_any_type(self, token):
		self.issue(UNSUPPORTED_ANY_TYPE, "'any' type is not supported", token)

	# Methods the resolver calls:

	def duplicate_declaration(self, name: str, node):
		self.issue(DUPLICATE_DECLARATION, "Duplicate declaration of '%s'" % name, node)

	def duplicate_parameter(self, name: str, node):
		self.issue(DUPLICATE_PARAMETER, "Duplicate parameter name '%s'" % name, node)

	def undeclared_reference(self, name: str, node):
		self.issue(UNDECLARED_REFERENCE, "Reference to undeclared variable '%s'" % name, node)

	# Methods specific to report type-checking issues:

	def type_mismatch(self, node, a: str, b: str, context: str = ""):
		lead = "Type mismatch" + (" " + context if context else "")
		self.issue(TYPE_MISMATCH, "%s: %s is not compatible with %s" % (lead, a, b), node)

	def condition_not_boolean(self, node, got: str):
		self.issue(CONDITION_NOT_BOOLEAN, "Type mismatch in condition: expected Boolean but found %s" % got, node)

	def branch_mismatch(self, node, a: str, b: str):
		self.issue(BRANCH_MISMATCH, "Type mismatch between conditional branches: %s is not compatible with %s" % (a, b), node)

	def array_element_mismatch(self, node, a: str, b: str):
		self.issue(ARRAY_ELEMENT_MISMATCH, "Type mismatch in array elements: %s is not compatible with %s" % (a, b), node)

	def array_index_not_number(self, node, got: str):
		self.issue(ARRAY_INDEX_NOT_NUMBER, "Array index must be a Number, not %s" % got, node)

	def add_operand_not_number_or_string(self, node, got: str):
		self.issue(ADD_OPERAND_NOT_NUMBER_OR_STRING, "The '+' operator requires either numeric operands or string operands, not %s" % got, node)

	def mul_operand_not_number(self, node, got: str):
		self.issue(MUL_OPERAND_NOT_NUMBER, "The '*' operator requires numeric operands, not %s" % got, node)

	def misplaced_return(self, node, inside_function: bool = True):
		if inside_function:
			self.issue(MISPLACED_RETURN, "Return statement must be the last statement in a function", node)
		else:
			self.issue(MISPLACED_RETURN, "Return statement outside of a function", node)

	def recursive_type(self, node, var: str, term: str):
		self.issue(RECURSIVE_TYPE, "Recursive type: cannot unify %s with %s which contains it" % (var, term), node)

	def too_many_arguments(self, node, given: int):
		self.issue(TOO_MANY_ARGUMENTS, "Too many arguments provided to function (%d given)" % given, node)

	def called_value_not_function(self, node, got: str):
		self.issue(CALLED_VALUE_NOT_FUNCTION, "Called value is not a function; it is %s" % got, node)

	def unsupported_binary_operator(self, node, op: str):
		self.issue(UNSUPPORTED_BINARY_OPERATOR, "Unsupported binary operator: %s" % op, node)

	def unknown_node_kind(self, node):
		self.issue(UNKNOWN_NODE_KIND, "Unknown node type: %s" % type(node).__name__, node)

def _bemoan(issues, source: Optional[SourceText]):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(source), file=sys.stderr)
	sys.stderr.flush()
