"""
The scanner: a short list of anchored regular expressions, tried in order.
First match wins, so reserved words and type names must come before the
generic identifier rule. Comments are matched and then forgotten.
"""
import re
from typing import NamedTuple, Optional
from boozetools.parsing.interface import ParseError

class LexicalError(ParseError):
	pass

class UnexpectedCharacter(LexicalError):
	def __init__(self, position: int, char: str):
		super().__init__(position, char)
		self.position, self.char = position, char
	def __str__(self):
		return "Unexpected character at position %d: %r" % (self.position, self.char)

class Token(NamedTuple):
	kind: str
	text: Optional[str]
	position: int
	def width(self): return len(self.text or "") or 1
	def left(self): return self.position

COMMENT = "COMMENT"
EOF = "EOF"

def _word(w): return re.escape(w) + r"\b"

RULES = [(kind, re.compile(pattern)) for kind, pattern in [
	(COMMENT, r"//[^\n]*"),
	(COMMENT, r"/\*[\s\S]*?\*/"),
	("CONST", _word("const")),
	("RETURN", _word("return")),
	("TYPE_NUMBER", _word("number")),
	("TYPE_STRING", _word("string")),
	("TYPE_BOOLEAN", _word("boolean")),
	("TYPE_ARRAY", _word("Array")),
	("TYPE_VOID", _word("void")),
	("TYPE_INT", _word("Void")),
	("TYPE_FLOAT", _word("Float")),
	("TYPE_BOOL", _word("Bool")),
	("TYPE_UNIT", _word("Unit")),
	("ARROW", r"=>"),
	("TERNARY", r"\?"),
	("COLON", r":"),
	("EQUAL", r"="),
	("PIPE", r"\|"),
	("LESS_THAN", r"<"),
	("GREATER_THAN", r">"),
	("PLUS", r"\+"),
	("STAR", r"\*"),
	("LEFT_PAREN", r"\("),
	("RIGHT_PAREN", r"\)"),
	("LEFT_CURLY", r"\{"),
	("RIGHT_CURLY", r"\}"),
	("LEFT_BRACKET", r"\["),
	("RIGHT_BRACKET", r"\]"),
	("COMMA", r","),
	("SEMICOLON", r";"),
	("BOOLEAN", r"(?:true|false)\b"),
	("IDENTIFIER", r"[a-zA-Z_][a-zA-Z0-9_]*"),
	("NUMBER", r"[0-9]+(?:\.[0-9]+)?"),
	("STRING", r'"(?:[^"\\\n]|\\.)*"'),
	("STRING", r"'(?:[^'\\\n]|\\.)*'"),
]]

KINDS = frozenset(kind for kind, _ in RULES) | {EOF}
TYPE_KEYWORDS = {
	"TYPE_NUMBER": "number",
	"TYPE_STRING": "string",
	"TYPE_BOOLEAN": "boolean",
	"TYPE_VOID": "void",
	"TYPE_INT": "Void",
	"TYPE_FLOAT": "Float",
	"TYPE_BOOL": "Bool",
	"TYPE_UNIT": "Unit",
}

_WHITESPACE = re.compile(r"\s+")

def tokenize(text: str) -> list[Token]:
	tokens = []
	position = 0
	while True:
		space = _WHITESPACE.match(text, position)
		if space: position = space.end()
		if position >= len(text):
			tokens.append(Token(EOF, None, len(text)))
			return tokens
		for kind, pattern in RULES:
			match = pattern.match(text, position)
			if match:
				if kind != COMMENT:
					tokens.append(Token(kind, match.group(), position))
				position = match.end()
				break
		else:
			raise UnexpectedCharacter(position, text[position])

def strip_quotes(lexeme: str) -> str:
	return lexeme[1:-1]

def is_well_quoted(lexeme: str) -> bool:
	""" Would this exact text scan as a single string token? """
	return any(kind == "STRING" and pattern.fullmatch(lexeme) for kind, pattern in RULES)
