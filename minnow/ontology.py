"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid various circular-import
scenarios. Later passes read the concrete node types, and I use
type-annotations to get help from the IDE to make sure those stay sane,
but in consequence these abstract base classes need to remain
separate from the rest.
"""
from typing import Optional

class Phrase:
	"""
	Anything that came out of the source text and might need blaming later.
	The position is a character offset into the source, or None for
	nodes that some tool made up without any source text in sight.
	"""
	position: Optional[int] = None

	def left(self) -> Optional[int]:
		""" Return the offset of the leftmost character of this phrase """
		return self.position

	def width(self) -> int:
		""" How many characters to underline when complaining about this phrase """
		return 1

class Statement(Phrase): pass

class Typed:
	""" The type-inference pass fills in the type_id exactly once. """
	type_id: Optional[int] = None

	def annotate(self, type_id: int) -> int:
		assert self.type_id is None, (self, self.type_id, type_id)
		self.type_id = type_id
		return type_id

class Expression(Statement, Typed):
	""" Expressions may also stand alone as statements at the top level. """

class TypeExpression(Phrase): pass
