"""
Activation records for the type-checker: one frame for the program,
then one per arrow function, each pointing back to the frame it is nested in.
"""

from typing import Iterator, Optional

class Frame:
	_bindings : dict[str, int]
	_non_generic : set[str]
	_supposed : set[str]
	parent : Optional["Frame"]

	def __init__(self, parent: Optional["Frame"] = None):
		self._bindings = {}
		self._non_generic = set()
		self._supposed = set()
		self.parent = parent

	def holds(self, key:str) -> bool:
		""" True if something here really declares the key. Suppositions do not count. """
		return key in self._bindings and key not in self._supposed

	def assign(self, key:str, type_id:int, generic:bool=True) -> int:
		self._bindings[key] = type_id
		self._supposed.discard(key)
		if not generic: self._non_generic.add(key)
		return type_id

	def suppose(self, key:str, type_id:int) -> int:
		""" Stand-in binding for a name nobody declared. A later declaration replaces it. """
		self._bindings[key] = type_id
		self._supposed.add(key)
		return type_id

	def fetch(self, key:str) -> Optional[tuple[int, bool]]:
		""" (type_id, is_generic) from the nearest frame that holds the key, or None. """
		frame = self
		while frame is not None:
			if key in frame._bindings:
				return frame._bindings[key], key not in frame._non_generic
			frame = frame.parent
		return None

	def non_generic(self) -> Iterator[int]:
		""" Types of every non-generic binding visible from here, innermost first. """
		frame = self
		while frame is not None:
			for key in frame._non_generic:
				yield frame._bindings[key]
			frame = frame.parent
