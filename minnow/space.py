"""
Minnow's notion of a name-space with support for nested scopes
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
from .ontology import Phrase

class AlreadyExists(KeyError): pass

T = TypeVar('T', bound=Phrase)

class Space(ABC, Generic[T]):
	@abstractmethod
	def symbol(self, key: str) -> Optional[T]: pass

	@abstractmethod
	def mount(self, key:str, symbol:T) -> T: pass

	def child(self) -> "Chain[T]":
		return Chain(Layer(), self)


class Layer(Space[T]):
	""" Lightly enhanced dictionary: It does not like duplicate keys. """
	_symbol: dict[str, T]

	def __init__(self):
		self._symbol = {}

	def symbol(self, key: str) -> Optional[T]:
		return self._symbol.get(key)

	def mount(self, key:str, symbol:T) -> T:
		if key in self._symbol:
			raise AlreadyExists(key)
		else:
			self._symbol[key] = symbol
			return symbol


class Chain(Space[T]):
	""" A new layer on top; lookups fall through to the rest. """
	def __init__(self, top:Layer[T], rest:Space[T]):
		self.top = top
		self._rest = rest

	def symbol(self, key: str) -> Optional[T]:
		found = self.top.symbol(key)
		return self._rest.symbol(key) if found is None else found

	def mount(self, key:str, symbol:T) -> T:
		return self.top.mount(key, symbol)
