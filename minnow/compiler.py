"""
Main driver for the Minnow front-end.

The phases are:

1. lex and parse, recovering at statement boundaries;
2. check that every name refers to something in scope;
3. infer types, with let-polymorphism.

Phases 2 and 3 each walk the tree independently, so either may go first,
and a program with naming problems still gets its types checked.
Each of the functions here makes its own report and store, so that
nothing is shared between one compilation and the next.
"""
import copy
from typing import Optional
from . import syntax
from .diagnostics import Report
from .front_end import parse_text, MinnowParseError
from .lexer import UnexpectedCharacter
from .resolution import NameCheck, resolve_names
from .type_inference import TypeCheck, infer_types

def compile(text: str) -> syntax.Program:
	""" Lex and parse only. Complaints come out as a MinnowParseError. """
	report = Report()
	program = parse_text(text, report)
	if report.sick():
		raise MinnowParseError(report.issues)
	return program

def name_check(tree: syntax.Program) -> NameCheck:
	report = Report()
	bindings = resolve_names(tree, report)
	return NameCheck(report.issues, bindings)

def type_check(tree: syntax.Program) -> TypeCheck:
	""" Annotates a copy. The given tree is left as it was, so it may be checked again. """
	tree = copy.deepcopy(tree)
	report = Report()
	store = infer_types(tree, report)
	return TypeCheck(report.issues, tree, store)

def check_text(text: str, report: Report) -> Optional[TypeCheck]:
	"""
	The whole pipeline, with every issue going into the given report.
	Returns None if the text would not parse; otherwise the typed tree,
	which may or may not have issues of its own.
	"""
	report.info("Parsing")
	try:
		tree = parse_text(text, report)
	except UnexpectedCharacter as ex:
		report.unexpected_character(ex)
		return None
	if report.sick():
		return None
	report.info("Resolving names")
	resolve_names(tree, report)
	report.info("Inferring types")
	store = infer_types(tree, report)
	return TypeCheck(report.issues, tree, store)
