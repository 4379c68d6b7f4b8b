"""
This is a checker for the Minnow programming language.

{0}

For example:

    minnow program.mn

will parse program.mn, check its names and infer its types, then print
the type of each top-level constant, or else try to explain why not.

    minnow -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="minnow",
	description="Checker for the Minnow programming language.",
)
parser.add_argument("program", help="try examples/polymorphism.mn for example.")
parser.add_argument('-c', "--check", action="store_true", help="Check the program but print nothing on success except a word of encouragement.")
parser.add_argument('-f', "--format", action="store_true", help="Print the program in canonical form instead of its types.")
parser.add_argument('-v', "--verbose", action="count", help="Mention each phase on the way through. Repeat for more chatter.")
parser.add_argument("--max-issues", type=int, default=None, help="Give up after this many issues.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .compiler import check_text
	path = Path.cwd() / args.program
	text = path.read_text(encoding="utf-8")
	report = Report(verbose=args.verbose, max_issues=args.max_issues)
	try:
		result = check_text(text, report)
	except TooManyIssues:
		report.complain_to_console(text, str(path))
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	if report.sick():
		report.complain_to_console(text, str(path))
		return 1
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
	elif args.format:
		from .formatter import format
		print(format(result.tree))
	else:
		from . import syntax
		for stmt in result.tree.body:
			if isinstance(stmt, syntax.ConstDeclaration):
				print("%s : %s" % (stmt.name, result.store.render(stmt.type_id)))
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
