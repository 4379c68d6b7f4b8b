from pathlib import Path
import io
import unittest
from unittest import mock

from minnow import diagnostics, cmdline, syntax
from minnow.compiler import check_text
from minnow.type_inference import TypeCheck

base_folder = Path(__file__).parent.parent
examples = base_folder/"examples"
zoo_ok = base_folder/"zoo/ok"
zoo_fail = base_folder/"zoo/fail"


def _good(folder, which) -> TypeCheck:
	report = diagnostics.Report(verbose=False)
	result = check_text((folder / (which + ".mn")).read_text(), report)
	report.assert_no_issues("Ostensibly-good example failed to check.")
	return result

def _types(result: TypeCheck) -> dict[str, str]:
	return {
		stmt.name: result.store.render(stmt.type_id)
		for stmt in result.tree.body
		if isinstance(stmt, syntax.ConstDeclaration)
	}

def _run(*argv):
	args = cmdline.parser.parse_args([str(a) for a in argv])
	with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			status = cmdline.run(args)
	return status, out.getvalue(), err.getvalue()

class ExampleSmokeTests(unittest.TestCase):
	""" Check all the examples; Test for no smoke. """

	def test_every_example(self):
		for folder in (examples, zoo_ok):
			for path in sorted(folder.glob("*.mn")):
				with self.subTest(path.name):
					_good(folder, path.stem)

	def test_polymorphism(self):
		types = _types(_good(examples, "polymorphism"))
		self.assertEqual("?a -> ?a", types["id"])
		self.assertEqual("Number", types["n"])
		self.assertEqual("String", types["s"])
		self.assertEqual("?a -> ?a -> Array<?a>", types["pair"])
		self.assertEqual("Array<String>", types["words"])

	def test_higher_order(self):
		types = _types(_good(examples, "higher_order"))
		self.assertEqual("Number", types["four"])
		self.assertEqual("String -> String", types["shout"])
		self.assertEqual("String", types["message"])

	def test_arrays(self):
		types = _types(_good(examples, "arrays"))
		self.assertEqual("Array<Array<Number>>", types["grid"])
		self.assertEqual("Number", types["corner"])
		self.assertEqual("String", types["label"])

class CommandLineTests(unittest.TestCase):

	def test_prints_types(self):
		status, out, err = _run(examples/"conditionals.mn")
		self.assertEqual(0, status)
		self.assertIn("answer : Number\n", out)
		self.assertIn("word : String\n", out)
		self.assertEqual("", err)

	def test_check_only(self):
		status, out, err = _run("-c", zoo_ok/"nullary.mn")
		self.assertEqual(0, status)
		self.assertEqual("", out)
		self.assertIn("plausible", err)

	def test_format(self):
		status, out, err = _run("--format", zoo_ok/"shadowing.mn")
		self.assertEqual(0, status)
		self.assertTrue(out.startswith("const x = 1;\nconst f = (x) => {\n  return x + \"s\";\n};"))

	def test_verbose(self):
		status, out, err = _run("-vv", zoo_ok/"shadowing.mn")
		self.assertEqual(0, status)
		self.assertIn("Inferring types", err)

	def test_complaint_shows_the_line(self):
		status, out, err = _run(zoo_fail/"type_check"/"mismatch_plus.mn")
		self.assertEqual(1, status)
		self.assertEqual("", out)
		self.assertIn("TypeMismatch", err)
		self.assertIn("const z = x + y;", err)

	def test_giving_up(self):
		status, out, err = _run("--max-issues", "1", zoo_fail/"type_check"/"multiply.mn")
		self.assertEqual(1, status)
		self.assertIn("Giving up", err)

if __name__ == '__main__':
	unittest.main()
