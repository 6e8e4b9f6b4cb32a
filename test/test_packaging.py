"""
Packaging metadata tests (pyproject.toml).

Conventions
- Test method names follow CamelCase per project convention.
"""
import pathlib
import tomllib
import unittest
from unittest import TestCase

ROOT = pathlib.Path(__file__).resolve().parent.parent


class TestPyproject(TestCase):

    def setUp(self):
        with open(ROOT / "pyproject.toml", "rb") as stream:
            self.project = tomllib.load(stream)["project"]

    def testReadmeIsProjectDocumentation(self):
        readme = self.project.get("readme")
        if readme is None:
            return
        self.assertTrue(readme.upper().startswith("README"))
        self.assertTrue((ROOT / readme).is_file())

    def testRuntimeDependencies(self):
        self.assertEqual([requirement.split(">")[0] for requirement in self.project["dependencies"]], ["rich"])


if __name__ == '__main__':
    unittest.main()
