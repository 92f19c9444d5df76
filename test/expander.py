"""
Short-option expander tests.

Scope
- POSIX grouping: flags chain, the first value-taking option absorbs the rest.
- Unknown characters fail the whole cluster (or become extras when tolerated).
- Grouping disabled: single options, attached values, single-dash long names.
"""
import unittest
from unittest import TestCase

from argot import App, ErrorKind
from argot.expander import expand
from argot.tokens import ShortCluster


def _cluster(text, index=0):
    return ShortCluster(text[1:], text, index)


class GroupedExpansionTest(TestCase):
    def setUp(self):
        app = App("tool")
        app.add_flag("a,all")
        app.add_flag("b,brief")
        app.add_flag("c,color")
        app.add_option("f,file")
        self.node = app.freeze()

    def testAllFlagsExpand(self):
        expansion = expand(_cluster("-abc"), self.node)
        self.assertIsNone(expansion.error)
        self.assertEqual([reference.name for reference in expansion.references], ["-a", "-b", "-c"])
        self.assertTrue(all(reference.value is None for reference in expansion.references))

    def testValueOptionAbsorbsRest(self):
        expansion = expand(_cluster("-afbc"), self.node)
        self.assertEqual([reference.name for reference in expansion.references], ["-a", "-f"])
        self.assertEqual(expansion.references[-1].value, "bc")

    def testValueOptionAtEndHasNoInlineValue(self):
        expansion = expand(_cluster("-af"), self.node)
        self.assertIsNone(expansion.references[-1].value)

    def testUnknownCharacterFailsWholeCluster(self):
        expansion = expand(_cluster("-axb", 3), self.node)
        self.assertEqual(expansion.references, ())
        self.assertEqual(expansion.error.kind, ErrorKind.UNKNOWN_OPTION)
        self.assertEqual(expansion.error.option, "-x")
        self.assertEqual(expansion.error.argument, "-axb")
        self.assertEqual(expansion.error.index, 3)

    def testUnknownCharacterToleratedAsExtra(self):
        app = App("tool").allow_unknown_options()
        app.add_flag("a")
        expansion = expand(_cluster("-axa"), app.freeze())
        self.assertIsNone(expansion.error)
        self.assertEqual(expansion.extras, ("-x",))
        self.assertEqual(len(expansion.references), 2)


class UngroupedExpansionTest(TestCase):
    def setUp(self):
        app = App("tool").enable_posix_grouping(False)
        app.add_flag("a")
        app.add_option("f")
        app.add_flag("abc")
        self.node = app.freeze()

    def testSingleCharacter(self):
        (reference,) = expand(_cluster("-a"), self.node).references
        self.assertEqual(reference.name, "-a")

    def testAttachedValueForValueOption(self):
        (reference,) = expand(_cluster("-fout.txt"), self.node).references
        self.assertEqual(reference.value, "out.txt")

    def testSingleDashLongName(self):
        (reference,) = expand(_cluster("-abc"), self.node).references
        self.assertEqual(reference.schema.long, "abc")

    def testUnknownGroupIsAnError(self):
        expansion = expand(_cluster("-ab"), self.node)
        self.assertEqual(expansion.error.kind, ErrorKind.UNKNOWN_OPTION)


if __name__ == "__main__":
    unittest.main()
