"""
Test CLI

Tests for the text report and the command-line entry point.
"""

import contextlib
import io
import os
import tempfile
import unittest

import matplotlib
matplotlib.use("Agg")

import main
from bip.broadcast import build_broadcast_tree
from bip.report import BANNER, format_final, format_round
from bip.visualization import plot_broadcast_tree


class TestReport(unittest.TestCase):

    def test_round_lines(self):
        snaps = []
        build_broadcast_tree([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)], on_round=snaps.append)
        self.assertEqual(format_round(snaps[0]), [
            "At the end of round 1:",
            "Transmitting node: Node (0,0), with a power of: 1",
            "Uncovered node: 2, 0",
        ])
        self.assertEqual(format_round(snaps[1]), [
            "At the end of round 2:",
            "Transmitting node: Node (0,0), with a power of: 1",
            "Transmitting node: Node (1,0), with a power of: 1",
        ])

    def test_final_lines(self):
        result = build_broadcast_tree([(0.0, 0.0), (3.0, 4.0)])
        self.assertEqual(format_final(result), [
            BANNER,
            "Transmitting nodes (at the end): ",
            "Node (0, 0), transmitting with a power of: 25",
            "Transmission path: ",
            "Stage1: Node (0, 0), increases its power by: 25",
            "Total transmission cost is: 25",
        ])


class TestMain(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.nodes = os.path.join(self.tmp.name, "locations.txt")
        with open(self.nodes, "w", encoding="utf-8") as f:
            f.write("(0,0)\n(1,0)\n(2,0)\n")

    def _run(self, argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(io.StringIO()):
            try:
                code = main.main(argv)
            except SystemExit as e:
                code = e.code
        return code, out.getvalue()

    def test_wrong_argument_count(self):
        for argv in ([], [self.nodes, "extra"]):
            code, out = self._run(argv)
            self.assertEqual(code, -1)
            self.assertIn(main.USAGE, out)

    def test_success(self):
        code, out = self._run([self.nodes])
        self.assertEqual(code, 0)
        self.assertIn("At the end of round 2:", out)
        self.assertIn(BANNER, out)
        self.assertIn("Stage2: Node (1, 0), increases its power by: 1", out)
        self.assertTrue(out.rstrip().endswith("Total transmission cost is: 2"))

    def test_missing_file_is_an_error(self):
        code, out = self._run([os.path.join(self.tmp.name, "missing.txt")])
        self.assertEqual(code, 1)
        self.assertIn("Error:", out)

    def test_malformed_file_is_an_error(self):
        with open(self.nodes, "w", encoding="utf-8") as f:
            f.write("(0,0)\n(x,1)\n")
        code, out = self._run([self.nodes])
        self.assertEqual(code, 1)
        self.assertIn("Malformed node", out)

    def test_invalid_utf8_file_is_an_error(self):
        with open(self.nodes, "wb") as f:
            f.write(b"(0,0)\n(\xff\xfe,1)\n")
        code, out = self._run([self.nodes])
        self.assertEqual(code, 1)
        self.assertIn("not valid UTF-8", out)

    def test_csv_and_plot_export(self):
        csv_out = os.path.join(self.tmp.name, "path.csv")
        png_out = os.path.join(self.tmp.name, "tree.png")
        code, out = self._run([self.nodes, "--csv", csv_out, "--plot", png_out])
        self.assertEqual(code, 0)
        self.assertTrue(os.path.getsize(csv_out) > 0)
        self.assertTrue(os.path.getsize(png_out) > 0)


class TestVisualization(unittest.TestCase):

    def test_plot_without_saving(self):
        result = build_broadcast_tree([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0), (0.0, 3.0)])
        fig = plot_broadcast_tree(result, show=False)
        ax = fig.axes[0]
        self.assertIn("cost=", ax.get_title())
        self.assertEqual(len(ax.patches), len([t for t in result.transmitters if t.power > 0]))


if __name__ == "__main__":
    unittest.main()
