"""
Test Candidates

Tests for candidate generation and the cheapest-candidate selector.
"""

import unittest

from bip.candidates import Candidate, generate_candidates, select_cheapest
from bip.errors import AlgorithmInvariantError
from bip.partition import CoveragePartition, SourceKind


class TestGenerateCandidates(unittest.TestCase):

    def test_first_round_has_no_promotions(self):
        part = CoveragePartition.start([(0.0, 0.0), (3.0, 4.0), (1.0, 0.0)])
        cands = list(generate_candidates(part))
        self.assertEqual([(c.source, c.target) for c in cands], [(0, 1), (0, 2)])
        self.assertEqual([c.cost for c in cands], [25.0, 1.0])
        self.assertTrue(all(c.kind is SourceKind.EXTEND_TRANSMITTER for c in cands))

    def test_enumeration_order(self):
        part = CoveragePartition.start([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0), (5.0, 0.0)])
        part.apply(select_cheapest(generate_candidates(part)))
        cands = list(generate_candidates(part))

        self.assertEqual(
            [(c.kind, c.source, c.target) for c in cands],
            [
                (SourceKind.EXTEND_TRANSMITTER, 0, 2),
                (SourceKind.EXTEND_TRANSMITTER, 0, 3),
                (SourceKind.PROMOTE_RELAY, 1, 2),
                (SourceKind.PROMOTE_RELAY, 1, 3),
            ],
        )
        # source already transmits with power 1
        self.assertEqual([c.cost for c in cands], [3.0, 24.0, 1.0, 16.0])


class TestSelectCheapest(unittest.TestCase):

    def _cand(self, cost, source, target, kind=SourceKind.EXTEND_TRANSMITTER):
        return Candidate(cost, source, target, kind, (0.0, 0.0), (0.0, 0.0))

    def test_minimum_cost(self):
        cands = [self._cand(3.0, 0, 1), self._cand(1.0, 0, 2), self._cand(2.0, 0, 3)]
        self.assertEqual(select_cheapest(cands).target, 2)

    def test_ties_keep_first_generated(self):
        cands = [
            self._cand(2.0, 0, 1),
            self._cand(1.0, 0, 2),
            self._cand(1.0, 0, 3),
            self._cand(1.0, 4, 2, SourceKind.PROMOTE_RELAY),
        ]
        best = select_cheapest(cands)
        self.assertEqual((best.source, best.target), (0, 2))
        self.assertIs(best.kind, SourceKind.EXTEND_TRANSMITTER)

    def test_negative_cost_wins(self):
        cands = [self._cand(0.0, 0, 1), self._cand(-0.5, 0, 2)]
        self.assertEqual(select_cheapest(cands).target, 2)

    def test_empty_is_an_invariant_violation(self):
        with self.assertRaises(AlgorithmInvariantError):
            select_cheapest([])


if __name__ == "__main__":
    unittest.main()
