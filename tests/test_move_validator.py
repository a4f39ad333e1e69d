import unittest

from llmchess_arbiter.move_validator import LegalMoveSet, MoveResult, extract_uci, normalize_uci


class NormalizeTests(unittest.TestCase):
    def test_mixed_input_normalizes_to_unique_valid_moves(self):
        legal = LegalMoveSet.from_raw(["E2E4", " e7e5 ", "z9z9", "e2e4", "e7e8K"])
        self.assertEqual(legal.as_list(), ["e2e4", "e7e5"])

    def test_promotion_letters_are_lowercased_before_validation(self):
        self.assertEqual(normalize_uci("E7E8Q"), "e7e8q")
        self.assertIsNone(normalize_uci("e7e8k"))
        self.assertIsNone(normalize_uci("e7e8K"))

    def test_malformed_entries_are_dropped(self):
        raw = ["e2e", "e2e4qq", "i2i4", "e0e4", "e2-e4", "", "   ", None, 42]
        self.assertEqual(len(LegalMoveSet.from_raw(raw)), 0)

    def test_none_or_empty_input_is_terminal(self):
        self.assertFalse(LegalMoveSet.from_raw(None))
        self.assertFalse(LegalMoveSet.from_raw([]))

    def test_first_occurrence_order_is_kept(self):
        legal = LegalMoveSet.from_raw(["d2d4", "e2e4", "D2D4", "g1f3"])
        self.assertEqual(list(legal), ["d2d4", "e2e4", "g1f3"])

    def test_membership_normalizes_the_candidate(self):
        legal = LegalMoveSet.from_raw(["e2e4"])
        self.assertIn(" E2E4", legal)
        self.assertNotIn("e7e5", legal)
        self.assertNotIn(None, legal)


class ExtractTests(unittest.TestCase):
    def test_finds_move_inside_commentary(self):
        self.assertEqual(extract_uci("I will play E2E4 because it controls the centre."), "e2e4")

    def test_keeps_promotion_piece(self):
        self.assertEqual(extract_uci("```\na7a8q\n```"), "a7a8q")

    def test_bare_token(self):
        self.assertEqual(extract_uci("  g1f3\n"), "g1f3")

    def test_no_move_present(self):
        self.assertIsNone(extract_uci("Nf3 is best"))
        self.assertIsNone(extract_uci(""))
        self.assertIsNone(extract_uci(None))


class MoveResultTests(unittest.TestCase):
    def test_promotion_decomposition(self):
        res = MoveResult.from_uci("e7e8q", source="llm")
        self.assertEqual((res.uci, res.from_square, res.to_square, res.promotion), ("e7e8q", "e7", "e8", "q"))

    def test_no_promotion_is_none_not_empty_string(self):
        res = MoveResult.from_uci("e2e4")
        self.assertEqual((res.from_square, res.to_square), ("e2", "e4"))
        self.assertIsNone(res.promotion)

    def test_empty_result(self):
        res = MoveResult.empty()
        self.assertTrue(res.is_empty)
        self.assertEqual(res.to_dict(), {"uci": "", "from": "", "to": "", "promotion": None, "source": ""})

    def test_rejects_invalid_token(self):
        with self.assertRaises(ValueError):
            MoveResult.from_uci("z9z9")

    def test_to_dict_wire_names(self):
        self.assertEqual(
            MoveResult.from_uci("b7b8n", source="fallback").to_dict(),
            {"uci": "b7b8n", "from": "b7", "to": "b8", "promotion": "n", "source": "fallback"},
        )


if __name__ == "__main__":
    unittest.main()
