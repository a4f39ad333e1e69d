import unittest

from llmchess_arbiter.difficulty import hint_for, normalize_difficulty, temperature_for
from llmchess_arbiter.prompting import DEFAULT_SYSTEM_INSTRUCTIONS, PromptConfig, build_move_messages, render_custom_prompt


class DifficultyTests(unittest.TestCase):
    def test_temperatures(self):
        self.assertEqual(temperature_for("EASY"), 0.8)
        self.assertEqual(temperature_for("unknown"), 0.3)
        self.assertEqual(temperature_for("hard"), 0.0)
        self.assertEqual(temperature_for(None), 0.3)

    def test_hints(self):
        self.assertEqual(hint_for(" easy "), "choose a random or non-optimal move from the list")
        self.assertEqual(hint_for("Medium"), "choose a reasonable move from the list")
        self.assertEqual(hint_for("HARD"), "choose the strongest move you can from the list")
        self.assertEqual(hint_for("grandmaster"), hint_for("medium"))

    def test_normalize(self):
        self.assertEqual(normalize_difficulty("  Hard\n"), "hard")
        self.assertEqual(normalize_difficulty(""), "medium")


class PromptTests(unittest.TestCase):
    FEN = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"

    def test_default_messages(self):
        msgs = build_move_messages(self.FEN, ["e7e5", "d7d5"], "HARD")
        self.assertEqual([m["role"] for m in msgs], ["system", "user"])
        self.assertEqual(msgs[0]["content"], DEFAULT_SYSTEM_INSTRUCTIONS)
        self.assertIn("exactly ONE move", msgs[0]["content"])
        user = msgs[1]["content"]
        self.assertIn(self.FEN, user)
        self.assertIn("e7e5, d7d5", user)
        self.assertIn("DIFFICULTY:\nhard", user)
        self.assertIn("Choose the strongest move you can from the list.", user)
        self.assertIn("Return ONLY one UCI string", user)

    def test_move_list_is_embedded_verbatim(self):
        msgs = build_move_messages(self.FEN, ["zzz", "e7e5"], "easy")
        self.assertIn("zzz, e7e5", msgs[1]["content"])

    def test_custom_template(self):
        cfg = PromptConfig(system_instructions="sys", template="{FEN}|{LEGAL_MOVES}|{DIFFICULTY}|{UNKNOWN}")
        msgs = build_move_messages("pos", ["a2a3"], "bogus", cfg)
        self.assertEqual(msgs[0]["content"], "sys")
        self.assertEqual(msgs[1]["content"], "pos|a2a3|medium|{UNKNOWN}")

    def test_render_leaves_unknown_tokens(self):
        self.assertEqual(render_custom_prompt("{A} {B}", {"A": "x"}), "x {B}")

    def test_position_text_is_not_rescanned(self):
        position = "weird {LEGAL_MOVES} {DIFFICULTY} {FEN}"
        msgs = build_move_messages(position, ["e2e4"], "hard")
        user = msgs[1]["content"]
        self.assertIn("FEN:\n" + position + "\n", user)
        self.assertEqual(user.count("e2e4"), 2)  # move list plus the format example
        self.assertEqual(render_custom_prompt("{A}|{B}", {"A": "{B}", "B": "y"}), "{B}|y")


if __name__ == "__main__":
    unittest.main()
