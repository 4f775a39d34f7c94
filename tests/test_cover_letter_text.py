import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from careerlens.parsing.cover_letter import (  # noqa: E402
    FILLER_SENTENCE,
    build_intro,
    detect_profile,
    extract_company_name,
    first_project,
    polish_cover_letter,
)


class CoverLetterTextTests(unittest.TestCase):
    def test_profile_detection(self):
        self.assertEqual(detect_profile("Strong data structures and algorithms, DSA contests", []), "dsa")
        self.assertEqual(detect_profile("Algorithms course", ["React", "Node"]), "fullstack")
        self.assertEqual(detect_profile(None, []), "fullstack")

    def test_first_project_prefers_project_rewrites(self):
        self.assertEqual(first_project(["Project A"], ["Bullet A"]), "Project A")
        self.assertEqual(first_project([], ["Bullet A"]), "Bullet A")
        self.assertIsNone(first_project([], []))

    def test_company_name_extraction(self):
        self.assertEqual(extract_company_name("Acme Corp is hiring a data engineer."), "Acme Corp")
        self.assertEqual(extract_company_name("We are hiring for a backend role at Initech today"), "Initech")
        self.assertEqual(extract_company_name("Join this role at Globex Labs to build APIs"), "Globex Labs")
        self.assertEqual(extract_company_name("no company mentioned here"), "")
        self.assertEqual(extract_company_name(None), "")

    def test_intro_wording(self):
        self.assertEqual(
            build_intro("dsa", "SDE", "Acme"),
            "I am applying for the SDE role at Acme with strengths in Data Structures, Algorithms, "
            "problem-solving and core CS fundamentals",
        )
        self.assertTrue(build_intro("fullstack", None, "").startswith("I am applying for the advertised role with"))

    def test_polish_enforces_four_sentences(self):
        letter = polish_cover_letter("One. Two! Three? Four. Five.")
        self.assertEqual(letter, "One. Two. Three. Four.")

        padded = polish_cover_letter("Only one sentence")
        self.assertEqual(padded, "Only one sentence. " + ". ".join([FILLER_SENTENCE] * 3) + ".")

    def test_polish_removes_boilerplate(self):
        letter = polish_cover_letter(
            "I am writing to express interest. I build APIs.  I ship   fast. I own outcomes. "
            "I look forward to hearing from you."
        )
        self.assertEqual(letter, "I build APIs. I ship fast. I own outcomes. " + FILLER_SENTENCE + ".")
        self.assertNotIn("..", polish_cover_letter("Done... Really.. Yes. Fine."))

    def test_polish_handles_empty_output(self):
        self.assertEqual(polish_cover_letter(""), ". ".join([FILLER_SENTENCE] * 4) + ".")


if __name__ == "__main__":
    unittest.main()
