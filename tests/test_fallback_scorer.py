import copy
import sys
import unittest
from pathlib import Path

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from careerlens.schemas import JobAnalysisRecord, ResumeAnalysisRecord  # noqa: E402
from careerlens.scoring.fallback import (  # noqa: E402
    BOOST_POLISH,
    BOOST_WITH_GAPS,
    compute_core_alignment,
    deterministic_fallback,
)


class DeterministicFallbackTests(unittest.TestCase):
    def test_reference_example(self):
        resume = {"atsScore": 80, "skills": ["docker", "react"]}
        job = {"matchScore": 70, "missingSkills": ["docker", "aws"], "recommendedKeywords": ["react", "docker"]}

        result = deterministic_fallback(resume, job)

        self.assertEqual(result.overall_score, 63)
        self.assertEqual(result.hiring_probability, 53)
        self.assertEqual(result.verdict, "Competitive")
        self.assertEqual(result.matching_skills, ["docker", "react"])
        self.assertEqual(result.missing_skills, ["docker", "aws"])
        self.assertEqual(result.score_boost_estimate, BOOST_WITH_GAPS)
        self.assertEqual(result.competencies, [])
        self.assertEqual(result.role_category, "software-engineer")
        self.assertEqual(result.source, "fallback")

    def test_empty_records_use_neutral_defaults(self):
        result = deterministic_fallback(ResumeAnalysisRecord(), JobAnalysisRecord())
        # 0.3*50 + 0.2*50 + 0.3*0 + 0.2*50
        self.assertEqual(result.overall_score, 35)
        self.assertEqual(result.hiring_probability, 25)
        self.assertEqual(result.verdict, "Weak Fit")
        self.assertEqual(result.matching_skills, [])
        self.assertEqual(result.missing_skills, [])
        self.assertEqual(result.strengths, [])
        self.assertEqual(result.recruiter_strengths, [])
        self.assertEqual(result.score_boost_estimate, BOOST_POLISH)

    def test_zero_scores_are_not_replaced_by_defaults(self):
        result = deterministic_fallback({"atsScore": 0}, {"matchScore": 0})
        self.assertEqual(result.overall_score, 10)
        self.assertEqual(result.hiring_probability, 0)

    def test_strong_fit(self):
        resume = {"atsScore": 100, "skills": ["Python", "AWS"], "strengths": list("abcdefg")}
        job = {
            "matchScore": 100,
            "missingSkills": ["python", " aws "],
            "strengthsBasedOnJD": ["x", "y"],
            "jobTitle": "Backend Engineer",
        }
        result = deterministic_fallback(resume, job)
        self.assertEqual(result.overall_score, 90)
        self.assertEqual(result.hiring_probability, 80)
        self.assertEqual(result.verdict, "Strong Fit")
        self.assertEqual(result.strengths, list("abcde"))
        self.assertEqual(result.recruiter_strengths, ["x", "y"])
        self.assertEqual(result.job_title, "Backend Engineer")

    def test_malformed_fields_are_coerced(self):
        resume = {"atsScore": "high", "skills": "docker", "weaknesses": None}
        job = {"matchScore": None, "missingSkills": {"a": 1}, "recommendedKeywords": 7}
        result = deterministic_fallback(resume, job)
        self.assertEqual(result.overall_score, 35)
        self.assertEqual(result.matching_skills, [])

    def test_scores_always_within_bounds(self):
        skills = ["a", "b", "c"]
        for ats in (0, 13, 50, 99, 100):
            for match in (0, 41, 100):
                for missing in ([], ["a"], ["a", "z"], ["x", "y"]):
                    result = deterministic_fallback(
                        {"atsScore": ats, "skills": skills},
                        {"matchScore": match, "missingSkills": missing},
                    )
                    self.assertIsInstance(result.overall_score, int)
                    self.assertIsInstance(result.hiring_probability, int)
                    self.assertTrue(0 <= result.overall_score <= 100)
                    self.assertTrue(0 <= result.hiring_probability <= 100)
                    self.assertEqual(result.hiring_probability, max(0, result.overall_score - 10))

    def test_lists_are_capped(self):
        job = {
            "missingSkills": [f"skill{i}" for i in range(12)],
            "recommendedKeywords": [f"kw{i}" for i in range(12)],
        }
        resume = {"skills": ["KW1", "kw9", "kw11"]}
        result = deterministic_fallback(resume, job)
        self.assertEqual(len(result.missing_skills), 8)
        self.assertEqual(result.matching_skills, ["KW1"])

    def test_inputs_are_not_mutated(self):
        resume = {"atsScore": 70, "skills": ["Docker"], "strengths": ["s1"]}
        job = {"matchScore": 60, "missingSkills": ["docker"], "recommendedKeywords": ["docker"]}
        resume_before = copy.deepcopy(resume)
        job_before = copy.deepcopy(job)
        deterministic_fallback(resume, job)
        self.assertEqual(resume, resume_before)
        self.assertEqual(job, job_before)

    def test_wrong_input_shape_fails_fast(self):
        with self.assertRaises(ValidationError):
            deterministic_fallback(42, {})


class CoreAlignmentTests(unittest.TestCase):
    def test_empty_requirements_use_denominator_one(self):
        self.assertEqual(compute_core_alignment([], []), 0)
        self.assertEqual(compute_core_alignment(["python"], []), 0)

    def test_matching_is_case_and_whitespace_insensitive(self):
        self.assertEqual(compute_core_alignment(["  Docker "], ["docker"]), 100)
        self.assertEqual(compute_core_alignment(["docker"], ["DOCKER", "aws", "gcp"]), 33)

    def test_half_rounds_up(self):
        self.assertEqual(compute_core_alignment(["a"], ["a", "b", "c", "d", "e", "f", "g", "h"]), 13)


if __name__ == "__main__":
    unittest.main()
