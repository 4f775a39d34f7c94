from __future__ import annotations

import json
from typing import Any

ANALYST_SYSTEM_PROMPT = (
    "You are an experienced technical recruiter and ATS specialist. "
    "Be honest and specific, never invent experience, and follow the requested output format exactly."
)

RESUME_ANALYSIS_PROMPT = """Analyze this resume for the target role "{target_role}".

Return ONLY a JSON object with this structure:
{{
  "atsScore": number,
  "scoringBreakdown": {{
    "keywordMatch": number,
    "actionVerbs": number,
    "quantifiedResults": number,
    "formattingClarity": number,
    "relevanceAlignment": number
  }},
  "skills": ["..."],
  "strengths": ["..."],
  "weaknesses": ["..."],
  "missingKeywords": ["..."],
  "suggestedRoles": ["..."],
  "recruiterImpression": "2-3 sentences",
  "improvementChecklist": ["..."],
  "summaryRewrite": "summary aligned to {target_role}",
  "projectRewrites": ["rewritten project line"],
  "bulletRewrites": ["Old: ... New: ..."]
}}

Scoring rules:
- atsScore between 45 and 80, roughly the average of the breakdown.
- every breakdown value between 30 and 90.
- do not invent metrics; prefix safe estimates with "~".

RESUME:
{resume_text}
"""

JOB_ANALYSIS_PROMPT = """Compare this job description against the candidate resume analysis.

Return ONLY a JSON object with this structure:
{{
  "matchScore": number,
  "fitVerdict": "Yes" | "Maybe" | "No",
  "strengthsBasedOnJD": ["..."],
  "missingSkills": ["..."],
  "recommendedKeywords": ["..."],
  "tailoredBulletSuggestions": ["..."],
  "improvementTips": ["..."]
}}

Rules:
- matchScore reflects demonstrated alignment, not keyword overlap.
- missing skills must be realistic for the role.
- bullet suggestions must be ready to paste into the resume.

JOB TITLE:
{job_title}

JOB DESCRIPTION:
{job_description}

CANDIDATE RESUME DATA:
{resume_json}
"""

MATCH_PROMPT = """Act as a hiring analyst. Score how well the candidate fits the job using the two analyses.

Return ONLY a JSON object with this structure:
{{
  "overallScore": number,
  "hiringProbability": number,
  "roleCategory": "frontend" | "backend" | "fullstack" | "data" | "ml-ai" | "mobile" | "software-engineer",
  "competencies": [{{"name": "text", "resumeLevel": number, "jdLevel": number, "gap": number}}],
  "strengths": ["..."],
  "weaknesses": ["..."],
  "matchingSkills": ["..."],
  "missingSkills": ["..."],
  "recruiterObjections": ["..."],
  "recruiterStrengths": ["..."],
  "scoreBoostEstimate": "text",
  "verdict": "Strong Fit" | "Competitive" | "Weak Fit",
  "jobTitle": "text or null",
  "resumeFileName": "text or null",
  "targetRole": "text or null"
}}

Competency levels use a 0-10 scale and gap = jdLevel - resumeLevel.

RESUME ANALYSIS:
{resume_json}

JOB ANALYSIS:
{job_json}
"""

QUESTIONS_PROMPT = """Generate exactly {count} interview questions for a {role} position.

Category: {category}
Difficulty: {difficulty}
Seed: {seed}

Prefer scenario-based and conceptual questions. Include any code snippet the question refers to.
Return ONLY a JSON array of strings, without numbering.
"""

EVALUATION_PROMPT = """Act as a senior technical interviewer. Evaluate the candidate's answers for the role {role} ({difficulty} level).

QUESTIONS: {questions}
CANDIDATE ANSWERS: {answers}

Judge accuracy, efficiency, clarity and completeness.
Follow this template exactly and do not use markdown code fences:

Q1 Feedback:
Score: XX/100
Strengths:
- ...
Weaknesses:
- ...
Suggested Improved Answer:
...

(repeat for every question)

Overall Summary:
Overall Score: XX/100
Key Strengths:
- ...
Key Weaknesses:
- ...
Improvement Plan:
- ...
"""

TAILOR_CUT_PROMPT = """Act as a strict, experienced tech recruiter. Tailor the existing resume content to THIS job by
cutting weak or generic bullets, rewriting the rest to be concise and aligned to the job, sharpening the
summary and ordering skills by relevance.

Never invent experience, projects, companies or technologies that are not in the resume data.

Return ONLY a JSON object with this structure:
{{
  "improvedSummary": "one summary paragraph",
  "improvedSkillsSection": ["most relevant skill first", "..."],
  "keptAndRewrittenBullets": ["..."],
  "removedBulletsWithReasons": [{{"original": "text", "reason": "text"}}],
  "notesForCandidate": ["..."]
}}

RESUME ANALYSIS:
{resume_json}

JOB ANALYSIS:
{job_json}
"""

TAILORED_RESUME_PROMPT = """Act as a recruiter and resume writer. Produce a recruiter-ready, ATS-optimized resume tailored to the job.

Return ONLY a JSON object with this structure:
{{
  "headline": "2-12 word headline",
  "skillsOrdered": ["..."],
  "experienceSections": [{{"title": "Role - Org", "content": "bullet\\nbullet"}}],
  "projectSections": [{{"title": "Project", "content": "Stack: ...\\nbullet"}}],
  "educationAndExtras": [{{"title": "Education / Certifications", "content": "line\\nline"}}],
  "scoreBoostSuggestions": ["..."],
  "fullText": "complete resume as plain text"
}}

Rules:
- do not invent companies, dates or employment that are not in the resume analysis.
- infer metrics only when implied and prefix estimates with "~".
- use the recommended keywords and missing skills only where truthful.
- fullText order: headline, contact (blank), summary, skills, experience, projects, education/extras.

RESUME ANALYSIS:
{resume_json}

JOB ANALYSIS:
{job_json}

MATCH ANALYSIS:
{match_json}

JOB TITLE: {job_title}
JOB DESCRIPTION (truncated):
{job_description}
"""

COVER_LETTER_PROMPT = """Write a first-person cover letter of EXACTLY FOUR sentences.
Sentence 1 must be:
{intro}.
Sentence 2 must turn this project into a natural sentence with measurable impact, without colon formatting:
{project}
Sentence 3 must show alignment with the role expectations without weaknesses, apologies or learning statements.
Sentence 4 must close confidently with verbs like deliver, build, contribute or engineer.
Output plain text only.
"""


def to_prompt_json(record: dict[str, Any]) -> str:
    body = {key: value for key, value in record.items() if key not in {"userId", "analysisText"}}
    return json.dumps(body, ensure_ascii=False, indent=2, default=str)
