"""
CV review prompt: scoring, suggestions and interview questions.

Fed the fields recovered by the extraction pipeline plus the full resume
text. The model must answer with JSON matching AnalysisResult.
"""

from cv_analyzer.core.schemas import ParsedCvData

NOT_FOUND = "Not found"

REVIEW_PROMPT = """\
You are an expert career coach and CV reviewer. Analyze the following CV content and return structured JSON that exactly matches this schema:
{{
  "summary": string,
  "missingSections": string[],
  "suggestions": string[],
  "scoring": {{
    "structure": {{ "score": number, "reason": string }},
    "language": {{ "score": number, "reason": string }},
    "relevance": {{ "score": number, "reason": string }},
    "technical": {{ "score": number, "reason": string }},
    "clarity": {{ "score": number, "reason": string }}
  }},
  "interviewQuestions": {{
    "technical": string[],
    "behavioral": string[],
    "roleSpecific": string[]
  }}
}}

Guidelines:
- Scores are 0-100 integers.
- Give concise, actionable reasons and suggestions.
- Tailor questions to the candidate profile and likely target roles.
- Return only the JSON object, no commentary.

Extracted fields:
- Name: {name}
- Email: {email}
- Phone: {phone}
- Skills: {skills}
- Experience: {experience}
- Education: {education}

Full CV text:
{raw_text}
"""


def build_review_prompt(parsed: ParsedCvData) -> str:
    return REVIEW_PROMPT.format(
        name=parsed.name or NOT_FOUND,
        email=parsed.email or NOT_FOUND,
        phone=parsed.phone or NOT_FOUND,
        skills=", ".join(parsed.skills) if parsed.skills else NOT_FOUND,
        experience=parsed.experience or NOT_FOUND,
        education=parsed.education or NOT_FOUND,
        raw_text=parsed.raw_text,
    )
