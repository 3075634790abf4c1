"""Prompt templates for the specialized review analyzers."""

from collections.abc import Sequence

SYSTEM_PROMPT = """
Role: Senior engineer reviewing a single hunk of a pull request diff.

Rules:
- Only report issues visible in the provided diff.
- Every finding needs a concrete rationale and an actionable suggestion.
- Use line numbers from the new version of the file when you can infer them.
- Respond with JSON only. No markdown, no commentary.
"""

OUTPUT_CONTRACT = """
Return EXACTLY this JSON format:

{"findings":[
   {"title":"Issue Title","rationale":"Why this is a problem","suggestion":"How to fix it",
    "severity":"HIGH","filePath":"","lineStart":1,"lineEnd":1}
 ],
 "summary":"Brief summary"}

severity must be one of: BLOCKER, HIGH, MEDIUM, LOW, INFO.
If there are no issues, return an empty findings array.
Return ONLY the JSON object, no other text.
"""

REVIEW_TEMPLATE = """
You are a {role}.

INTERNAL STANDARDS:
{standards}

Look specifically for:
{checklist}
{output_contract}
File: {file_path}

Code to analyze:
```diff
{diff}
```
"""

NO_STANDARDS = "(no internal standards available)"

SECURITY_CHECKLIST = [
    "Hardcoded API keys, passwords, tokens or other secrets",
    "SQL, command, template or path injection",
    "Server-side request forgery and unsafe deserialization",
    "Weak or misused cryptography",
    "Missing authentication or authorization checks",
    "Sensitive data (PII, credentials) written to logs",
]

PERFORMANCE_CHECKLIST = [
    "Memory leaks and needless allocations in hot paths",
    "N+1 database queries and missing pagination",
    "Missing connection pooling or resource reuse",
    "Inefficient loops or algorithms with avoidable complexity",
    "Blocking I/O on latency-sensitive paths",
    "Missing caching opportunities",
]

STYLE_CHECKLIST = [
    "Unclear naming of variables, functions and classes",
    "Long or deeply nested functions that hide intent",
    "Duplicated logic that should be shared",
    "Swallowed exceptions or overly broad exception handling",
    "Misleading, stale or missing comments on non-obvious code",
    "Inconsistent or missing logging around failures",
]


def build_review_prompt(
    role: str,
    checklist: Sequence[str],
    standards: str,
    file_path: str,
    diff: str,
) -> str:
    """Render the analyzer prompt for one hunk."""
    return REVIEW_TEMPLATE.format(
        role=role,
        standards=standards.strip() or NO_STANDARDS,
        checklist="\n".join(f"{i}. {item}" for i, item in enumerate(checklist, 1)),
        output_contract=OUTPUT_CONTRACT,
        file_path=file_path,
        diff=diff,
    )


BACKEND_CHECK_TEMPLATE = """
Find security issues in this code:

{code}

Return JSON: {{"issues": ["issue1", "issue2"]}}
"""
