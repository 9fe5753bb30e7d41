"""
Prompt #1 — Resume Tailor + Critique

Rewrites the whole resume for the target job in one call and critiques the
original against it.
Temperature: 0.4 | Max tokens: 4096
"""

PROMPT_TEMPLATE = """\
You are an expert resume writer and career coach. I will provide you with a resume text and a target job description.
Your task is to re-write the resume content to better highlight the skills and experiences relevant to the job, AND provide a detailed critique.

CRITICAL OUTPUT INSTRUCTIONS:
- Return ONLY a single valid JSON object. Do not wrap it in markdown code fences and do not add any text before or after it.
- The JSON must have this structure:
{{
    "personalInfo": {{ "name": "...", "contact": "email | phone | location | links" }},
    "summary": "Updated professional summary...",
    "skills": ["Skill 1", "Skill 2"],
    "experience": [
        {{ "role": "...", "company": "...", "duration": "...", "points": ["tailored point 1", "tailored point 2"] }}
    ],
    "education": [
        {{ "institution": "...", "degree": "...", "year": "..." }}
    ],
    "projects": [
        {{ "name": "...", "description": "...", "technologies": ["..."] }}
    ],
    "analysis": {{
        "addedSkills": ["Skill A", "Skill B"],
        "summaryKeywords": ["keyword1", "keyword2"],
        "critique": [
            "What specifically was weak or missing in the original resume vs this job (e.g., 'Missing quantifiable metrics in Role X')",
            "Another weakness..."
        ],
        "improvements": [
            "A specific actionable suggestion for the user (e.g., 'Add a project link for Project Y')",
            "Another suggestion..."
        ]
    }}
}}

Rules:
- Rewrite "summary", "skills" and each experience entry's "points" to emphasize what is relevant to THIS job. Do not invent employers, dates, degrees or metrics.
- "critique": 3-5 distinct bullet points on the specific gaps between the original resume and this job. Be honest and direct.
- "improvements": 3-5 distinct actionable tips to improve the resume further, beyond what you already rewrote.
- "addedSkills": list ONLY the skills you ADDED or newly emphasized, not the full skill set. Every entry must also appear verbatim in "skills".
- "summaryKeywords": the job keywords you worked into the summary.
- If the original resume lacks a section, infer it only when clearly supported, otherwise return an empty list.

RESUME TEXT:
{resume_text}

JOB DESCRIPTION:
{job_text}
"""
