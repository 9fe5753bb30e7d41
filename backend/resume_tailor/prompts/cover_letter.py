"""
Prompt #2 — Cover Letter + LinkedIn Message

Generates a cover letter and a short connection request for the same job.
Temperature: 0.7 | Max tokens: 1500
"""

PROMPT_TEMPLATE = """\
You are an expert career consultant.

JOB DESCRIPTION:
{job_text}

RESUME:
{resume_text}

TASK:
1. Write a compelling, professional COVER LETTER (max 350 words) that connects the candidate's specific achievements to the job requirements. Keep it confident but not arrogant.
2. Write a short, punchy LINKEDIN CONNECTION MESSAGE (max 300 characters) to send to a hiring manager or recruiter at this company.

If the job description is empty, write both for the role the resume is best suited to, without naming a company.

OUTPUT FORMAT (a single JSON object only, no markdown code fences, no extra text):
{{
    "coverLetter": "Dear Hiring Manager... (full text with newlines)",
    "linkedinMessage": "Hi [Name], I recently applied for..."
}}
"""
