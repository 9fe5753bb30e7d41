"""Resume Tailor API — job-tailored resumes and cover letters from a PDF upload."""

__version__ = "0.1.0"
