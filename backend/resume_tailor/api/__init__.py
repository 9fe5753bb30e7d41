from resume_tailor.api import (
    tailor_routes,
    cover_letter_routes,
    jobs_routes,
)

__all__ = [
    "tailor_routes",
    "cover_letter_routes",
    "jobs_routes",
]
