from linkedin_jobs.utils.text import normalize_whitespace

__all__ = ["normalize_whitespace"]
