"""SaveJobs: named, repeatable directory-to-directory backup jobs."""

__version__ = "0.1.0"
