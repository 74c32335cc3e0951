"""TalentFlow ATS core: offer salary breakdowns, candidate records, email templates."""

__version__ = "0.1.0"
