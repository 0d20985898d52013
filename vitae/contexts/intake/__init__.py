"""
Intake Context

Responsibilities:
- Loads resume sections from YAML data files
- Overlays per-language translations onto the base data
- Detects which languages are available

Owns: ResumeData model, data directory layout
Never: Knows about templates or output formats
"""

from vitae.contexts.intake.loader import detect_languages, load_resume_data
from vitae.contexts.intake.resume_data_structure import (
    BasicData,
    Certificate,
    Education,
    Entity,
    Job,
    Logo,
    ProfessionalData,
    ResumeData,
    ResumeDataError,
    Skill,
)

__all__ = [
    "load_resume_data",
    "detect_languages",
    "ResumeData",
    "ResumeDataError",
    "BasicData",
    "ProfessionalData",
    "Job",
    "Entity",
    "Logo",
    "Certificate",
    "Education",
    "Skill",
]
