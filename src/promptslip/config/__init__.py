"""Configuration for promptslip."""

from .settings import Settings, QRSettings, get_settings
from .paper import PaperProfile, PAPER_58MM, PAPER_80MM, PAPER_PROFILES, get_paper_profile

__all__ = [
    "Settings",
    "QRSettings",
    "get_settings",
    "PaperProfile",
    "PAPER_58MM",
    "PAPER_80MM",
    "PAPER_PROFILES",
    "get_paper_profile",
]
