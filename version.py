"""
version.py — INSTALLWIZ
========================
Single source of truth for the version number.
Used by:
  - logging banner in main.py
  - pyproject.toml (kept in sync by hand)
"""

APP_NAME = "INSTALLWIZ"
VERSION  = "1.0.0"
BUILD    = "2026.10.19"
