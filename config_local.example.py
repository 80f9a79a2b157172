# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Only the names below are read; everything else comes from env / .env.
"""

# Example: exact-case search
# CASE_SENSITIVE_SEARCH = True

# Example: quieter console output
# SHOW_TIMESTAMPS = False
