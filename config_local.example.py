# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for everything else. Only the names below are read.
"""

# Example: quieter console
# LOG_LEVEL = "WARNING"

# Example: keep backups on a synced drive
# BACKUP_DIR = "~/Dropbox/pm-backups"
