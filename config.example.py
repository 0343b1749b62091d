# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "PMTRACKER_APP_NAME": "App display name (default: pm-tracker).",
    "PMTRACKER_LOG_LEVEL": "Console logging level (default: INFO).",
    "PMTRACKER_LOG_TO_FILE": "Also write <data_dir>/pm_tracker.log (true/false, default: true).",
    # Paths (gitignored)
    "PMTRACKER_DATA_DIR": "Local data directory (default: .local/pm_tracker).",
    "PMTRACKER_STORE_PATH": "Key-value store SQLite path (default: <data_dir>/store.sqlite3).",
    "PMTRACKER_BACKUP_DIR": "Where /export writes backups (default: <data_dir>/backups).",
}
